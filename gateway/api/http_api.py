"""
HTTP API adapter for the Gemini gateway.

Architectural role:
- Expose one POST route per entry of the pipeline dispatch table.
- Parse transport input (JSON body or multipart form) into a prompt and an
  optional in-memory upload.
- Delegate validation/assembly/generation to `gateway.core.pipeline.run_pipeline`.
- Map pipeline errors onto `{ "error": ... }` JSON responses.

Endpoint responsibilities:
- `POST /generate-text`: JSON `{ "prompt": ... }`, bare-string call.
- `POST /gemini/generate`: form `prompt` + optional `file`.
- `POST /generate-from-image`: form `prompt` + required `image`.
- `POST /generate-from-document`: optional form `prompt` + required `document`.
- `POST /generate-from-audio`: optional form `prompt` + required `audio`.
- `GET /health`: liveness probe with the configured model.

Error handling strategy:
- `ValidationError` (missing field, oversized upload) -> HTTP 400.
- Malformed bodies rejected by the form parser -> their own 4xx status.
- `UpstreamError` and any other exception -> logged with traceback, HTTP 500.
  The message is surfaced only when the endpoint allows it; otherwise the
  endpoint's generic fallback string is returned.

Side effects:
- One upstream call per valid request through the injected client.
- Uploaded files are held fully in memory for the request lifetime only.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException

from gateway.config import GatewayConfig
from gateway.core.pipeline import ENDPOINTS, PROMPT_FIELD, EndpointSpec, GenerationClient, run_pipeline
from gateway.errors import ValidationError
from gateway.llm.client import GeminiClient
from gateway.multimodal.assembler import UploadedFile


logger = logging.getLogger(__name__)


# ============================================================
# App Factory
# ============================================================

def create_app(config: GatewayConfig | None = None, client: GenerationClient | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Immutable gateway settings; resolved from the environment when omitted.
        client: Generation client; a `GeminiClient` over `config` when omitted.
    """
    config = config or GatewayConfig.from_env()
    client = client or GeminiClient(config)

    app = FastAPI(title="Gemini Gateway")
    app.state.config = config
    app.state.client = client

    for spec in ENDPOINTS:
        app.add_api_route(
            spec.path,
            _make_handler(spec),
            methods=["POST"],
            name=spec.description,
        )

    @app.get("/health")
    def health():
        return {"status": "ok", "model": config.model}

    return app


# ============================================================
# Request Parsing
# ============================================================

async def _read_json_prompt(request: Request):
    """Return `prompt` from a JSON body; malformed or absent bodies count as empty."""
    try:
        body = await request.json()
    except ValueError:
        body = {}

    if not isinstance(body, dict):
        body = {}

    return _as_prompt(body.get(PROMPT_FIELD))


async def _read_form(request: Request, spec: EndpointSpec):
    """Return `(prompt, upload)` from a multipart/urlencoded form."""
    form = await request.form()
    prompt = _as_prompt(form.get(PROMPT_FIELD))

    upload = form.get(spec.file_field) if spec.file_field else None
    if not isinstance(upload, UploadFile):
        return prompt, None

    try:
        data = await upload.read()
    finally:
        await upload.close()

    file = UploadedFile(
        data=data,
        filename=upload.filename or "",
        mime_type=upload.content_type or "application/octet-stream",
    )
    return prompt, file


def _as_prompt(value):
    # Only strings count as a prompt; booleans, numbers and containers do not.
    return value if isinstance(value, str) else None


# ============================================================
# Endpoint Handler
# ============================================================

def _make_handler(spec: EndpointSpec):
    """Create the route handler bound to one dispatch-table entry."""

    async def handler(request: Request):
        config: GatewayConfig = request.app.state.config
        client = request.app.state.client

        try:
            if spec.file_field is None:
                prompt, file = await _read_json_prompt(request), None
            else:
                prompt, file = await _read_form(request, spec)

            if config.debug:
                logger.debug(
                    "Incoming %s: prompt=%r file=%s",
                    spec.path,
                    prompt,
                    file.filename if file else None,
                )

            payload = await run_pipeline(spec, config, client, prompt=prompt, file=file)
            return payload

        except ValidationError as err:
            return JSONResponse(status_code=400, content={"error": err.message})

        except HTTPException as err:
            # Body parsing rejected by Starlette (bad multipart boundary, oversized field).
            return JSONResponse(status_code=err.status_code, content={"error": err.detail})

        except Exception as err:
            logger.exception("API error on %s", spec.path)
            return JSONResponse(status_code=500, content={"error": _error_message(spec, err)})

    handler.__name__ = "handle_" + spec.path.strip("/").replace("/", "_").replace("-", "_")
    return handler


def _error_message(spec: EndpointSpec, err: Exception) -> str:
    if spec.expose_upstream_message:
        message = getattr(err, "message", None) or str(err)
        if message:
            return message
    return spec.fallback_error
