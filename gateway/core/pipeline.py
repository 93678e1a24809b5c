"""Request pipeline shared by every gateway endpoint.

Architectural role:
    Replaces per-endpoint handler copies with one parameterized sequence driven by
    a dispatch table of `EndpointSpec` entries.

Control-flow model:
    1. Validate required fields in the endpoint's order (`ValidationError`).
    2. Assemble contents: bare prompt string or ordered part list (`SizeError`).
    3. Await the generation client without blocking other requests.
    4. Extract text from the result and wrap it under the endpoint success key.

Interaction surface:
    - Assembly: `gateway.multimodal.assembler`.
    - Upstream: any object implementing `GenerationClient`.
    - Extraction: `gateway.llm.extractor.extract_text`.

Error handling strategy:
    Validation problems are raised before the upstream call. Upstream failures
    propagate unchanged to the HTTP adapter, which owns the status mapping.
    Extraction never fails.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from gateway.config import GatewayConfig
from gateway.errors import ValidationError
from gateway.llm.extractor import extract_text
from gateway.multimodal.assembler import UploadedFile, assemble, assemble_text, to_contents


logger = logging.getLogger(__name__)

PROMPT_FIELD = "prompt"
PROMPT_REQUIRED_MESSAGE = 'The "prompt" field is required.'
DOCUMENT_SUMMARY_PREFIX = "Ringkas dokumen berikut: "
AUDIO_TRANSCRIPTION_PREFIX = "Transkrip audio berikut: "
FILE_API_HINT = "Please use the File API for larger files."


class GenerationClient(Protocol):
    """Minimal async interface required from the upstream client."""

    async def agenerate_content(self, model: str, contents: Any) -> Any:
        """Run one generation call and return the raw result."""
        ...


@dataclass(frozen=True)
class EndpointSpec:
    """Per-endpoint pipeline configuration.

    Attributes:
        path: HTTP route path.
        success_key: JSON key wrapping the extracted text on success.
        file_field: Multipart field carrying the upload, or `None` for JSON input.
        file_label: Human-readable file kind used in the missing-file message.
        file_required: Reject requests without an upload.
        prompt_required: Reject requests without a non-empty prompt.
        prompt_prefix: Text prepended to the prompt in the text part.
        bare_prompt: Send the prompt string itself as `contents`.
        validate_file_first: Check the file before the prompt.
        size_hint: Extra sentence appended to the oversized-file message.
        expose_upstream_message: Surface upstream error messages on HTTP 500.
        fallback_error: HTTP 500 message when no upstream message is surfaced.
        description: Operator-facing label used in log lines.
    """

    path: str
    success_key: str = "result"
    file_field: Optional[str] = None
    file_label: Optional[str] = None
    file_required: bool = False
    prompt_required: bool = True
    prompt_prefix: Optional[str] = None
    bare_prompt: bool = False
    validate_file_first: bool = False
    size_hint: Optional[str] = None
    expose_upstream_message: bool = True
    fallback_error: str = "Internal server error."
    description: str = "generation"

    @property
    def missing_file_message(self) -> str:
        return f'{(self.file_label or "upload").capitalize()} file named "{self.file_field}" is required.'


ENDPOINTS: tuple[EndpointSpec, ...] = (
    EndpointSpec(
        path="/generate-text",
        bare_prompt=True,
        fallback_error="Internal server error.",
        description="text generation",
    ),
    EndpointSpec(
        path="/gemini/generate",
        success_key="response",
        file_field="file",
        expose_upstream_message=False,
        fallback_error="Internal server error while processing the request.",
        description="multimodal generation",
    ),
    EndpointSpec(
        path="/generate-from-image",
        file_field="image",
        file_label="image",
        file_required=True,
        validate_file_first=True,
        fallback_error="Internal server error during image generation.",
        description="image analysis",
    ),
    EndpointSpec(
        path="/generate-from-document",
        file_field="document",
        file_label="document",
        file_required=True,
        prompt_required=False,
        prompt_prefix=DOCUMENT_SUMMARY_PREFIX,
        fallback_error="Internal server error during document processing.",
        description="document analysis",
    ),
    EndpointSpec(
        path="/generate-from-audio",
        file_field="audio",
        file_label="audio",
        file_required=True,
        prompt_required=False,
        prompt_prefix=AUDIO_TRANSCRIPTION_PREFIX,
        size_hint=FILE_API_HINT,
        fallback_error="Internal server error during audio processing.",
        description="audio analysis",
    ),
)


def validate_request(spec: EndpointSpec, prompt: Optional[str], file: Optional[UploadedFile]) -> None:
    """Raise `ValidationError` for the first missing required field."""
    checks = [_check_prompt, _check_file]
    if spec.validate_file_first:
        checks.reverse()

    for check in checks:
        check(spec, prompt, file)


def _check_prompt(spec: EndpointSpec, prompt: Optional[str], file: Optional[UploadedFile]) -> None:
    if spec.prompt_required and not prompt:
        raise ValidationError(PROMPT_REQUIRED_MESSAGE)


def _check_file(spec: EndpointSpec, prompt: Optional[str], file: Optional[UploadedFile]) -> None:
    if spec.file_required and file is None:
        raise ValidationError(spec.missing_file_message)


def build_contents(spec: EndpointSpec, config: GatewayConfig, prompt: Optional[str], file: Optional[UploadedFile]):
    """Assemble the `contents` value for the endpoint's call shape."""
    if spec.bare_prompt:
        return assemble_text(prompt)

    if file is not None:
        logger.info("Processing file: %s, MIME: %s", file.filename, file.mime_type)

    parts = assemble(
        prompt,
        file=file,
        prompt_prefix=spec.prompt_prefix,
        max_inline_bytes=config.max_inline_bytes,
        size_hint=spec.size_hint,
    )
    return to_contents(parts)


async def run_pipeline(
    spec: EndpointSpec,
    config: GatewayConfig,
    client: GenerationClient,
    prompt: Optional[str] = None,
    file: Optional[UploadedFile] = None,
) -> dict:
    """
    Run validate -> assemble -> call -> extract for one request.

    Returns:
        `{spec.success_key: extracted_text}`.

    Failure scenarios:
        - `ValidationError`/`SizeError` before any upstream call.
        - Upstream exceptions propagate unchanged.
    """
    validate_request(spec, prompt, file)

    contents = build_contents(spec, config, prompt, file)

    logger.info("Calling Gemini API for %s (model=%s)", spec.description, config.model)
    if config.debug and not isinstance(contents, str):
        logger.debug("Contents for %s: %d part(s)", spec.path, len(contents))

    result = await client.agenerate_content(config.model, contents)

    return {spec.success_key: extract_text(result)}
