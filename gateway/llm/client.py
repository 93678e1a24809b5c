"""Gemini transport client for `generateContent` requests.

Architectural role:
    Executes the single upstream call of the gateway and returns the parsed JSON
    response untouched; text extraction is left to `gateway.llm.extractor`.

Model invocation flow:
    `pipeline.run_pipeline` -> `GeminiClient.agenerate_content(model, contents)`
    -> worker thread -> `generate_content` -> `requests` POST -> parsed dict.

Contents shapes:
    - bare string: wrapped as one user turn with a single text part.
    - list of parts (`TextPart`/`InlineBinaryPart`) or wire dicts: sent as one
      user turn with those parts, order preserved.

Retry behavior:
    No retry loop is implemented. Each call is attempted once with the configured
    timeout.

Failure handling model:
    Every failure (missing key, transport error, HTTP status, non-JSON body) is
    raised as `UpstreamError` with a provider-labeled message; the HTTP adapter
    logs it and maps it to status 500.
"""

import asyncio
import logging
from typing import Any, List, Union

import requests

from gateway.config import GatewayConfig
from gateway.errors import UpstreamError


logger = logging.getLogger(__name__)

PROVIDER_LABEL = "GEMINI"

Contents = Union[str, List[Any]]


def _build_http_error(err: requests.exceptions.RequestException) -> UpstreamError:
    """Build a provider-labeled `UpstreamError` from a request exception.

    Includes the upstream status code and the API's `error.message` when the
    response body carries one.
    """
    status_code = None
    detail = None
    response = getattr(err, "response", None)

    if response is not None:
        status_code = getattr(response, "status_code", None)
        try:
            detail = response.json().get("error", {}).get("message")
        except (ValueError, AttributeError):
            detail = None

    message = f"{PROVIDER_LABEL} HTTP ERROR"
    if status_code:
        message += f" ({status_code})"
    if detail:
        message += f": {detail}"
    elif not status_code:
        message += f": {err}"

    return UpstreamError(message, status_code=status_code)


def build_payload(contents: Contents) -> dict:
    """Map gateway `contents` onto the REST `generateContent` body."""
    if isinstance(contents, str):
        parts = [{"text": contents}]
    else:
        parts = [
            part.to_wire() if hasattr(part, "to_wire") else part
            for part in contents
        ]

    return {"contents": [{"role": "user", "parts": parts}]}


class GeminiClient:
    """REST client exposing `generate_content(model, contents)`.

    Each call issues its own `requests.post`, so no connection state is shared
    between the worker threads used by `agenerate_content`.

    Args:
        config: Gateway configuration (credential, base URL, timeout).
    """

    def __init__(self, config: GatewayConfig):
        self.config = config

    def generate_content(self, model: str, contents: Contents) -> dict:
        """Send one blocking `generateContent` call and return the parsed body."""
        if not self.config.api_key:
            raise UpstreamError(f"{PROVIDER_LABEL} API KEY NOT CONFIGURED")

        headers = {
            "x-goog-api-key": self.config.api_key,
            "Content-Type": "application/json",
        }

        try:
            response = requests.post(
                self.config.generate_url(model),
                headers=headers,
                json=build_payload(contents),
                timeout=self.config.request_timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as err:
            raise _build_http_error(err) from err

        try:
            return response.json()
        except ValueError as err:
            raise UpstreamError(f"{PROVIDER_LABEL} INVALID RESPONSE BODY") from err

    async def agenerate_content(self, model: str, contents: Contents) -> dict:
        """Awaitable `generate_content` that keeps the event loop free."""
        return await asyncio.to_thread(self.generate_content, model, contents)
