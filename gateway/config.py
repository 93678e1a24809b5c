"""Runtime configuration for the gateway.

Architectural role:
    Centralizes model selection, credential lookup, inline-size ceiling, and
    server binding into one immutable value built once at startup and passed
    explicitly to the HTTP adapter, pipeline, and client.

Resolution:
    `GatewayConfig.from_env()` reads the process environment after
    `load_dotenv()` has merged a local `.env` file.

Relevant environment variables:
    - `GEMINI_API_KEY` (fallbacks: `GOOGLE_API_KEY`, `API_KEY`)
    - `GEMINI_MODEL`
    - `GEMINI_API_BASE_URL`
    - `MAX_INLINE_BYTES`
    - `REQUEST_TIMEOUT`
    - `HOST`, `PORT`
    - `DEBUG`
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv


DEFAULT_MODEL = "gemini-2.5-flash"
GEMINI_API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

# Inline-data ceiling (4MB in bytes).
MAX_INLINE_BYTES = 4 * 1024 * 1024

API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")


def load_api_key(env_vars=API_KEY_ENV_VARS):
    """Return the first non-empty API key from `env_vars`, or `None`."""
    for name in env_vars:
        value = os.getenv(name, "").strip()
        if value:
            return value
    return None


@dataclass(frozen=True)
class GatewayConfig:
    """Immutable process-wide settings.

    Attributes:
        model: Gemini model identifier used for every call.
        api_key: Upstream credential; `None` makes every call fail upstream.
        max_inline_bytes: Inclusive ceiling for inline uploads.
        api_base_url: Base URL of the models collection.
        request_timeout: Per-call timeout in seconds.
        host: Bind address for the HTTP server.
        port: Bind port for the HTTP server.
        debug: Enables debug-level request logging.
    """

    model: str = DEFAULT_MODEL
    api_key: str | None = field(default=None, repr=False)
    max_inline_bytes: int = MAX_INLINE_BYTES
    api_base_url: str = GEMINI_API_BASE_URL
    request_timeout: float = 120.0
    host: str = "0.0.0.0"
    port: int = 3000
    debug: bool = False

    @classmethod
    def from_env(cls) -> "GatewayConfig":
        """Build a config from `.env` plus the process environment."""
        load_dotenv()

        return cls(
            model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL).strip() or DEFAULT_MODEL,
            api_key=load_api_key(),
            max_inline_bytes=int(os.getenv("MAX_INLINE_BYTES", str(MAX_INLINE_BYTES))),
            api_base_url=os.getenv("GEMINI_API_BASE_URL", GEMINI_API_BASE_URL).rstrip("/"),
            request_timeout=float(os.getenv("REQUEST_TIMEOUT", "120")),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            debug=os.getenv("DEBUG") == "true",
        )

    def generate_url(self, model: str | None = None) -> str:
        """Return the `generateContent` endpoint for `model` (default: configured)."""
        return f"{self.api_base_url}/{model or self.model}:generateContent"
