"""
Server entrypoint for the Gemini gateway.

Architectural role:
- Configures process logging.
- Builds the immutable `GatewayConfig` once from `.env` and the environment.
- Creates the FastAPI app and serves it with uvicorn.

Side effects:
- Binds `HOST:PORT` (defaults `0.0.0.0:3000`).
- Logs a warning when no API key is configured; requests still reach the
  pipeline and fail upstream with HTTP 500.
"""

import logging
import os

import uvicorn

from gateway.api.http_api import create_app
from gateway.config import GatewayConfig


logger = logging.getLogger(__name__)


def configure_logging(debug: bool = False) -> None:
    level = logging.DEBUG if debug else os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main():
    """Run the HTTP server until interrupted."""
    config = GatewayConfig.from_env()
    configure_logging(config.debug)

    if not config.api_key:
        logger.warning("No Gemini API key configured (GEMINI_API_KEY / GOOGLE_API_KEY / API_KEY)")

    app = create_app(config)

    logger.info("Server ready at http://localhost:%s", config.port)
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    main()
