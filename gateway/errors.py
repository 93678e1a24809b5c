"""Error taxonomy for the gateway.

Architectural role:
    Shared by the pipeline (which raises) and the HTTP adapter (which maps each
    kind to a status code).

Mapping:
    - `ValidationError` (and `SizeError`) -> HTTP 400, no upstream call made.
    - `UpstreamError` -> HTTP 500, logged with full detail.
"""


MIB = 1024 * 1024


class GatewayError(Exception):
    """Base class for errors raised by gateway components."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GatewayError):
    """Client-side input problem: missing field or oversized file."""


class SizeError(ValidationError):
    """Uploaded file exceeds the inline payload ceiling.

    Attributes:
        size: Actual byte length of the rejected upload.
        limit: Configured inline ceiling in bytes.
    """

    def __init__(self, size: int, limit: int, hint: str | None = None):
        message = (
            f"File too large ({size} bytes). Maximum size for inline upload is {limit} bytes"
        )
        if limit >= MIB and limit % MIB == 0:
            message += f" ({limit // MIB}MB)"
        message += "."
        if hint:
            message = f"{message} {hint}"
        super().__init__(message)
        self.size = size
        self.limit = limit


class UpstreamError(GatewayError):
    """Failure of the generation call (network, credentials, HTTP status, body).

    Attributes:
        status_code: Upstream HTTP status when one was received.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
