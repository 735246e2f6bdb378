from typing import Optional


class ProxyError(Exception):
    """
    Base error for proxy routes. Rendered as the uniform
    {"success": false, "error": ..., "details": ...} envelope.
    """
    status_code = 500

    def __init__(self, error: str, details: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(error)
        self.error = error
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_envelope(self) -> dict:
        return {"success": False, "error": self.error, "details": self.details}


class Unauthorized(ProxyError):
    status_code = 401


class ValidationError(ProxyError):
    status_code = 400


class UpstreamError(ProxyError):
    """The backend answered with a non-2xx status; its status is kept."""


class TransportError(ProxyError):
    status_code = 500


class ApiError(Exception):
    """Raised by the client library when a call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message or "Request failed")
        self.message = message or "Request failed"
        self.status_code = status_code
