"""
Uniform error shape for every failed BizMap call.

Whatever went wrong (connection refused, timeout, 4xx/5xx, a body that does not
match the expected model) the caller only ever sees a status code and a message.
Protocol failures keep their HTTP status; everything else is reported as ``0``.
"""
from typing import Any, Dict, Optional

import httpx

NO_STATUS_CODE = 0
UNKNOWN_ERROR_MESSAGE = "unknown error"

# Keys a BizMap (or proxy) error body may carry the human readable message in
_MESSAGE_KEYS = ("message", "error", "detail")
_CODE_KEYS = ("code", "error_code", "errorCode")


class ApiError(Exception):
    """
    A classified failure.

    ``status_code`` is 0 when no HTTP status applies. ``error_code`` is the
    application specific code of the error body, when the server sent one.
    """

    def __init__(self, status_code: int, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.error_code = error_code

    def __repr__(self) -> str:
        return (
            f"ApiError(status_code={self.status_code}, message={self.message!r}, "
            f"error_code={self.error_code!r})"
        )


def _error_body(response: httpx.Response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _first_text(body: Dict[str, Any], keys) -> Optional[str]:
    for key in keys:
        value = body.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


def _error_code(body: Dict[str, Any]) -> Optional[str]:
    for key in _CODE_KEYS:
        value = body.get(key)
        if isinstance(value, bool) or value is None:
            continue
        if isinstance(value, (str, int)) and str(value).strip():
            return str(value)
    return None


def classify_error(exc: BaseException) -> ApiError:
    """
    Reduce any failure to an ApiError.

    Args:
        exc: Exception raised while sending the request or decoding the response

    Returns:
        ApiError with the HTTP status (or 0) and the best available message
    """
    if isinstance(exc, ApiError):
        return exc

    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        code = response.status_code
        body = _error_body(response)
        message = _first_text(body, _MESSAGE_KEYS) or response.reason_phrase or f"HTTP {code}"
        return ApiError(code, message, _error_code(body))

    message = str(exc).strip() or UNKNOWN_ERROR_MESSAGE
    return ApiError(NO_STATUS_CODE, message)
