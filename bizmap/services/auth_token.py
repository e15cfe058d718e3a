"""Bearer token state and the httpx auth flow that applies it to requests."""
import threading
from typing import Generator, Optional

import httpx


class AuthTokenHolder:
    """
    Holds the bearer token of the current session.

    The token is written from the caller's side (``set_token``/``clear``) and
    read by every outbound request, possibly from another thread.
    """

    def __init__(self, token: Optional[str] = None) -> None:
        self._lock = threading.Lock()
        self._token = token

    def set_token(self, token: Optional[str]) -> None:
        with self._lock:
            self._token = token

    def clear(self) -> None:
        self.set_token(None)

    def current_token(self) -> Optional[str]:
        with self._lock:
            return self._token


class BearerTokenAuth(httpx.Auth):
    """Attach ``Authorization: Bearer <token>`` when a token is set."""

    def __init__(self, token_holder: AuthTokenHolder) -> None:
        self.token_holder = token_holder

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        # Read per request, the token may change between calls
        token = self.token_holder.current_token()
        if token is not None:
            request.headers["Authorization"] = f"Bearer {token}"
        yield request
