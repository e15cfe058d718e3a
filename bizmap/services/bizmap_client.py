"""
Callback based client for the BizMap backend.

Every operation is scheduled as an asyncio task on the running event loop and
returns immediately. When the request finishes, exactly one of the two
callbacks is queued back on the loop:

- ``on_success(result)`` (``on_success()`` for operations without a payload)
- ``on_error(status_code, message)`` where ``status_code`` is the HTTP status,
  or ``0`` for transport and decode failures

The returned task resolves to the payload (``None`` after an error), so asyncio
callers can await it instead of waiting for the callback. Operations must be
called from the thread running the event loop.
"""
import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Optional, Set, TypeVar

import httpx

from bizmap.config import Settings, settings as default_settings
from bizmap.models.auth import AuthResult, Credentials, RegisterRequest, User
from bizmap.models.catalog import Business, Product, ProductWithBusiness
from bizmap.models.history import SearchHistoryEntry, UserRecommendations
from bizmap.models.search import SearchFilter
from bizmap.services.auth_token import AuthTokenHolder, BearerTokenAuth
from bizmap.services.bizmap_api import BizMapApi
from bizmap.utils.errors import classify_error
from bizmap.utils.query_params import build_search_params

logger = logging.getLogger(__name__)

T = TypeVar("T")

SuccessCallback = Callable[..., None]
ErrorCallback = Callable[[int, str], None]


def _normalize_base_url(url: str) -> str:
    return url if url.endswith("/") else f"{url}/"


class BizMapClient:
    """Asynchronous client for the BizMap REST API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        settings: Optional[Settings] = None,
        token_holder: Optional[AuthTokenHolder] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Args:
            base_url: Backend root, e.g. ``http://localhost:8080/api/v1``.
                Defaults to ``settings.base_url``.
            settings: Configuration, defaults to the global settings
            token_holder: Shared token state, a fresh holder is created if omitted
            transport: Optional httpx transport (tests, ASGI apps)
        """
        self.settings = settings or default_settings
        self.base_url = _normalize_base_url(base_url or self.settings.base_url)
        self.token_holder = token_holder or AuthTokenHolder()

        self.http_client = httpx.AsyncClient(
            base_url=self.base_url,
            auth=BearerTokenAuth(self.token_holder),
            timeout=httpx.Timeout(self.settings.request_timeout),
            headers={
                "Accept": "application/json",
                "User-Agent": self.settings.user_agent,
            },
            event_hooks={
                "request": [self._log_request],
                "response": [self._log_response],
            },
            transport=transport,
        )
        self.api = BizMapApi(self.http_client)

        self._tasks: Set[asyncio.Task] = set()
        self._destroyed = False
        self._close_task: Optional[asyncio.Task] = None

    # ========== Configuration ==========

    def set_base_url(self, url: str) -> None:
        """Point subsequent requests at another backend."""
        self.base_url = _normalize_base_url(url)
        self.http_client.base_url = self.base_url
        logger.info(f"Base URL set to {self.base_url}")

    def set_auth_token(self, token: str) -> None:
        self.token_holder.set_token(token)
        logger.info("Auth token set")

    def clear_auth_token(self) -> None:
        self.token_holder.clear()
        logger.info("Auth token cleared")

    @property
    def auth_token(self) -> Optional[str]:
        return self.token_holder.current_token()

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    # ========== Auth ==========

    def login(
        self,
        username: str,
        password: str,
        on_success: Callable[[AuthResult], None],
        on_error: ErrorCallback,
    ) -> Optional["asyncio.Task[Optional[AuthResult]]"]:
        """
        Log in with username and password.

        The returned tokens are handed to ``on_success`` only; call
        ``set_auth_token`` to use the access token for later requests.
        """
        credentials = Credentials(username=username, password=password)
        return self._launch("login", lambda: self.api.login(credentials), on_success, on_error)

    def register(
        self,
        username: str,
        email: str,
        password: str,
        full_name: str,
        on_success: Callable[[], None],
        on_error: ErrorCallback,
        phone: Optional[str] = None,
    ) -> Optional["asyncio.Task[None]"]:
        request = RegisterRequest(
            username=username,
            email=email,
            password=password,
            full_name=full_name,
            phone=phone,
        )
        return self._launch("register", lambda: self.api.register(request), on_success, on_error)

    def logout(
        self,
        on_success: Callable[[], None],
        on_error: ErrorCallback,
    ) -> Optional["asyncio.Task[None]"]:
        """Log out remotely, then drop the local token. A failed logout keeps it."""

        async def _logout() -> None:
            await self.api.logout()
            self.clear_auth_token()

        return self._launch("logout", _logout, on_success, on_error)

    def get_profile(
        self,
        on_success: Callable[[User], None],
        on_error: ErrorCallback,
    ) -> Optional["asyncio.Task[Optional[User]]"]:
        return self._launch("get_profile", self.api.get_profile, on_success, on_error)

    # ========== Products ==========

    def search_products(
        self,
        search_filter: SearchFilter,
        on_success: Callable[[List[ProductWithBusiness]], None],
        on_error: ErrorCallback,
    ) -> Optional["asyncio.Task[Optional[List[ProductWithBusiness]]]"]:
        """Search products near an optional location within optional price bounds."""
        params = build_search_params(search_filter, include_price=True)
        return self._launch(
            "search_products", lambda: self.api.search_products(params), on_success, on_error
        )

    def get_product_by_id(
        self,
        product_id: str,
        on_success: Callable[[Product], None],
        on_error: ErrorCallback,
    ) -> Optional["asyncio.Task[Optional[Product]]"]:
        return self._launch(
            "get_product_by_id", lambda: self.api.get_product_by_id(product_id), on_success, on_error
        )

    # ========== Businesses ==========

    def search_businesses(
        self,
        search_filter: SearchFilter,
        on_success: Callable[[List[Business]], None],
        on_error: ErrorCallback,
    ) -> Optional["asyncio.Task[Optional[List[Business]]]"]:
        """Search businesses. Price bounds of the filter are ignored."""
        params = build_search_params(search_filter, include_price=False)
        return self._launch(
            "search_businesses", lambda: self.api.search_businesses(params), on_success, on_error
        )

    def get_business_by_id(
        self,
        business_id: str,
        on_success: Callable[[Business], None],
        on_error: ErrorCallback,
    ) -> Optional["asyncio.Task[Optional[Business]]"]:
        return self._launch(
            "get_business_by_id", lambda: self.api.get_business_by_id(business_id), on_success, on_error
        )

    def get_business_products(
        self,
        business_id: str,
        on_success: Callable[[List[Product]], None],
        on_error: ErrorCallback,
    ) -> Optional["asyncio.Task[Optional[List[Product]]]"]:
        return self._launch(
            "get_business_products",
            lambda: self.api.get_business_products(business_id),
            on_success,
            on_error,
        )

    # ========== History and recommendations ==========

    def get_search_history(
        self,
        on_success: Callable[[List[SearchHistoryEntry]], None],
        on_error: ErrorCallback,
        limit: int = 20,
    ) -> Optional["asyncio.Task[Optional[List[SearchHistoryEntry]]]"]:
        return self._launch(
            "get_search_history", lambda: self.api.get_search_history(limit), on_success, on_error
        )

    def get_recommendations(
        self,
        on_success: Callable[[UserRecommendations], None],
        on_error: ErrorCallback,
    ) -> Optional["asyncio.Task[Optional[UserRecommendations]]"]:
        return self._launch("get_recommendations", self.api.get_recommendations, on_success, on_error)

    def clear_search_history(
        self,
        on_success: Callable[[], None],
        on_error: ErrorCallback,
    ) -> Optional["asyncio.Task[None]"]:
        return self._launch("clear_search_history", self.api.clear_search_history, on_success, on_error)

    # ========== Lifecycle ==========

    def destroy(self) -> None:
        """
        Cancel all in-flight operations and close the HTTP client.

        No callback is delivered after this returns, including callbacks that
        were already queued on the loop. Without a running loop the connection
        pool cannot be closed here; await ``aclose()`` instead.
        """
        if self._cancel_pending() is None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("destroy() called without a running event loop, use aclose() to close connections")
            return
        self._close_task = loop.create_task(self.http_client.aclose())

    async def aclose(self) -> None:
        """Destroy the client and wait until its connections are closed."""
        pending = self._cancel_pending()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        if self._close_task is not None:
            await self._close_task
        await self.http_client.aclose()

    def _cancel_pending(self) -> Optional[List[asyncio.Task]]:
        """Mark the client destroyed and cancel its tasks; None if already destroyed."""
        if self._destroyed:
            return None
        self._destroyed = True

        pending = list(self._tasks)
        for task in pending:
            task.cancel()
        logger.info(f"Client destroyed, {len(pending)} pending operation(s) cancelled")
        return pending

    async def __aenter__(self) -> "BizMapClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # ========== Dispatch ==========

    def _launch(
        self,
        operation: str,
        call: Callable[[], Awaitable[T]],
        on_success: SuccessCallback,
        on_error: ErrorCallback,
    ) -> Optional["asyncio.Task[Optional[T]]"]:
        if self._destroyed:
            logger.warning(f"{operation} called on a destroyed client, ignoring")
            return None

        loop = asyncio.get_running_loop()
        task = loop.create_task(self._run(operation, call, on_success, on_error))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(
        self,
        operation: str,
        call: Callable[[], Awaitable[T]],
        on_success: SuccessCallback,
        on_error: ErrorCallback,
    ) -> Optional[T]:
        try:
            result = await call()
        except asyncio.CancelledError:
            logger.debug(f"{operation} cancelled")
            raise
        except Exception as exc:
            error = classify_error(exc)
            suffix = f" [{error.error_code}]" if error.error_code else ""
            logger.error(f"{operation} failed: {error.status_code} - {error.message}{suffix}")
            self._deliver(on_error, error.status_code, error.message)
            return None

        if result is None:
            self._deliver(on_success)
        else:
            self._deliver(on_success, result)
        return result

    def _deliver(self, callback: Callable[..., None], *args: Any) -> None:
        asyncio.get_running_loop().call_soon(self._invoke, callback, args)

    def _invoke(self, callback: Callable[..., None], args: tuple) -> None:
        if self._destroyed:
            return
        callback(*args)

    # ========== HTTP logging ==========

    async def _log_request(self, request: httpx.Request) -> None:
        logger.debug(f"--> {request.method} {request.url}")
        if self.settings.log_http_bodies and request.content:
            logger.debug(request.content.decode("utf-8", errors="replace"))

    async def _log_response(self, response: httpx.Response) -> None:
        request = response.request
        logger.debug(f"<-- {response.status_code} {request.method} {request.url}")
        if self.settings.log_http_bodies:
            await response.aread()
            logger.debug(response.text)
