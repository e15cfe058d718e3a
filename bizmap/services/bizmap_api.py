"""
Endpoint definitions of the BizMap backend.

One coroutine per remote endpoint: it sends a single request over the shared
``httpx.AsyncClient`` and decodes the body into the matching model. Nothing is
caught here; transport, status and decode errors propagate to the caller.
"""
from typing import Any, Dict, List, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, TypeAdapter

from bizmap.models.auth import AuthResult, Credentials, RegisterRequest, User
from bizmap.models.catalog import Business, Product, ProductWithBusiness
from bizmap.models.history import SearchHistoryEntry, UserRecommendations

ModelT = TypeVar("ModelT", bound=BaseModel)

_business_list = TypeAdapter(List[Business])
_product_list = TypeAdapter(List[Product])
_product_hit_list = TypeAdapter(List[ProductWithBusiness])
_history_list = TypeAdapter(List[SearchHistoryEntry])


def _segment(value: str) -> str:
    """Escape a resource id so it stays a single path segment."""
    if value in (".", ".."):
        raise ValueError(f"Invalid resource id: {value!r}")
    return quote(value, safe="")


class BizMapApi:
    """HTTP contract of the BizMap REST API."""

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self.http_client = http_client

    async def _send(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        response = await self.http_client.request(method, path, params=params, json=json)
        response.raise_for_status()
        return response

    async def _get_model(self, path: str, model: Type[ModelT]) -> ModelT:
        response = await self._send("GET", path)
        return model.model_validate_json(response.content)

    # ========== Auth ==========

    async def login(self, credentials: Credentials) -> AuthResult:
        response = await self._send("POST", "auth/login", json=credentials.to_wire())
        return AuthResult.model_validate_json(response.content)

    async def register(self, request: RegisterRequest) -> None:
        await self._send("POST", "auth/register", json=request.to_wire())

    async def logout(self) -> None:
        await self._send("POST", "auth/logout")

    async def get_profile(self) -> User:
        return await self._get_model("auth/profile", User)

    # ========== Businesses ==========

    async def search_businesses(self, params: Dict[str, Any]) -> List[Business]:
        """Search businesses; ``params`` come from ``build_search_params``."""
        response = await self._send("GET", "businesses/search", params=params)
        return _business_list.validate_json(response.content)

    async def get_business_by_id(self, business_id: str) -> Business:
        return await self._get_model(f"businesses/{_segment(business_id)}", Business)

    async def get_business_products(self, business_id: str) -> List[Product]:
        response = await self._send("GET", f"businesses/{_segment(business_id)}/products")
        return _product_list.validate_json(response.content)

    # ========== Products ==========

    async def search_products(self, params: Dict[str, Any]) -> List[ProductWithBusiness]:
        """Search products; ``params`` come from ``build_search_params``."""
        response = await self._send("GET", "products/search", params=params)
        return _product_hit_list.validate_json(response.content)

    async def get_product_by_id(self, product_id: str) -> Product:
        return await self._get_model(f"products/{_segment(product_id)}", Product)

    # ========== History and recommendations ==========

    async def get_search_history(self, limit: int = 20) -> List[SearchHistoryEntry]:
        response = await self._send("GET", "history/search", params={"limit": limit})
        return _history_list.validate_json(response.content)

    async def get_recommendations(self) -> UserRecommendations:
        return await self._get_model("recommendations", UserRecommendations)

    async def clear_search_history(self) -> None:
        await self._send("DELETE", "history/search")
