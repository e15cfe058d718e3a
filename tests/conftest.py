"""Shared fixtures for the BizMap client tests."""
import asyncio
from typing import Any, AsyncIterator, Dict, List, Optional, Tuple

import pytest

from bizmap.config import Settings
from bizmap.services.bizmap_client import BizMapClient

BASE_URL = "http://bizmap.test/api/v1/"


class CallbackRecorder:
    """Collects on_success/on_error invocations of a client operation."""

    def __init__(self) -> None:
        self.successes: List[Any] = []
        self.errors: List[Tuple[int, str]] = []
        self._done: Optional[asyncio.Event] = None

    @property
    def done(self) -> asyncio.Event:
        if self._done is None:
            self._done = asyncio.Event()
        return self._done

    @property
    def call_count(self) -> int:
        return len(self.successes) + len(self.errors)

    def on_success(self, *args: Any) -> None:
        self.successes.append(args[0] if args else None)
        self.done.set()

    def on_error(self, status_code: int, message: str) -> None:
        self.errors.append((status_code, message))
        self.done.set()

    async def wait(self, timeout: float = 2.0) -> None:
        await asyncio.wait_for(self.done.wait(), timeout)


@pytest.fixture
def settings() -> Settings:
    return Settings(base_url=BASE_URL, request_timeout=5.0)


@pytest.fixture
def recorder() -> CallbackRecorder:
    return CallbackRecorder()


@pytest.fixture
async def client(settings: Settings) -> AsyncIterator[BizMapClient]:
    bizmap_client = BizMapClient(settings=settings)
    yield bizmap_client
    await bizmap_client.aclose()


@pytest.fixture
def user_json() -> Dict[str, Any]:
    return {
        "id": "u-1",
        "username": "maria",
        "email": "maria@example.com",
        "fullName": "María Quispe",
        "phone": "+51 999 888 777",
        "isActive": True,
    }


@pytest.fixture
def business_json() -> Dict[str, Any]:
    return {
        "id": "b-1",
        "ownerId": "u-9",
        "name": "TecnoLima",
        "category": "Electrónica",
        "address": "Av. Arequipa 1234, Lima",
        "location": {"latitude": -12.0464, "longitude": -77.0428},
        "rating": 4.6,
        "totalReviews": 128,
        "isVerified": True,
        "images": ["https://cdn.example.com/b-1.jpg"],
        "createdAt": 1700000000,
        "distanceMeters": 850.5,
    }


@pytest.fixture
def product_json() -> Dict[str, Any]:
    return {
        "id": "p-1",
        "businessId": "b-1",
        "name": "Laptop 14\"",
        "price": 1899.9,
        "category": "Electrónica",
        "stockQuantity": 4,
    }
