"""Python client for the BizMap marketplace API."""

__version__ = "1.0.0"

from bizmap.models.auth import AuthResult, Credentials, RegisterRequest, User
from bizmap.models.catalog import Business, Product, ProductWithBusiness
from bizmap.models.history import SearchHistoryEntry, UserRecommendations
from bizmap.models.location import GeoLocation
from bizmap.models.search import SearchFilter
from bizmap.services.auth_token import AuthTokenHolder, BearerTokenAuth
from bizmap.services.bizmap_client import BizMapClient
from bizmap.utils.errors import ApiError

__all__ = [
    "ApiError",
    "AuthResult",
    "AuthTokenHolder",
    "BearerTokenAuth",
    "BizMapClient",
    "Business",
    "Credentials",
    "GeoLocation",
    "Product",
    "ProductWithBusiness",
    "RegisterRequest",
    "SearchFilter",
    "SearchHistoryEntry",
    "User",
    "UserRecommendations",
]
