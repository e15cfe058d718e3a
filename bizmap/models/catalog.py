"""Pydantic models for businesses and their products."""
from typing import List, Optional

from pydantic import Field

from bizmap.models.base import BizMapRecord
from bizmap.models.location import GeoLocation


class Business(BizMapRecord):
    """A business listed on BizMap."""
    id: str
    owner_id: str
    name: str
    description: str = ""
    category: str = ""
    phone: str = ""
    email: str = ""
    website: str = ""
    address: str = ""
    location: GeoLocation = Field(default_factory=GeoLocation)
    rating: float = 0.0
    total_reviews: int = 0
    is_verified: bool = False
    is_active: bool = True
    images: List[str] = Field(default_factory=list)
    created_at: int = 0
    updated_at: int = 0

    # Only present on geospatial searches
    distance_meters: Optional[float] = None


class Product(BizMapRecord):
    """A product offered by a business."""
    id: str
    business_id: str
    name: str
    description: str = ""
    price: float
    currency: str = "PEN"
    category: str = ""
    is_available: bool = True
    stock_quantity: int = 0
    images: List[str] = Field(default_factory=list)
    created_at: int = 0
    updated_at: int = 0


class ProductWithBusiness(BizMapRecord):
    """Product search hit together with the business selling it."""
    product: Product
    business: Business
    distance_meters: Optional[float] = None
