"""Search filter model shared by product and business searches."""
from typing import Optional

from pydantic import BaseModel, Field

from bizmap.models.location import GeoLocation

NO_PRICE_BOUND = -1.0
DEFAULT_RADIUS_METERS = 5000


class SearchFilter(BaseModel):
    """
    Caller-side description of a search.

    Every field except ``query`` is optional. A location of (0.0, 0.0) means
    "no location" and a negative price means "no bound"; see
    ``bizmap.utils.query_params.build_search_params`` for the exact rules.
    """
    query: str = Field(..., description="Free text search query")

    # Location
    location: Optional[GeoLocation] = Field(None, description="Search center")
    radius_meters: int = Field(
        DEFAULT_RADIUS_METERS, description="Search radius in meters, used only with a center"
    )

    # Price bounds (products only)
    min_price: Optional[float] = Field(NO_PRICE_BOUND, description="Minimum price, -1 for none")
    max_price: Optional[float] = Field(NO_PRICE_BOUND, description="Maximum price, -1 for none")

    category: Optional[str] = Field(None, description="Category filter")

    # Pagination
    limit: int = Field(20, description="Maximum number of results")
    offset: int = Field(0, description="Number of results to skip")
