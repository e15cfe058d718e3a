"""Pydantic models for search history and recommendations."""
from typing import List

from pydantic import Field

from bizmap.models.base import BizMapRecord
from bizmap.models.location import GeoLocation


class SearchHistoryEntry(BizMapRecord):
    """A past search made by the current user."""
    id: str
    user_id: str
    query: str
    category: str = ""
    location: GeoLocation = Field(default_factory=GeoLocation)
    created_at: int = 0


class UserRecommendations(BizMapRecord):
    """Popular searches and categories for the current user."""
    popular_searches: List[str] = Field(default_factory=list)
    popular_categories: List[str] = Field(default_factory=list)
