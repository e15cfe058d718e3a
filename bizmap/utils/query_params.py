"""
Translation of a SearchFilter into the query parameters the backend expects.

The backend treats missing parameters as "no filter", so anything the caller
left unset has to be dropped rather than sent with a placeholder value:

- ``latitude``/``longitude`` are sent only when the latitude is non-zero.
  A center at (0.0, 0.0) is therefore indistinguishable from no center.
- ``radius_meters`` is sent only when both coordinates are non-zero.
- ``min_price``/``max_price`` are sent only when ``>= 0``.
- ``category`` is sent only when it is non-blank.
- ``limit``/``offset`` are always sent.
"""
from typing import Any, Dict, Optional

from bizmap.models.search import SearchFilter


def _price_bound(value: Optional[float]) -> Optional[float]:
    if value is None or value < 0:
        return None
    return value


def build_search_params(search_filter: SearchFilter, include_price: bool = True) -> Dict[str, Any]:
    """
    Build the wire-level query parameters for a search.

    Args:
        search_filter: Caller supplied filter
        include_price: Whether price bounds apply (product search only)

    Returns:
        Mapping of parameter name to value, containing only surviving keys
    """
    params: Dict[str, Any] = {"q": search_filter.query}

    location = search_filter.location
    latitude = location.latitude if location else 0.0
    longitude = location.longitude if location else 0.0

    if latitude != 0.0:
        params["latitude"] = latitude
        params["longitude"] = longitude
    if latitude != 0.0 and longitude != 0.0:
        params["radius_meters"] = search_filter.radius_meters

    if include_price:
        min_price = _price_bound(search_filter.min_price)
        max_price = _price_bound(search_filter.max_price)
        if min_price is not None:
            params["min_price"] = min_price
        if max_price is not None:
            params["max_price"] = max_price

    category = (search_filter.category or "").strip()
    if category:
        params["category"] = category

    params["limit"] = search_filter.limit
    params["offset"] = search_filter.offset
    return params
