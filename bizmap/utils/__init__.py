"""Utility functions for the client."""

from bizmap.utils.errors import ApiError, classify_error
from bizmap.utils.query_params import build_search_params

__all__ = ["ApiError", "classify_error", "build_search_params"]
