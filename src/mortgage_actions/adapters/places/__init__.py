"""Public interface for the Google Places adapter."""

from __future__ import annotations

from .client import GooglePlacesClient, PlacesAPIError
from .schema import AutocompleteResponse, PlaceDetailsResponse
from .translator import parse_place_detail, parse_suggestions

__all__ = [
    "AutocompleteResponse",
    "GooglePlacesClient",
    "PlaceDetailsResponse",
    "PlacesAPIError",
    "parse_place_detail",
    "parse_suggestions",
]
