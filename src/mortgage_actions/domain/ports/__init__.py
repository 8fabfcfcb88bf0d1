"""Domain port definitions for adapters."""

from __future__ import annotations

from .lookup import (
    AddressComponent,
    PlaceDetail,
    PlaceLookup,
    PlaceLookupError,
    PlaceSuggestion,
)
from .mutations import MutationInterface, StoreQueries

__all__ = [
    "AddressComponent",
    "MutationInterface",
    "PlaceDetail",
    "PlaceLookup",
    "PlaceLookupError",
    "PlaceSuggestion",
    "StoreQueries",
]
