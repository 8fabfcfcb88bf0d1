"""Port definitions for the external place-lookup service."""

# switch off type warnings because of default_factory=tuple
# pyright: reportUnknownVariableType=false

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


class PlaceLookupError(RuntimeError):
    """Raised by lookup adapters for HTTP, network and payload failures."""


@dataclass(frozen=True, slots=True)
class PlaceSuggestion:
    """One autocomplete candidate."""

    text: str
    place_reference: str


@dataclass(frozen=True, slots=True)
class AddressComponent:
    """A typed fragment of a structured address (``route``, ``locality``, ...)."""

    types: tuple[str, ...]
    long_text: str
    short_text: str | None = None


@dataclass(frozen=True, slots=True)
class PlaceDetail:
    """Structured detail for one place reference."""

    address_components: tuple[AddressComponent, ...] = field(default_factory=tuple)
    formatted_address: str | None = None
    latitude: float | None = None
    longitude: float | None = None


@runtime_checkable
class PlaceLookup(Protocol):
    """Two-step suggest/detail contract of the place-lookup service."""

    async def suggest(self, input_text: str, *, session_token: str) -> list[PlaceSuggestion]: ...

    async def detail(
        self,
        place_reference: str,
        *,
        session_token: str | None = None,
    ) -> PlaceDetail: ...

    async def aclose(self) -> None:
        """Release connections held between lookups."""
        ...
