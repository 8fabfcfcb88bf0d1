"""Translate Places payloads into lookup port value objects."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mortgage_actions.domain.ports import AddressComponent, PlaceDetail, PlaceSuggestion

if TYPE_CHECKING:
    from .schema import AutocompleteResponse, PlaceDetailsResponse


def parse_suggestions(response: AutocompleteResponse) -> list[PlaceSuggestion]:
    """Keep predictions that carry both display text and a place reference."""

    suggestions: list[PlaceSuggestion] = []
    for suggestion in response.suggestions:
        prediction = suggestion.place_prediction
        if prediction is None:
            continue
        text = prediction.text.text if prediction.text is not None else None
        reference = prediction.place
        if not text or not reference:
            continue
        suggestions.append(PlaceSuggestion(text=text, place_reference=reference))
    return suggestions


def parse_place_detail(response: PlaceDetailsResponse) -> PlaceDetail:
    components = tuple(
        AddressComponent(
            types=tuple(component.types),
            long_text=component.long_text,
            short_text=component.short_text,
        )
        for component in response.address_components
        if component.long_text
    )
    location = response.location
    return PlaceDetail(
        address_components=components,
        formatted_address=response.formatted_address,
        latitude=location.latitude if location is not None else None,
        longitude=location.longitude if location is not None else None,
    )
