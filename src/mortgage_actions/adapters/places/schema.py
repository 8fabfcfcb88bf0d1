"""Pydantic models describing the Google Places (New) API payloads."""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PlacesBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class FormattableText(PlacesBaseModel):
    text: str | None = None


class PlacePrediction(PlacesBaseModel):
    place: str | None = None
    text: FormattableText | None = None


class Suggestion(PlacesBaseModel):
    place_prediction: PlacePrediction | None = Field(default=None, alias="placePrediction")


class AutocompleteResponse(PlacesBaseModel):
    suggestions: list[Suggestion] = Field(default_factory=list[Suggestion])


class AddressComponentPayload(PlacesBaseModel):
    long_text: str | None = Field(default=None, alias="longText")
    short_text: str | None = Field(default=None, alias="shortText")
    types: list[str] = Field(default_factory=list[str])

    @model_validator(mode="before")
    @classmethod
    def _accept_single_type(cls, value: object) -> object:
        if isinstance(value, Mapping):
            mapping_value = cast(Mapping[str, object], value)
            single = mapping_value.get("type")
            if isinstance(single, str) and "types" not in mapping_value:
                data: dict[str, object] = dict(mapping_value)
                data["types"] = [single]
                return data
        return value


class LatLng(PlacesBaseModel):
    latitude: float | None = None
    longitude: float | None = None


class PlaceDetailsResponse(PlacesBaseModel):
    id: str | None = None
    formatted_address: str | None = Field(default=None, alias="formattedAddress")
    adr_format_address: str | None = Field(default=None, alias="adrFormatAddress")
    address_components: list[AddressComponentPayload] = Field(
        default_factory=list[AddressComponentPayload], alias="addressComponents"
    )
    location: LatLng | None = None


class ErrorDetail(PlacesBaseModel):
    code: int | None = None
    message: str = "Unknown Places API error"
    status: str | None = None


class ErrorResponse(PlacesBaseModel):
    error: ErrorDetail
