"""HTTP client for the Google Places (New) API."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import BaseModel, ValidationError

from mortgage_actions.adapters.http_resilience import ResilientClient
from mortgage_actions.config.places import PLACES_BASE_URL, PlacesConfig, get_places_config
from mortgage_actions.domain.ports import PlaceLookup, PlaceLookupError

from .schema import AutocompleteResponse, ErrorResponse, PlaceDetailsResponse
from .translator import parse_place_detail, parse_suggestions

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from mortgage_actions.config.http_resilience import ResilienceConfig
    from mortgage_actions.domain.ports import PlaceDetail, PlaceSuggestion

log = getLogger(__name__)

AUTOCOMPLETE_FIELD_MASK = "suggestions.placePrediction.text,suggestions.placePrediction.place"
DETAIL_FIELD_MASK = "id,formattedAddress,adrFormatAddress,addressComponents,location"
PLACE_RESOURCE_PREFIX = "places/"


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class PlacesAPIError(PlaceLookupError):
    """Raised when the Places API returns an error payload."""

    def __init__(self, message: str, *, code: int | None = None, status: str | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.status = status


@dataclass(slots=True)
class GooglePlacesClient:
    """:class:`PlaceLookup` backed by Places autocomplete and place details."""

    config: PlacesConfig = field(default_factory=get_places_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    _session: ResilientClient | None = field(default=None, init=False, repr=False)

    async def __aenter__(self) -> GooglePlacesClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the shared HTTP session; the next lookup opens a new one."""

        session, self._session = self._session, None
        if session is not None:
            await session.aclose()

    async def suggest(self, input_text: str, *, session_token: str) -> list[PlaceSuggestion]:
        body = {
            "input": input_text,
            "languageCode": self.config.language_code,
            "sessionToken": session_token,
        }
        payload = await self._request(
            "POST",
            self._url("places:autocomplete"),
            field_mask=AUTOCOMPLETE_FIELD_MASK,
            json=body,
        )
        response = self._validate(AutocompleteResponse, payload)
        suggestions = parse_suggestions(response)
        log.debug(f"{len(suggestions)} place suggestion(s) for {input_text!r}")
        return suggestions

    async def detail(
        self,
        place_reference: str,
        *,
        session_token: str | None = None,
    ) -> PlaceDetail:
        resource = (
            place_reference
            if place_reference.startswith(PLACE_RESOURCE_PREFIX)
            else f"{PLACE_RESOURCE_PREFIX}{place_reference}"
        )
        params = {"languageCode": self.config.language_code}
        if session_token:
            params["sessionToken"] = session_token
        payload = await self._request(
            "GET",
            self._url(resource),
            field_mask=DETAIL_FIELD_MASK,
            params=params,
        )
        return parse_place_detail(self._validate(PlaceDetailsResponse, payload))

    def _url(self, path: str) -> str:
        base_url = self.config.resilience.base_url or PLACES_BASE_URL
        return f"{base_url.rstrip('/')}/{path}"

    async def _request(
        self,
        method: str,
        url: str,
        *,
        field_mask: str,
        json: object | None = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        headers = {
            "X-Goog-Api-Key": self.config.api_key,
            "X-Goog-FieldMask": field_mask,
        }
        try:
            response = await self._http().request(
                method, url, headers=headers, json=json, params=params
            )
        except httpx.HTTPError as exc:
            raise PlaceLookupError(f"Places request failed: {exc}") from exc

        payload = _json_or_none(response)
        if response.is_error:
            raise _api_error(response, payload)
        if not isinstance(payload, dict):
            raise PlaceLookupError("Unexpected Places response payload")
        return payload

    def _http(self) -> ResilientClient:
        if self._session is None:
            self._session = self.client_factory(self.config.resilience)
        return self._session

    @staticmethod
    def _validate[TModel: BaseModel](model: type[TModel], payload: object) -> TModel:
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise PlaceLookupError(f"Malformed Places payload: {exc}") from exc


def _json_or_none(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError:
        return None


def _api_error(response: httpx.Response, payload: object) -> PlacesAPIError:
    if isinstance(payload, dict) and "error" in payload:
        try:
            error = ErrorResponse.model_validate(payload).error
        except ValidationError:
            pass
        else:
            log.error(f"Places API error {error.code} {error.status}: {error.message}")
            return PlacesAPIError(error.message, code=error.code, status=error.status)
    return PlacesAPIError(
        f"Places API responded with HTTP {response.status_code}", code=response.status_code
    )


if TYPE_CHECKING:
    _lookup_check: PlaceLookup = GooglePlacesClient()
