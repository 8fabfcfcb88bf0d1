"""Address resolution phase.

Partial addresses dictated by the user (usually a street line and maybe a
city) are completed through the two-step suggest/detail protocol of a
:class:`~mortgage_actions.domain.ports.PlaceLookup`. Resolution is best effort:
every failure mode collapses to ``None`` and the action keeps its partial
address.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, replace
from logging import getLogger
from typing import TYPE_CHECKING
from uuid import uuid4

from mortgage_actions.domain.action_pipeline.orchestrator import PipelinePhase
from mortgage_actions.domain.model import (
    ActionKind,
    Address,
    AddFormerAddressParams,
    UpdateAddressDataParams,
    UpdateEmploymentRecordParams,
)
from mortgage_actions.domain.ports import PlaceLookupError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from mortgage_actions.domain.action_pipeline.context import ActionBatch, PipelineContext
    from mortgage_actions.domain.model import Action, ActionParams
    from mortgage_actions.domain.ports import PlaceDetail, PlaceLookup

log = getLogger(__name__)

CITY_COMPONENT_TYPES: tuple[str, ...] = ("locality", "postal_town", "sublocality")


def address_from_detail(detail: PlaceDetail) -> Address:
    """Map a structured place detail onto an :class:`Address`."""

    def component(*types: str) -> str | None:
        for wanted in types:
            for item in detail.address_components:
                if wanted in item.types and item.long_text:
                    return item.long_text
        return None

    street = " ".join(
        part for part in (component("street_number"), component("route")) if part
    )
    city = None
    for city_type in CITY_COMPONENT_TYPES:
        city = component(city_type)
        if city:
            break

    return Address(
        address1=street or None,
        address2=component("subpremise"),
        city=city,
        region=component("administrative_area_level_1"),
        postal_code=component("postal_code"),
        country=component("country"),
        formatted_address=detail.formatted_address or None,
        lat=detail.latitude if detail.latitude is not None else 0.0,
        lng=detail.longitude if detail.longitude is not None else 0.0,
    )


class AddressResolver:
    """Resolve free-text addresses into complete, geocoded addresses.

    ``lookup`` may be ``None`` when no lookup credential is configured; the
    resolver then logs a warning and resolves nothing.
    """

    def __init__(
        self,
        lookup: PlaceLookup | None,
        *,
        timeout_seconds: float | None = 10.0,
        session_token_factory: Callable[[], str] | None = None,
    ) -> None:
        self._lookup = lookup
        self._timeout_seconds = timeout_seconds
        self._new_session_token = session_token_factory or (lambda: uuid4().hex)

    @property
    def enabled(self) -> bool:
        return self._lookup is not None

    async def aclose(self) -> None:
        if self._lookup is not None:
            await self._lookup.aclose()

    async def resolve(self, address_string: str) -> Address | None:
        """Return the resolved address for ``address_string`` or ``None``."""

        text = address_string.strip()
        if not text:
            return None
        if self._lookup is None:
            log.warning("No place lookup configured; skipping address resolution")
            return None

        try:
            async with asyncio.timeout(self._timeout_seconds):
                return await self._resolve(self._lookup, text)
        except TimeoutError:
            log.warning(f"Address lookup timed out for {text!r}")
        except PlaceLookupError as exc:
            log.warning(f"Address lookup failed for {text!r}: {exc}")
        except Exception:
            log.exception(f"Unexpected error while resolving {text!r}")
        return None

    async def _resolve(self, lookup: PlaceLookup, text: str) -> Address | None:
        session_token = self._new_session_token()
        suggestions = await lookup.suggest(text, session_token=session_token)
        if not suggestions:
            log.info(f"No place suggestions for {text!r}")
            return None
        detail = await lookup.detail(
            suggestions[0].place_reference, session_token=session_token
        )
        return address_from_detail(detail)


@dataclass(frozen=True, slots=True)
class AddressTarget:
    """Where an action kind embeds the address to resolve."""

    kind: ActionKind
    include_line2: bool
    read: Callable[[ActionParams], Address | None]
    write: Callable[[ActionParams, Address], ActionParams]


def _read_present(params: ActionParams) -> Address | None:
    assert isinstance(params, UpdateAddressDataParams)  # noqa: S101
    return params.data.addr


def _write_present(params: ActionParams, address: Address) -> ActionParams:
    assert isinstance(params, UpdateAddressDataParams)  # noqa: S101
    return replace(params, data=replace(params.data, addr=address))


def _read_employer(params: ActionParams) -> Address | None:
    assert isinstance(params, UpdateEmploymentRecordParams)  # noqa: S101
    return params.updates.employer_address


def _write_employer(params: ActionParams, address: Address) -> ActionParams:
    assert isinstance(params, UpdateEmploymentRecordParams)  # noqa: S101
    return replace(params, updates=replace(params.updates, employer_address=address))


def _read_former(params: ActionParams) -> Address | None:
    assert isinstance(params, AddFormerAddressParams)  # noqa: S101
    return params.address.addr


def _write_former(params: ActionParams, address: Address) -> ActionParams:
    assert isinstance(params, AddFormerAddressParams)  # noqa: S101
    return replace(params, address=replace(params.address, addr=address))


ADDRESS_TARGETS: dict[ActionKind, AddressTarget] = {
    target.kind: target
    for target in (
        AddressTarget(ActionKind.UPDATE_ADDRESS_DATA, False, _read_present, _write_present),
        AddressTarget(ActionKind.UPDATE_EMPLOYMENT_RECORD, False, _read_employer, _write_employer),
        AddressTarget(ActionKind.ADD_FORMER_ADDRESS, True, _read_former, _write_former),
    )
}


@dataclass(slots=True)
class AddressResolutionResult:
    actions: list[Action] = field(default_factory=list[Action])
    unresolved: list[Action] = field(default_factory=list[Action])


async def resolve_action_address(action: Action, resolver: AddressResolver) -> tuple[Action, bool]:
    """Resolve the embedded address of ``action``.

    Returns the (possibly rewritten) action and whether an address that needed
    resolution stayed unresolved.
    """

    target = ADDRESS_TARGETS.get(action.kind)
    if target is None:
        return action, False
    address = target.read(action.params)
    if address is None or not address.needs_resolution:
        return action, False

    resolved = await resolver.resolve(address.lookup_text(include_line2=target.include_line2))
    if resolved is None:
        return action, True
    log.debug(f"Resolved address for {action.name}: {resolved.display_line()}")
    return replace(action, params=target.write(action.params, resolved)), False


async def resolve_addresses_in_actions(
    actions: Sequence[Action],
    resolver: AddressResolver,
    *,
    concurrency: int = 1,
) -> AddressResolutionResult:
    """Resolve addresses across ``actions``, preserving their order."""

    if concurrency <= 1:
        outcomes = [await resolve_action_address(action, resolver) for action in actions]
    else:
        semaphore = asyncio.Semaphore(concurrency)

        async def bounded(action: Action) -> tuple[Action, bool]:
            async with semaphore:
                return await resolve_action_address(action, resolver)

        outcomes = await asyncio.gather(*(bounded(action) for action in actions))

    result = AddressResolutionResult()
    for action, unresolved in outcomes:
        result.actions.append(action)
        if unresolved:
            result.unresolved.append(action)
    return result


class AddressResolutionPhase(PipelinePhase):
    """Replace partial addresses with resolved ones before deduplication."""

    name: str = "address_resolution"

    async def run(self, batch: ActionBatch, *, context: PipelineContext) -> None:
        if context.resolver is None:
            return
        result = await resolve_addresses_in_actions(
            batch.actions,
            context.resolver,
            concurrency=context.config.resolve_concurrency,
        )
        batch.replace_all(result.actions)
        context.report.unresolved_addresses.extend(result.unresolved)
        if result.unresolved:
            log.warning(f"{len(result.unresolved)} action(s) kept an unresolved address")
