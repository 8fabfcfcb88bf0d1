from __future__ import annotations

import asyncio

from mortgage_actions.domain.action_pipeline import (
    AddressResolver,
    address_from_detail,
    resolve_addresses_in_actions,
)
from mortgage_actions.domain.model import (
    Action,
    AddFormerAddressParams,
    Address,
    EmploymentFields,
    FormerAddress,
    PresentAddress,
    UpdateAddressDataParams,
    UpdateClientParams,
    UpdateEmploymentRecordParams,
)
from mortgage_actions.domain.ports import AddressComponent, PlaceDetail
from tests.helpers.actions import FakeLookup, failing_lookup, springfield_detail


def _present_address_action(address: Address) -> Action:
    return Action(
        params=UpdateAddressDataParams(client_id="c1", data=PresentAddress(addr=address))
    )


def test_address_from_detail_maps_components() -> None:
    address = address_from_detail(springfield_detail())

    assert address.address1 == "742 Evergreen Terrace"
    assert address.city == "Springfield"
    assert address.region == "Oregon"
    assert address.postal_code == "97403"
    assert address.country == "United States"
    assert address.formatted_address == "742 Evergreen Terrace, Springfield, OR 97403, USA"
    assert (address.lat, address.lng) == (44.05, -123.02)


def test_address_from_detail_falls_back_to_postal_town_and_zero_coordinates() -> None:
    detail = PlaceDetail(
        address_components=(
            AddressComponent(types=("route",), long_text="High Street"),
            AddressComponent(types=("postal_town",), long_text="Oxford"),
        ),
        formatted_address="High Street, Oxford",
    )

    address = address_from_detail(detail)

    assert address.address1 == "High Street"
    assert address.city == "Oxford"
    assert (address.lat, address.lng) == (0.0, 0.0)


def test_resolver_uses_one_session_token_for_suggest_and_detail() -> None:
    lookup = FakeLookup()
    resolver = AddressResolver(lookup, session_token_factory=lambda: "token-1")

    resolved = asyncio.run(resolver.resolve("742 Evergreen, Springfield"))

    assert resolved is not None
    assert resolved.city == "Springfield"
    assert lookup.suggest_calls == [("742 Evergreen, Springfield", "token-1")]
    assert lookup.detail_calls == [("p1", "token-1")]


def test_resolver_returns_none_for_blank_input_and_empty_suggestions() -> None:
    lookup = FakeLookup(suggestions=[])
    resolver = AddressResolver(lookup)

    assert asyncio.run(resolver.resolve("   ")) is None
    assert asyncio.run(resolver.resolve("nowhere")) is None
    assert lookup.detail_calls == []


def test_resolver_without_lookup_resolves_nothing() -> None:
    resolver = AddressResolver(None)

    assert not resolver.enabled
    assert asyncio.run(resolver.resolve("742 Evergreen")) is None


def test_resolver_times_out_to_none() -> None:
    lookup = FakeLookup(delay_seconds=0.5)
    resolver = AddressResolver(lookup, timeout_seconds=0.01)

    assert asyncio.run(resolver.resolve("742 Evergreen")) is None


def test_resolver_swallows_unexpected_lookup_errors() -> None:
    lookup = FakeLookup(fail_with=ConnectionError("connection reset"))
    resolver = AddressResolver(lookup)

    assert asyncio.run(resolver.resolve("742 Evergreen")) is None
    assert len(lookup.suggest_calls) == 1


def test_lookup_failure_keeps_original_address() -> None:
    partial = Address(address1="742 Evergreen", city="Springfield")
    action = _present_address_action(partial)

    result = asyncio.run(
        resolve_addresses_in_actions([action], AddressResolver(failing_lookup()))
    )

    assert result.actions == [action]
    assert result.unresolved == [action]


def test_already_resolved_address_is_left_untouched() -> None:
    lookup = FakeLookup()
    resolved = Address(address1="1 Main St", formatted_address="1 Main St, Town, USA")
    action = _present_address_action(resolved)

    result = asyncio.run(resolve_addresses_in_actions([action], AddressResolver(lookup)))

    assert result.actions == [action]
    assert result.unresolved == []
    assert lookup.suggest_calls == []


def test_resolution_rewrites_every_address_target_in_order() -> None:
    lookup = FakeLookup()
    actions = [
        _present_address_action(Address(address1="742 Evergreen", city="Springfield")),
        Action(params=UpdateClientParams(client_id="c1")),
        Action(
            params=UpdateEmploymentRecordParams(
                client_id="c1",
                record_id="emp-1",
                updates=EmploymentFields(employer_address=Address(address1="1 Plant Rd")),
            )
        ),
        Action(
            params=AddFormerAddressParams(
                client_id="c1",
                address=FormerAddress(addr=Address(address1="9 Old Rd", address2="Apt 4")),
            )
        ),
    ]

    result = asyncio.run(
        resolve_addresses_in_actions(actions, AddressResolver(lookup), concurrency=3)
    )

    present = result.actions[0].params
    employment = result.actions[2].params
    former = result.actions[3].params
    assert isinstance(present, UpdateAddressDataParams)
    assert isinstance(employment, UpdateEmploymentRecordParams)
    assert isinstance(former, AddFormerAddressParams)
    assert present.data.addr is not None
    assert present.data.addr.is_resolved
    assert employment.updates.employer_address is not None
    assert employment.updates.employer_address.is_resolved
    assert former.address.addr is not None
    assert former.address.addr.is_resolved
    assert result.actions[1] is actions[1]
    assert sorted(text for text, _ in lookup.suggest_calls) == [
        "1 Plant Rd",
        "742 Evergreen, Springfield",
        "9 Old Rd, Apt 4",
    ]


def test_resolution_is_idempotent() -> None:
    lookup = FakeLookup()
    action = _present_address_action(Address(address1="742 Evergreen"))
    resolver = AddressResolver(lookup)

    first = asyncio.run(resolve_addresses_in_actions([action], resolver))
    second = asyncio.run(resolve_addresses_in_actions(first.actions, resolver))

    assert second.actions == first.actions
    assert len(lookup.suggest_calls) == 1
