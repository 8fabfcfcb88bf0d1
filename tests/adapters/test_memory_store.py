from __future__ import annotations

import asyncio

import pytest

from mortgage_actions.adapters.memory_store import InMemoryApplicationStore, UnknownRecordError
from mortgage_actions.domain.model import (
    Address,
    ApplicationStateView,
    AssetFields,
    ClientFields,
    FormerAddress,
    PresentAddress,
    RecordKind,
)
from mortgage_actions.domain.ports import MutationInterface
from tests.helpers.actions import make_store


def test_store_satisfies_mutation_interface(household_state: ApplicationStateView) -> None:
    assert isinstance(make_store(household_state), MutationInterface)


def test_store_is_seeded_from_state(household_state: ApplicationStateView) -> None:
    store = make_store(household_state)

    snapshot = store.snapshot()

    assert set(snapshot.clients) == {"c1", "c2"}
    assert [record.id for record in snapshot.records_for("c1", RecordKind.ASSET)] == [
        "asset-existing"
    ]


def test_records_keep_insertion_order(household_state: ApplicationStateView) -> None:
    store = make_store(household_state)

    async def scenario() -> list[str]:
        await store.add_asset("c1")
        await store.add_asset("c1")
        return [record.id for record in await store.list_records("c1", RecordKind.ASSET)]

    assert asyncio.run(scenario()) == ["asset-existing", "asset-1", "asset-2"]


def test_update_overlays_only_provided_fields(household_state: ApplicationStateView) -> None:
    store = make_store(household_state)

    asyncio.run(store.update_asset("c1", "asset-existing", AssetFields(institution_name="Bank")))

    record = store.snapshot().records_for("c1", RecordKind.ASSET)[0]
    assert record.data == AssetFields(category="Checking", amount=5000, institution_name="Bank")


def test_unknown_ids_raise(household_state: ApplicationStateView) -> None:
    store = make_store(household_state)

    with pytest.raises(UnknownRecordError):
        asyncio.run(store.update_client("c9", ClientFields(first_name="X")))
    with pytest.raises(UnknownRecordError):
        asyncio.run(store.add_employment_record("c9"))
    with pytest.raises(UnknownRecordError):
        asyncio.run(store.update_asset("c2", "asset-existing", AssetFields(amount=1)))
    with pytest.raises(UnknownRecordError):
        asyncio.run(store.set_shared_owners("c1", "asset-existing", ["c9"]))


def test_present_address_keeps_dates_when_omitted(household_state: ApplicationStateView) -> None:
    store = make_store(household_state)

    async def scenario() -> None:
        await store.update_address_data(
            "c1", PresentAddress(addr=Address(address1="1 Main St"), from_date="2020-01-01")
        )
        await store.update_address_data("c1", PresentAddress(addr=Address(address1="2 Main St")))

    asyncio.run(scenario())

    present = store.snapshot().addresses["c1"].present
    assert present == PresentAddress(addr=Address(address1="2 Main St"), from_date="2020-01-01")


def test_former_address_gets_an_id(household_state: ApplicationStateView) -> None:
    store = make_store(household_state)

    record_id = asyncio.run(
        store.add_former_address("c2", FormerAddress(addr=Address(address1="9 Old Rd")))
    )

    assert record_id == "address-1"
    former = store.snapshot().addresses["c2"].former
    assert former[0].data.id == "address-1"


def test_get_client_returns_summary() -> None:
    store = InMemoryApplicationStore()

    client_id = asyncio.run(store.add_client(ClientFields(first_name="Kim")))

    client = asyncio.run(store.get_client(client_id))
    assert client is not None
    assert client.display_name == "Kim"
    assert asyncio.run(store.get_client("missing")) is None
