"""In-memory implementation of the mutation interface.

Backs the CLI and the tests. Nothing is persisted; ``snapshot()`` returns the
current contents as an :class:`ApplicationStateView`.
"""

from __future__ import annotations

from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from mortgage_actions.domain.model import (
    ActiveIncomeFields,
    AddressHistory,
    ApplicationStateView,
    AssetFields,
    ClientFields,
    ClientRecord,
    ClientSummary,
    EmploymentFields,
    PresentAddress,
    RealEstateFields,
    Record,
    RecordKind,
    overlay,
)
from mortgage_actions.domain.ports import MutationInterface

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from mortgage_actions.domain.model import FormerAddress

log = getLogger(__name__)

_ID_PREFIXES: dict[RecordKind, str] = {
    RecordKind.EMPLOYMENT: "emp",
    RecordKind.ACTIVE_INCOME: "income",
    RecordKind.REAL_ESTATE: "property",
    RecordKind.ASSET: "asset",
    RecordKind.FORMER_ADDRESS: "address",
}


class UnknownRecordError(LookupError):
    """Raised when a mutation targets a client or record that does not exist."""


def _uuid_ids(prefix: str) -> str:
    return f"{prefix}-{uuid4().hex[:12]}"


class InMemoryApplicationStore:
    """Plain-dict application store keyed by client id, records in insertion order."""

    def __init__(
        self,
        state: ApplicationStateView | None = None,
        *,
        id_factory: Callable[[str], str] = _uuid_ids,
    ) -> None:
        self._new_id = id_factory
        self._clients: dict[str, ClientFields] = {}
        self._records: dict[RecordKind, dict[str, list[Record[Any]]]] = {
            kind: {} for kind in RecordKind
        }
        self._present: dict[str, PresentAddress] = {}
        self.shared_owners: dict[str, tuple[str, ...]] = {}
        if state is not None:
            self._load(state)

    def _load(self, state: ApplicationStateView) -> None:
        for client_id, client in state.clients.items():
            self._clients[client_id] = client.fields
        for kind, collection in (
            (RecordKind.EMPLOYMENT, state.employment),
            (RecordKind.ACTIVE_INCOME, state.active_income),
            (RecordKind.REAL_ESTATE, state.real_estate),
            (RecordKind.ASSET, state.assets),
        ):
            for client_id, records in collection.items():
                self._records[kind][client_id] = list(records)
        for client_id, history in state.addresses.items():
            if history.present is not None:
                self._present[client_id] = history.present
            if history.former:
                self._records[RecordKind.FORMER_ADDRESS][client_id] = list(history.former)

    # Queries

    async def list_records(self, client_id: str, kind: RecordKind) -> Sequence[Record[Any]]:
        return tuple(self._records[kind].get(client_id, ()))

    async def get_client(self, client_id: str) -> ClientSummary | None:
        fields = self._clients.get(client_id)
        if fields is None:
            return None
        return ClientRecord(id=client_id, fields=fields).summary()

    def snapshot(self) -> ApplicationStateView:
        client_ids = self._clients.keys() | self._present.keys()
        return ApplicationStateView(
            clients={
                client_id: ClientRecord(id=client_id, fields=fields)
                for client_id, fields in self._clients.items()
            },
            employment=self._frozen(RecordKind.EMPLOYMENT),
            active_income=self._frozen(RecordKind.ACTIVE_INCOME),
            real_estate=self._frozen(RecordKind.REAL_ESTATE),
            assets=self._frozen(RecordKind.ASSET),
            addresses={
                client_id: AddressHistory(
                    present=self._present.get(client_id),
                    former=tuple(self._records[RecordKind.FORMER_ADDRESS].get(client_id, ())),
                )
                for client_id in client_ids | self._records[RecordKind.FORMER_ADDRESS].keys()
            },
        )

    def _frozen(self, kind: RecordKind) -> dict[str, tuple[Record[Any], ...]]:
        return {client_id: tuple(records) for client_id, records in self._records[kind].items()}

    # Clients

    async def add_client(self, fields: ClientFields) -> str:
        client_id = self._new_id("client")
        self._clients[client_id] = fields
        log.debug(f"Created client {client_id}")
        return client_id

    async def update_client(self, client_id: str, updates: ClientFields) -> None:
        self._require_client(client_id)
        self._clients[client_id] = overlay(self._clients[client_id], updates)

    # Per-client records

    async def add_employment_record(self, client_id: str) -> str:
        return self._add_record(client_id, RecordKind.EMPLOYMENT, EmploymentFields())

    async def update_employment_record(
        self, client_id: str, record_id: str, updates: EmploymentFields
    ) -> None:
        self._update_record(client_id, RecordKind.EMPLOYMENT, record_id, updates)

    async def add_active_income(self, client_id: str) -> str:
        return self._add_record(client_id, RecordKind.ACTIVE_INCOME, ActiveIncomeFields())

    async def update_active_income(
        self, client_id: str, record_id: str, updates: ActiveIncomeFields
    ) -> None:
        self._update_record(client_id, RecordKind.ACTIVE_INCOME, record_id, updates)

    async def add_real_estate_record(self, client_id: str) -> str:
        return self._add_record(client_id, RecordKind.REAL_ESTATE, RealEstateFields())

    async def update_real_estate_record(
        self, client_id: str, record_id: str, updates: RealEstateFields
    ) -> None:
        self._update_record(client_id, RecordKind.REAL_ESTATE, record_id, updates)

    async def add_asset(self, client_id: str) -> str:
        return self._add_record(client_id, RecordKind.ASSET, AssetFields())

    async def update_asset(self, client_id: str, record_id: str, updates: AssetFields) -> None:
        self._update_record(client_id, RecordKind.ASSET, record_id, updates)

    async def set_shared_owners(
        self, client_id: str, asset_id: str, shared_client_ids: Sequence[str]
    ) -> None:
        self._find_record(client_id, RecordKind.ASSET, asset_id)
        for shared_id in shared_client_ids:
            self._require_client(shared_id)
        self.shared_owners[asset_id] = tuple(shared_client_ids)

    # Addresses

    async def update_address_data(self, client_id: str, data: PresentAddress) -> None:
        self._require_client(client_id)
        current = self._present.get(client_id, PresentAddress())
        self._present[client_id] = PresentAddress(
            addr=data.addr or current.addr,
            from_date=data.from_date or current.from_date,
            to_date=data.to_date or current.to_date,
        )

    async def add_former_address(self, client_id: str, address: FormerAddress) -> str:
        self._require_client(client_id)
        record_id = address.id or self._new_id(_ID_PREFIXES[RecordKind.FORMER_ADDRESS])
        records = self._records[RecordKind.FORMER_ADDRESS].setdefault(client_id, [])
        records.append(Record(id=record_id, data=replace(address, id=record_id)))
        return record_id

    # Helpers

    def _require_client(self, client_id: str) -> None:
        if client_id not in self._clients:
            raise UnknownRecordError(f"Unknown client {client_id}")

    def _add_record(self, client_id: str, kind: RecordKind, data: object) -> str:
        self._require_client(client_id)
        record_id = self._new_id(_ID_PREFIXES[kind])
        self._records[kind].setdefault(client_id, []).append(Record(id=record_id, data=data))
        log.debug(f"Created {kind} record {record_id} for client {client_id}")
        return record_id

    def _find_record(self, client_id: str, kind: RecordKind, record_id: str) -> int:
        self._require_client(client_id)
        for index, record in enumerate(self._records[kind].get(client_id, ())):
            if record.id == record_id:
                return index
        raise UnknownRecordError(f"Unknown {kind} record {record_id} for client {client_id}")

    def _update_record(
        self, client_id: str, kind: RecordKind, record_id: str, updates: object
    ) -> None:
        index = self._find_record(client_id, kind, record_id)
        records = self._records[kind][client_id]
        current = records[index]
        records[index] = Record(id=current.id, data=overlay(current.data, updates))


if TYPE_CHECKING:
    _store_check: MutationInterface = InMemoryApplicationStore()
