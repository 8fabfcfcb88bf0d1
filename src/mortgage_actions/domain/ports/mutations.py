"""Ports for mutating the mortgage application store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mortgage_actions.domain.model import (
        ActiveIncomeFields,
        AssetFields,
        ClientFields,
        ClientSummary,
        EmploymentFields,
        FormerAddress,
        PresentAddress,
        RealEstateFields,
        Record,
        RecordKind,
    )


@runtime_checkable
class StoreQueries(Protocol):
    """Read accessors over the current persisted state."""

    async def list_records(self, client_id: str, kind: RecordKind) -> Sequence[Record[Any]]:
        """Return the client's records of ``kind`` in insertion order."""
        ...

    async def get_client(self, client_id: str) -> ClientSummary | None: ...


@runtime_checkable
class MutationInterface(StoreQueries, Protocol):
    """One call per action kind.

    Add calls return the identifier of the created record; update calls return
    ``None``. Implementations raise on unknown client or record identifiers.
    """

    async def add_client(self, fields: ClientFields) -> str: ...

    async def update_client(self, client_id: str, updates: ClientFields) -> None: ...

    async def add_employment_record(self, client_id: str) -> str: ...

    async def update_employment_record(
        self, client_id: str, record_id: str, updates: EmploymentFields
    ) -> None: ...

    async def add_active_income(self, client_id: str) -> str: ...

    async def update_active_income(
        self, client_id: str, record_id: str, updates: ActiveIncomeFields
    ) -> None: ...

    async def add_real_estate_record(self, client_id: str) -> str: ...

    async def update_real_estate_record(
        self, client_id: str, record_id: str, updates: RealEstateFields
    ) -> None: ...

    async def add_asset(self, client_id: str) -> str: ...

    async def update_asset(self, client_id: str, record_id: str, updates: AssetFields) -> None: ...

    async def set_shared_owners(
        self, client_id: str, asset_id: str, shared_client_ids: Sequence[str]
    ) -> None: ...

    async def update_address_data(self, client_id: str, data: PresentAddress) -> None: ...

    async def add_former_address(self, client_id: str, address: FormerAddress) -> str: ...
