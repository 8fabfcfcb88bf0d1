"""Read-only snapshot of the application store."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .enums import RecordKind

if TYPE_CHECKING:
    from .fields import ActiveIncomeFields, AssetFields, EmploymentFields, RealEstateFields
    from .records import AddressHistory, ClientRecord, Record


def _frozen_records[T](
    mapping: Mapping[str, tuple[T, ...] | list[T]],
) -> Mapping[str, tuple[T, ...]]:
    return MappingProxyType({key: tuple(values) for key, values in mapping.items()})


@dataclass(frozen=True, slots=True)
class ApplicationStateView:
    """Immutable snapshot keyed by client id, then record order.

    Record tuples keep store insertion order; the last element is the most
    recently created record of that kind.
    """

    clients: Mapping[str, ClientRecord] = field(default_factory=dict)
    employment: Mapping[str, tuple[Record[EmploymentFields], ...]] = field(default_factory=dict)
    active_income: Mapping[str, tuple[Record[ActiveIncomeFields], ...]] = field(
        default_factory=dict
    )
    real_estate: Mapping[str, tuple[Record[RealEstateFields], ...]] = field(default_factory=dict)
    assets: Mapping[str, tuple[Record[AssetFields], ...]] = field(default_factory=dict)
    addresses: Mapping[str, AddressHistory] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "clients", MappingProxyType(dict(self.clients)))
        object.__setattr__(self, "employment", _frozen_records(self.employment))
        object.__setattr__(self, "active_income", _frozen_records(self.active_income))
        object.__setattr__(self, "real_estate", _frozen_records(self.real_estate))
        object.__setattr__(self, "assets", _frozen_records(self.assets))
        object.__setattr__(self, "addresses", MappingProxyType(dict(self.addresses)))

    def has_client(self, client_id: str) -> bool:
        return client_id in self.clients

    def get_client(self, client_id: str) -> ClientRecord | None:
        return self.clients.get(client_id)

    def records_for(self, client_id: str, kind: RecordKind) -> tuple[Record[Any], ...]:
        if kind is RecordKind.FORMER_ADDRESS:
            history = self.addresses.get(client_id)
            return history.former if history is not None else ()
        collection: Mapping[str, tuple[Record[Any], ...]] = {
            RecordKind.EMPLOYMENT: self.employment,
            RecordKind.ACTIVE_INCOME: self.active_income,
            RecordKind.REAL_ESTATE: self.real_estate,
            RecordKind.ASSET: self.assets,
        }[kind]
        return collection.get(client_id, ())
