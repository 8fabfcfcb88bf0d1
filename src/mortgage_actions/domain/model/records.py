"""Persisted record shapes as seen by the pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field

from .address import FormerAddress, PresentAddress
from .fields import ClientFields


def display_name(first_name: str | None, last_name: str | None) -> str:
    first = (first_name or "").strip()
    last = (last_name or "").strip()
    if first and last:
        return f"{first} {last}"
    return first or last or "Client"


@dataclass(frozen=True, slots=True)
class ClientSummary:
    """Minimal client view used for existence checks and summaries."""

    id: str
    first_name: str | None = None
    last_name: str | None = None

    @property
    def display_name(self) -> str:
        return display_name(self.first_name, self.last_name)


@dataclass(frozen=True, slots=True)
class ClientRecord:
    id: str
    fields: ClientFields = field(default_factory=ClientFields)

    def summary(self) -> ClientSummary:
        return ClientSummary(
            id=self.id,
            first_name=self.fields.first_name,
            last_name=self.fields.last_name,
        )


@dataclass(frozen=True, slots=True)
class Record[TFields]:
    """A stored per-client record: identifier plus its field set."""

    id: str
    data: TFields


@dataclass(frozen=True, slots=True)
class AddressHistory:
    present: PresentAddress | None = None
    former: tuple[Record[FormerAddress], ...] = ()
