"""Per-call binding of batch placeholders to persisted identifiers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mortgage_actions.domain.errors import PlaceholderRebindError
from mortgage_actions.domain.model import placeholder_for

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping


@dataclass(slots=True)
class DynamicIdMap:
    """Write-once mapping ``$placeholder -> id`` scoped to one pipeline call.

    Keys are always stored in their ``$``-prefixed form so ``bind("emp1", ...)``
    and ``get("$emp1")`` address the same entry.
    """

    _bindings: dict[str, str] = field(default_factory=dict[str, str])

    @classmethod
    def seeded(cls, bindings: Mapping[str, str]) -> DynamicIdMap:
        id_map = cls()
        for placeholder, record_id in bindings.items():
            id_map.bind(placeholder, record_id)
        return id_map

    def bind(self, placeholder: str, record_id: str) -> None:
        key = placeholder_for(placeholder)
        existing = self._bindings.get(key)
        if existing is not None:
            raise PlaceholderRebindError(key, existing_id=existing)
        self._bindings[key] = record_id

    def get(self, placeholder: str) -> str | None:
        return self._bindings.get(placeholder_for(placeholder))

    def has(self, placeholder: str) -> bool:
        return placeholder_for(placeholder) in self._bindings

    def as_dict(self) -> dict[str, str]:
        return dict(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)
