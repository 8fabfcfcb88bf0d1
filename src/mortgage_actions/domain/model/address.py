"""Postal address value objects."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Address:
    """Partial or resolved postal address.

    Partial addresses (as dictated) usually carry only ``address1`` and maybe
    ``city``. A resolved address additionally carries the provider's single-line
    ``formatted_address`` and coordinates.
    """

    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    region: str | None = None
    postal_code: str | None = None
    country: str | None = None
    formatted_address: str | None = None
    lat: float | None = None
    lng: float | None = None

    @property
    def is_resolved(self) -> bool:
        return bool(self.formatted_address)

    @property
    def needs_resolution(self) -> bool:
        return bool(self.address1) and not self.is_resolved

    def lookup_text(self, *, include_line2: bool = False) -> str:
        """Comma-joined lookup string, skipping empty parts."""

        parts = [self.address1, self.address2 if include_line2 else None, self.city]
        return ", ".join(part.strip() for part in parts if part and part.strip())

    def display_line(self) -> str:
        return self.formatted_address or self.address1 or ""


@dataclass(frozen=True, slots=True)
class PresentAddress:
    """Payload of a present-address update."""

    addr: Address | None = None
    from_date: str | None = None
    to_date: str | None = None


@dataclass(frozen=True, slots=True)
class FormerAddress:
    """A former residence with its occupancy range."""

    addr: Address | None = None
    id: str | None = None
    from_date: str | None = None
    to_date: str | None = None
