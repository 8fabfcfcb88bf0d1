"""Pure field predicates. Absent or empty values are always valid."""

from __future__ import annotations

import re
from datetime import date
from typing import Final

EMAIL_PATTERN: Final = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
SSN_PATTERN: Final = re.compile(r"^\d{3}-\d{2}-\d{4}$")
DATE_PATTERN: Final = re.compile(r"^\d{4}-\d{2}-\d{2}$")
NON_DIGIT_PATTERN: Final = re.compile(r"\D")
PHONE_DIGITS: Final = 10


def is_valid_phone(phone: str | None) -> bool:
    if not phone:
        return True
    return len(NON_DIGIT_PATTERN.sub("", phone)) == PHONE_DIGITS


def is_valid_email(email: str | None) -> bool:
    if not email:
        return True
    return EMAIL_PATTERN.match(email) is not None


def is_valid_ssn(ssn: str | None) -> bool:
    if not ssn:
        return True
    return SSN_PATTERN.match(ssn) is not None


def parse_date(value: str) -> date | None:
    """Parse a ``YYYY-MM-DD`` calendar date, ``None`` if malformed or impossible."""

    if DATE_PATTERN.match(value) is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def is_valid_date(value: str | None) -> bool:
    if not value:
        return True
    return parse_date(value) is not None


def is_ordered_range(start: str | None, end: str | None) -> bool:
    """Whether ``end`` does not precede ``start``; unparseable bounds pass."""

    if not start or not end:
        return True
    start_date = parse_date(start)
    end_date = parse_date(end)
    if start_date is None or end_date is None:
        return True
    return end_date >= start_date


def is_non_negative(amount: float | None) -> bool:
    return amount is None or amount >= 0


def is_blank(text: str | None) -> bool:
    """Whether ``text`` is non-empty but only whitespace."""

    return text is not None and text != "" and not text.strip()
