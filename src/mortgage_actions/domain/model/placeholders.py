"""Batch-local placeholder identifiers (``$emp1``, ``$c2``, ...)."""

from __future__ import annotations

from typing import Final

PLACEHOLDER_PREFIX: Final[str] = "$"


def is_placeholder(value: object) -> bool:
    return isinstance(value, str) and value.startswith(PLACEHOLDER_PREFIX)


def placeholder_for(return_id: str) -> str:
    """Return the ``$``-prefixed placeholder claimed by ``return_id``.

    The model emits both ``"returnId": "emp1"`` and ``"returnId": "$emp1"``
    while references are always written as ``"$emp1"``; both spellings claim
    the same placeholder.
    """

    stripped = return_id.strip()
    if stripped.startswith(PLACEHOLDER_PREFIX):
        return stripped
    return f"{PLACEHOLDER_PREFIX}{stripped}"
