"""Wire translation for model-proposed action batches and application state."""

from __future__ import annotations

from .schema import ActionPayload, ApplicationStatePayload
from .translator import (
    dump_action,
    dump_report,
    dump_summary,
    parse_action,
    parse_actions,
    parse_state,
    to_wire,
)

__all__ = [
    "ActionPayload",
    "ApplicationStatePayload",
    "dump_action",
    "dump_report",
    "dump_summary",
    "parse_action",
    "parse_actions",
    "parse_state",
    "to_wire",
]
