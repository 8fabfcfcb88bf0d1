"""Per-kind structural and business-rule checks for actions."""

from __future__ import annotations

from .rules import RULE_SETS, RuleFindings, RuleSet
from .validator import (
    ActionIssue,
    ValidationOutcome,
    ValidationPhase,
    ValidationResult,
    validate_action,
    validate_actions,
)

__all__ = [
    "RULE_SETS",
    "ActionIssue",
    "RuleFindings",
    "RuleSet",
    "ValidationOutcome",
    "ValidationPhase",
    "ValidationResult",
    "validate_action",
    "validate_actions",
]
