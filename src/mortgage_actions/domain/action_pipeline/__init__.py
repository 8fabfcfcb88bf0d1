"""Action resolution pipeline.

A batch of model-proposed actions passes through four phases in a fixed
order (address resolution, duplicate merge, validation, execution). Each
phase rewrites an :class:`ActionBatch` in place and records its findings in
the shared :class:`PipelineContext`.
"""

from __future__ import annotations

from .address_resolution import (
    ADDRESS_TARGETS,
    AddressResolutionPhase,
    AddressResolutionResult,
    AddressResolver,
    AddressTarget,
    address_from_detail,
    resolve_addresses_in_actions,
)
from .context import ActionBatch, PipelineConfig, PipelineContext
from .deduplication import (
    MATCH_RULES,
    DeduplicationPhase,
    DuplicateMerger,
    MatchRule,
    merge_duplicate_actions,
)
from .execution import ActionExecutor, ExecutionPhase, UnresolvedPlaceholderError
from .id_map import DynamicIdMap
from .orchestrator import ActionPipeline, PipelinePhase
from .report import AppliedAction, ExecutionReport, FailedAction, MergedAction
from .runner import canonical_phases, run_pipeline, run_pipeline_async
from .summaries import ChangeSummary
from .validation import (
    ActionIssue,
    ValidationOutcome,
    ValidationPhase,
    ValidationResult,
    validate_action,
    validate_actions,
)

__all__ = [
    "ADDRESS_TARGETS",
    "MATCH_RULES",
    "ActionBatch",
    "ActionExecutor",
    "ActionIssue",
    "ActionPipeline",
    "AddressResolutionPhase",
    "AddressResolutionResult",
    "AddressResolver",
    "AddressTarget",
    "AppliedAction",
    "ChangeSummary",
    "DeduplicationPhase",
    "DuplicateMerger",
    "DynamicIdMap",
    "ExecutionPhase",
    "ExecutionReport",
    "FailedAction",
    "MatchRule",
    "MergedAction",
    "PipelineConfig",
    "PipelineContext",
    "PipelinePhase",
    "UnresolvedPlaceholderError",
    "ValidationOutcome",
    "ValidationPhase",
    "ValidationResult",
    "address_from_detail",
    "canonical_phases",
    "merge_duplicate_actions",
    "resolve_addresses_in_actions",
    "run_pipeline",
    "run_pipeline_async",
    "validate_action",
    "validate_actions",
]
