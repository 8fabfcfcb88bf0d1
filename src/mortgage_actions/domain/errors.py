"""Invariant violations that abort a whole pipeline call.

Everything else (unresolved addresses, validation errors, failed mutations) is
contained to the action it concerns and reported, never raised.
"""

from __future__ import annotations


class PipelineInvariantError(RuntimeError):
    """Raised when the action batch or the caller breaks a pipeline invariant."""


class PlaceholderRebindError(PipelineInvariantError):
    """Raised when a second action tries to claim an already bound placeholder."""

    def __init__(self, placeholder: str, *, existing_id: str) -> None:
        self.placeholder = placeholder
        self.existing_id = existing_id
        super().__init__(f"Placeholder {placeholder} is already bound to {existing_id}")


class MalformedActionError(PipelineInvariantError):
    """Raised when an action payload does not have the expected shape."""

    def __init__(self, message: str, *, index: int | None = None) -> None:
        self.index = index
        prefix = f"Action #{index}: " if index is not None else ""
        super().__init__(f"{prefix}{message}")
