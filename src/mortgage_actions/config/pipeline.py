"""Pipeline tunables."""

from __future__ import annotations

from mortgage_actions.domain.action_pipeline import PipelineConfig

from .env import optional_float_env_var, optional_int_env_var

RESOLVE_CONCURRENCY_VAR = "MORTGAGE_ACTIONS_RESOLVE_CONCURRENCY"
RESOLVE_TIMEOUT_VAR = "MORTGAGE_ACTIONS_RESOLVE_TIMEOUT"


def get_pipeline_config() -> PipelineConfig:
    """Return defaults overridden by the environment.

    Raises ``ConfigurationError`` for non-numeric or out-of-range overrides.
    """

    defaults = PipelineConfig()
    concurrency = optional_int_env_var(RESOLVE_CONCURRENCY_VAR, minimum=1)
    timeout = optional_float_env_var(RESOLVE_TIMEOUT_VAR, minimum=0.0)
    if concurrency is None:
        concurrency = defaults.resolve_concurrency
    if timeout is None:
        timeout = defaults.resolve_timeout_seconds
    return PipelineConfig(
        amount_tolerance=defaults.amount_tolerance,
        resolve_concurrency=concurrency,
        resolve_timeout_seconds=timeout,
    )
