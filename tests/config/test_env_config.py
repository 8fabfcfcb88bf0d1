from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pytest

from mortgage_actions.config import (
    ConfigurationError,
    MissingConfigurationError,
    get_pipeline_config,
    get_storage_config,
    optional_int_env_var,
    require_any_env_var,
)


def test_require_any_env_var_prefers_first_present(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FIRST_VAR", "")
    monkeypatch.setenv("SECOND_VAR", " second ")

    assert require_any_env_var(["FIRST_VAR", "SECOND_VAR"]) == "second"


def test_require_any_env_var_names_every_candidate(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FIRST_VAR", raising=False)
    monkeypatch.setenv("SECOND_VAR", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_any_env_var(["FIRST_VAR", "SECOND_VAR"])

    assert "FIRST_VAR or SECOND_VAR" in str(exc.value)


def test_optional_int_env_var_validates(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COUNT_VAR", "zero")
    with pytest.raises(ConfigurationError):
        optional_int_env_var("COUNT_VAR")

    monkeypatch.setenv("COUNT_VAR", "0")
    with pytest.raises(ConfigurationError):
        optional_int_env_var("COUNT_VAR", minimum=1)


def test_pipeline_config_defaults_and_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    defaults = get_pipeline_config()
    assert defaults.resolve_concurrency == 1
    assert defaults.resolve_timeout_seconds == 10.0
    assert defaults.amount_tolerance == 1.0

    monkeypatch.setenv("MORTGAGE_ACTIONS_RESOLVE_CONCURRENCY", "4")
    monkeypatch.setenv("MORTGAGE_ACTIONS_RESOLVE_TIMEOUT", "2.5")
    config = get_pipeline_config()

    assert config.resolve_concurrency == 4
    assert config.resolve_timeout_seconds == 2.5


def test_storage_config_prefers_explicit_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    custom = tmp_path / "custom-data"
    monkeypatch.setenv("MORTGAGE_ACTIONS_DATA_DIR", str(custom))

    path = get_storage_config().http_cache_path()

    assert path == custom.resolve() / "http_cache.db"
    assert custom.exists()
