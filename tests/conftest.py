from __future__ import annotations

import pytest

from mortgage_actions.domain.model import (
    ActiveIncomeFields,
    ApplicationStateView,
    AssetFields,
    EmploymentFields,
    Record,
)
from tests.helpers.actions import make_state

PLACES_ENV_VARS = (
    "GOOGLE_MAPS_API_KEY",
    "NEXT_GOOGLE_MAPS_API_KEY",
    "MORTGAGE_ACTIONS_PLACES_CACHE",
    "MORTGAGE_ACTIONS_RESOLVE_CONCURRENCY",
    "MORTGAGE_ACTIONS_RESOLVE_TIMEOUT",
)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in PLACES_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def household_state() -> ApplicationStateView:
    """Two clients; c1 already has one employment, one asset and one income record."""

    return make_state(
        clients={"c1": ("Jane", "Doe"), "c2": ("John", "Doe")},
        employment={"c1": [Record(id="emp-existing", data=EmploymentFields(employer_name="Acme"))]},
        assets={
            "c1": [Record(id="asset-existing", data=AssetFields(category="Checking", amount=5000))]
        },
        active_income={
            "c1": [
                Record(
                    id="income-existing",
                    data=ActiveIncomeFields(company_name="Acme", monthly_amount=4200.0),
                )
            ]
        },
    )
