from __future__ import annotations

import asyncio

from mortgage_actions.domain.action_pipeline import (
    ActionBatch,
    DeduplicationPhase,
    DuplicateMerger,
    PipelineContext,
    merge_duplicate_actions,
)
from mortgage_actions.domain.model import (
    Action,
    ActiveIncomeFields,
    AddActiveIncomeParams,
    AddAssetParams,
    AddEmploymentRecordParams,
    ApplicationStateView,
    AssetFields,
    EmploymentFields,
    UpdateActiveIncomeParams,
    UpdateAssetParams,
    UpdateEmploymentRecordParams,
)


def _employment_pair(employer: str, *, client_id: str = "c1") -> list[Action]:
    return [
        Action(params=AddEmploymentRecordParams(client_id=client_id), return_id="$e1"),
        Action(
            params=UpdateEmploymentRecordParams(
                client_id=client_id,
                record_id="$e1",
                updates=EmploymentFields(employer_name=employer),
            )
        ),
    ]


def _asset_pair(amount: float, *, category: str = "Checking") -> list[Action]:
    return [
        Action(params=AddAssetParams(client_id="c1"), return_id="a1"),
        Action(
            params=UpdateAssetParams(
                client_id="c1",
                record_id="$a1",
                updates=AssetFields(category=category, amount=amount),
            )
        ),
    ]


def test_employment_pair_merges_case_insensitively(household_state: ApplicationStateView) -> None:
    merger = DuplicateMerger(household_state)

    merged = merger.merge(_employment_pair("acme"))

    assert len(merged) == 1
    params = merged[0].params
    assert isinstance(params, UpdateEmploymentRecordParams)
    assert params.record_id == "emp-existing"
    assert params.client_id == "c1"
    assert params.updates == EmploymentFields(employer_name="acme")
    assert merged[0].return_id is None
    assert merger.aliases == {"$e1": "emp-existing"}
    assert merger.merged[0].existing_record_id == "emp-existing"


def test_distinct_employer_keeps_both_actions(household_state: ApplicationStateView) -> None:
    actions = _employment_pair("Beta Corp")

    merged = merge_duplicate_actions(actions, household_state)

    assert merged == actions


def test_other_client_records_are_not_matched(household_state: ApplicationStateView) -> None:
    actions = _employment_pair("Acme", client_id="c2")

    assert merge_duplicate_actions(actions, household_state) == actions


def test_asset_amount_within_tolerance_merges(household_state: ApplicationStateView) -> None:
    merged = merge_duplicate_actions(_asset_pair(5000.5), household_state)

    assert len(merged) == 1
    params = merged[0].params
    assert isinstance(params, UpdateAssetParams)
    assert params.record_id == "asset-existing"


def test_asset_amount_outside_tolerance_or_other_category_is_kept(
    household_state: ApplicationStateView,
) -> None:
    assert len(merge_duplicate_actions(_asset_pair(5001.0), household_state)) == 2
    lowercase = _asset_pair(5000.0, category="checking")
    assert len(merge_duplicate_actions(lowercase, household_state)) == 2
    assert len(merge_duplicate_actions(_asset_pair(5003.0), household_state, tolerance=5.0)) == 1


def test_income_pair_matches_company_and_amount(household_state: ApplicationStateView) -> None:
    actions = [
        Action(params=AddActiveIncomeParams(client_id="c1"), return_id="$inc1"),
        Action(params=UpdateAssetParams(client_id="c1", record_id="asset-existing")),
        Action(
            params=UpdateActiveIncomeParams(
                client_id="c1",
                record_id="$inc1",
                updates=ActiveIncomeFields(company_name="ACME", monthly_amount=4200.4),
            )
        ),
    ]

    merged = merge_duplicate_actions(actions, household_state)

    assert [action.kind for action in merged] == [
        actions[2].kind,
        actions[1].kind,
    ]
    params = merged[0].params
    assert isinstance(params, UpdateActiveIncomeParams)
    assert params.record_id == "income-existing"


def test_update_without_key_fields_is_not_merged(household_state: ApplicationStateView) -> None:
    actions = [
        Action(params=AddEmploymentRecordParams(client_id="c1"), return_id="$e1"),
        Action(
            params=UpdateEmploymentRecordParams(
                client_id="c1", record_id="$e1", updates=EmploymentFields(job_title="Welder")
            )
        ),
    ]

    assert merge_duplicate_actions(actions, household_state) == actions


def test_same_key_is_merged_only_once_per_batch(household_state: ApplicationStateView) -> None:
    second = [
        Action(params=AddEmploymentRecordParams(client_id="c1"), return_id="$e2"),
        Action(
            params=UpdateEmploymentRecordParams(
                client_id="c1", record_id="$e2", updates=EmploymentFields(employer_name="Acme")
            )
        ),
    ]

    merged = merge_duplicate_actions([*_employment_pair("Acme"), *second], household_state)

    assert len(merged) == 3
    assert merged[1:] == second


def test_deduplication_phase_records_merges_and_aliases(
    household_state: ApplicationStateView,
) -> None:
    context = PipelineContext(state=household_state)
    batch = ActionBatch.of(_employment_pair("Acme"))

    asyncio.run(DeduplicationPhase().run(batch, context=context))

    assert len(batch) == 1
    assert len(context.report.merged) == 1
    assert context.aliases == {"$e1": "emp-existing"}
