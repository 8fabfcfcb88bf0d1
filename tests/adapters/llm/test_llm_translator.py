from __future__ import annotations

import pytest

from mortgage_actions.adapters.llm import (
    dump_action,
    dump_report,
    parse_action,
    parse_actions,
    parse_state,
)
from mortgage_actions.domain.action_pipeline import (
    AppliedAction,
    ExecutionReport,
    FailedAction,
)
from mortgage_actions.domain.action_pipeline.summaries import summarize
from mortgage_actions.domain.errors import MalformedActionError
from mortgage_actions.domain.model import (
    ActionKind,
    AddClientParams,
    AddFormerAddressParams,
    ClientFields,
    RecordKind,
    SetSharedOwnersParams,
    UnrecognizedParams,
    UpdateActiveIncomeParams,
    UpdateAddressDataParams,
    UpdateClientParams,
    UpdateEmploymentRecordParams,
)

STATE_PAYLOAD = {
    "clients": {
        "c1": {"id": "c1", "firstName": "Jane", "lastName": "Doe", "creditScore": 780},
    },
    "employmentData": {"c1": [{"id": "emp-1", "employerName": "Acme", "startDate": ""}]},
    "incomeData": {
        "active": {"c1": [{"id": "inc-1", "companyName": "Acme", "monthlyAmount": 4200}]},
        "passive": {"c1": []},
    },
    "realEstateData": {"c1": [{"id": "re-1", "propertyValue": 350000}]},
    "assetsData": {"c1": [{"id": "a-1", "category": "Checking", "amount": 5000}]},
    "addressData": {
        "c1": {
            "present": {"addr": {"address1": "1 Main St"}, "fromDate": "2020-01-01"},
            "former": [
                {"id": "addr-1", "addr": {"address1": "9 Old Rd"}},
                {"addr": {"address1": "no id"}},
            ],
        }
    },
}


def test_parse_update_client_accepts_id_or_client_id() -> None:
    by_id = parse_action(
        {"action": "updateClientData", "params": {"id": "c1", "updates": {"firstName": "Kim"}}}
    )
    by_client_id = parse_action(
        {"action": "updateClientData", "params": {"clientId": "c1", "updates": {}}}
    )

    assert isinstance(by_id.params, UpdateClientParams)
    assert by_id.params.client_id == "c1"
    assert by_id.params.updates == ClientFields(first_name="Kim")
    assert by_client_id.client_id == "c1"


def test_parse_add_client_with_return_id() -> None:
    action = parse_action(
        {"action": "addClient", "params": {"firstName": "Kim", "phone": ""}, "returnId": "c2"}
    )

    assert isinstance(action.params, AddClientParams)
    assert action.params.fields == ClientFields(first_name="Kim")
    assert action.placeholder == "$c2"


def test_parse_nested_addresses() -> None:
    employment = parse_action(
        {
            "action": "updateEmploymentRecord",
            "params": {
                "clientId": "c1",
                "recordId": "$emp1",
                "updates": {
                    "employerName": "Acme",
                    "grossMonthlyIncome": "5000",
                    "employerAddress": {"address1": "1 Plant Rd", "city": "Springfield"},
                },
            },
        }
    )
    present = parse_action(
        {
            "action": "updateAddressData",
            "params": {"clientId": "c1", "data": {"addr": {"address1": "742 Evergreen"}}},
        }
    )
    former = parse_action(
        {
            "action": "addFormerAddress",
            "params": {
                "clientId": "c1",
                "address": {"addr": {"address1": "9 Old Rd"}, "fromDate": "2015-01-01"},
            },
            "returnId": "$addr1",
        }
    )

    assert isinstance(employment.params, UpdateEmploymentRecordParams)
    assert employment.params.updates.gross_monthly_income == 5000.0
    assert employment.params.updates.employer_address is not None
    assert employment.params.updates.employer_address.city == "Springfield"
    assert isinstance(present.params, UpdateAddressDataParams)
    assert present.params.data.addr is not None
    assert present.params.data.addr.address1 == "742 Evergreen"
    assert isinstance(former.params, AddFormerAddressParams)
    assert former.params.address.from_date == "2015-01-01"


def test_parse_income_and_shared_owner_references() -> None:
    income = parse_action(
        {
            "action": "updateActiveIncome",
            "params": {
                "clientId": "c1",
                "recordId": "$inc1",
                "updates": {"employmentRecordId": "$emp1", "monthlyAmount": 0},
            },
        }
    )
    shared = parse_action(
        {
            "action": "setSharedOwners",
            "params": {"clientId": "c1", "assetId": "$a1", "sharedClientIds": ["c2"]},
        }
    )

    assert isinstance(income.params, UpdateActiveIncomeParams)
    assert income.params.updates.employment_record_id == "$emp1"
    assert income.params.updates.monthly_amount == 0
    assert isinstance(shared.params, SetSharedOwnersParams)
    assert shared.params.shared_client_ids == ("c2",)


def test_unknown_action_name_is_kept_as_unrecognized() -> None:
    action = parse_action({"action": "deleteClient", "params": {"clientId": "c1"}})

    assert action.kind is ActionKind.UNRECOGNIZED
    assert isinstance(action.params, UnrecognizedParams)
    assert action.client_id == "c1"
    assert dump_action(action) == {"action": "deleteClient", "params": {"clientId": "c1"}}


def test_malformed_payloads_raise_with_index() -> None:
    with pytest.raises(MalformedActionError) as excinfo:
        parse_actions([{"action": "addClient"}, {"params": {}}])

    assert excinfo.value.index == 1
    assert str(excinfo.value).startswith("Action #1: ")

    with pytest.raises(MalformedActionError):
        parse_action(
            {
                "action": "updateActiveIncome",
                "params": {"clientId": "c1", "updates": {"monthlyAmount": "lots"}},
            }
        )

    with pytest.raises(MalformedActionError):
        parse_actions("not a list")


def test_parse_actions_accepts_wrapped_batch() -> None:
    actions = parse_actions({"actions": [{"action": "addAsset", "params": {"clientId": "c1"}}]})

    assert [action.kind for action in actions] == [ActionKind.ADD_ASSET]


def test_parse_state_builds_snapshot() -> None:
    state = parse_state(STATE_PAYLOAD)

    assert state.has_client("c1")
    assert state.clients["c1"].summary().display_name == "Jane Doe"
    employment = state.records_for("c1", RecordKind.EMPLOYMENT)
    assert [record.id for record in employment] == ["emp-1"]
    assert employment[0].data.start_date is None
    assert state.records_for("c1", RecordKind.ACTIVE_INCOME)[0].data.monthly_amount == 4200
    assert state.records_for("c1", RecordKind.ASSET)[0].data.category == "Checking"
    assert [record.id for record in state.records_for("c1", RecordKind.FORMER_ADDRESS)] == [
        "addr-1"
    ]
    present = state.addresses["c1"].present
    assert present is not None
    assert present.from_date == "2020-01-01"


def test_dump_action_round_trips_wire_names() -> None:
    payload = {
        "action": "updateClientData",
        "params": {"id": "c1", "updates": {"firstName": "Kim"}},
    }

    assert dump_action(parse_action(payload)) == payload


def test_dump_report_shapes_json() -> None:
    applied = parse_action(
        {"action": "addClient", "params": {"firstName": "Kim"}, "returnId": "$c2"}
    )
    failed = parse_action({"action": "addAsset", "params": {"clientId": "$ghost"}})
    report = ExecutionReport(
        applied=[
            AppliedAction(
                action=applied,
                resolved=applied,
                created_id="client-1",
                summary=summarize(applied.params, client_name="Kim"),
            )
        ],
        failed=[FailedAction(action=failed, error="Unresolved placeholder $ghost")],
        id_map={"$c2": "client-1"},
    )

    payload = dump_report(report)

    assert payload["applied"][0]["createdId"] == "client-1"
    assert payload["applied"][0]["action"] == {
        "action": "addClient",
        "params": {"firstName": "Kim"},
        "returnId": "$c2",
    }
    assert payload["applied"][0]["summary"]["description"] == "Added new client"
    assert payload["applied"][0]["summary"]["type"] == "client"
    assert payload["failed"] == [
        {
            "action": {"action": "addAsset", "params": {"clientId": "$ghost"}},
            "error": "Unresolved placeholder $ghost",
        }
    ]
    assert payload["idMap"] == {"$c2": "client-1"}
    assert payload["rejected"] == []
    assert payload["merged"] == []
