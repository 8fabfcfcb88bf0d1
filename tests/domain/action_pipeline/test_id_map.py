from __future__ import annotations

import pytest

from mortgage_actions.domain.action_pipeline import DynamicIdMap
from mortgage_actions.domain.errors import PipelineInvariantError, PlaceholderRebindError


def test_bind_normalises_placeholder_spelling() -> None:
    id_map = DynamicIdMap()

    id_map.bind("emp1", "emp-42")

    assert id_map.get("$emp1") == "emp-42"
    assert id_map.has("emp1")
    assert id_map.as_dict() == {"$emp1": "emp-42"}


def test_rebinding_placeholder_raises() -> None:
    id_map = DynamicIdMap()
    id_map.bind("$c2", "client-1")

    with pytest.raises(PlaceholderRebindError) as excinfo:
        id_map.bind("c2", "client-2")

    assert excinfo.value.placeholder == "$c2"
    assert excinfo.value.existing_id == "client-1"
    assert isinstance(excinfo.value, PipelineInvariantError)
    assert id_map.get("$c2") == "client-1"


def test_seeded_map_iterates_in_binding_order() -> None:
    id_map = DynamicIdMap.seeded({"$a": "1", "b": "2"})

    assert list(id_map) == ["$a", "$b"]
    assert len(id_map) == 2
    assert id_map.get("$missing") is None
