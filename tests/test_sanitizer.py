from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from careerpath.agents.errors import RoadmapValidationError
from careerpath.agents.sanitizer import parse_roadmap_items, strip_code_fences

from conftest import milestones_json


def test_strip_code_fences_json_block() -> None:
    assert strip_code_fences('```json\n[1, 2]\n```') == "[1, 2]"


def test_strip_code_fences_plain_block_and_whitespace() -> None:
    assert strip_code_fences('  ```\n{"a": 1}\n```  ') == '{"a": 1}'


def test_strip_code_fences_leaves_unfenced_text() -> None:
    assert strip_code_fences('  [{"title": "x"}] ') == '[{"title": "x"}]'


def test_parse_valid_items() -> None:
    items = parse_roadmap_items(milestones_json(5))

    assert len(items) == 5
    assert items[0].title == "Milestone 1"
    assert items[0].year == 2026


def test_parse_fenced_items() -> None:
    items = parse_roadmap_items(f"```json\n{milestones_json(6)}\n```")

    assert len(items) == 6


def test_trailing_comma_is_rejected() -> None:
    text = '[{"title": "A", "year": 2026, "description": "B"},]'

    with pytest.raises(RoadmapValidationError):
        parse_roadmap_items(text)


def test_object_payload_is_rejected() -> None:
    with pytest.raises(RoadmapValidationError, match="not an array"):
        parse_roadmap_items('{"roadmap": []}')


@pytest.mark.parametrize(
    "bad_item, field",
    [
        ({"title": "A", "description": "B"}, "year"),
        ({"title": "A", "year": "2026", "description": "B"}, "year"),
        ({"title": "A", "year": True, "description": "B"}, "year"),
        ({"title": "A", "year": 2026.5, "description": "B"}, "year"),
        ({"year": 2026, "description": "B"}, "title"),
        ({"title": "", "year": 2026, "description": "B"}, "title"),
        ({"title": "A", "year": 2026, "description": 7}, "description"),
    ],
)
def test_invalid_item_names_failing_index(bad_item, field) -> None:
    items = json.loads(milestones_json(3))
    items.insert(2, bad_item)

    with pytest.raises(RoadmapValidationError) as excinfo:
        parse_roadmap_items(json.dumps(items))

    assert excinfo.value.index == 2
    assert f"Item 2 missing or invalid {field}" in str(excinfo.value)


def test_non_object_item_is_rejected() -> None:
    with pytest.raises(RoadmapValidationError) as excinfo:
        parse_roadmap_items('["just a string"]')

    assert excinfo.value.index == 0


def test_item_errors_come_from_pydantic_validation() -> None:
    bad = '[{"title": "A", "year": 2026, "description": "B"}, {"title": "C", "year": "soon", "description": "D"}]'

    with pytest.raises(RoadmapValidationError) as excinfo:
        parse_roadmap_items(bad)

    assert isinstance(excinfo.value.__cause__, ValidationError)
    assert excinfo.value.index == 1
    assert "Item 1 missing or invalid year" in str(excinfo.value)


def test_first_failing_index_is_reported() -> None:
    items = json.loads(milestones_json(4))
    del items[1]["title"]
    del items[3]["description"]

    with pytest.raises(RoadmapValidationError) as excinfo:
        parse_roadmap_items(json.dumps(items))

    assert excinfo.value.index == 1
