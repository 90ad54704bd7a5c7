"""Tests for planning-request conversion and JSON output."""

from __future__ import annotations

import json

from kitting_generator.generator import new_generator
from kitting_generator.io.schemas import PlanningRequest, request_to_json, to_planning_request
from kitting_generator.models import MANDATORY_WEIGHT, ALL_SIDES


def test_layout_to_planning_request() -> None:
    layout = new_generator(123).random_layout()

    request = to_planning_request(layout, kit_id="123-0", chassis_id="123-0")

    assert request.kit.kit_id == "123-0"
    assert request.kit.chassis_id == "123-0"
    assert len(request.parts) == len(layout.parts)
    assert request.wagon_hint.wagon == layout.wagon
    assert request.wagon_hint.weight == MANDATORY_WEIGHT


def test_request_json_fields() -> None:
    layout = new_generator(7).random_layout()
    request = to_planning_request(layout, kit_id="7-0", chassis_id="c")

    data = json.loads(request_to_json(request))

    assert set(data) == {"kit", "parts", "wagon_hint"}
    part = data["parts"][0]
    assert {"id", "size", "position", "rotation", "side_down", "allowed_down", "preferred_down", "hint"} == set(part)
    assert part["position"] is None
    order = [s.value for s in ALL_SIDES]
    for p in data["parts"]:
        assert p["allowed_down"] == sorted(p["allowed_down"], key=order.index)
    assert len(data["wagon_hint"]["wagon"]["surfaces"]) == len(layout.wagon.surfaces)


def test_request_json_is_stable() -> None:
    """Same seed, same JSON text."""
    first = request_to_json(to_planning_request(new_generator(11).random_layout(), "k", "c"))
    second = request_to_json(to_planning_request(new_generator(11).random_layout(), "k", "c"))

    assert first == second


def test_request_json_round_trip() -> None:
    layout = new_generator(3).random_layout()
    request = to_planning_request(layout, "k", "c")

    parsed = PlanningRequest.model_validate_json(request_to_json(request))

    assert [p.allowed_down for p in parsed.parts] == [p.allowed_down for p in layout.parts]
    assert [p.hint for p in parsed.parts] == [p.hint for p in layout.parts]
