"""Planning-request values handed to the layout planner, and their JSON form."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_serializer

from kitting_generator.models import ALL_SIDES, MANDATORY_WEIGHT, Layout, Part, Side, Wagon


class PartSchema(Part):
    """Part as exchanged with the planner; allowed sides serialize in a stable order."""

    @field_serializer("allowed_down")
    def serialize_allowed_down(self, allowed: frozenset[Side]) -> list[str]:
        return [s.value for s in ALL_SIDES if s in allowed]


class Kit(BaseModel):
    """Identifies the kit to lay out and the chassis it belongs to."""
    kit_id: str = Field(description="Kit identifier")
    chassis_id: str = Field(description="Chassis identifier")


class WagonHint(BaseModel):
    """Suggested wagon; a weight at or above the mandatory weight makes it required."""
    wagon: Wagon
    weight: int = Field(ge=0, description="Importance of the wagon choice")


class PlanningRequest(BaseModel):
    """Schema for a planning request."""
    kit: Kit
    parts: List[PartSchema] = Field(min_length=1, description="Parts to lay out")
    wagon_hint: Optional[WagonHint] = None


def to_planning_request(
    layout: Layout,
    kit_id: str,
    chassis_id: str,
    wagon_hint_weight: int = MANDATORY_WEIGHT,
) -> PlanningRequest:
    return PlanningRequest(
        kit=Kit(kit_id=kit_id, chassis_id=chassis_id),
        parts=[PartSchema(**p.model_dump()) for p in layout.parts],
        wagon_hint=WagonHint(wagon=layout.wagon, weight=wagon_hint_weight),
    )


def request_to_json(request: PlanningRequest) -> str:
    return request.model_dump_json(indent=2)
