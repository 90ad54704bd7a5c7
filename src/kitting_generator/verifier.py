"""Consistency checks for freshly generated layouts."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from kitting_generator import scoring
from kitting_generator.config import GeneratorConfig
from kitting_generator.exceptions import InvariantViolation
from kitting_generator.models import Layout, Part

logger = logging.getLogger(__name__)

ScoreFunction = Callable[[Layout], int]


class LayoutVerifier:
    """
    Asserts that a generated layout is structurally valid and, unless the
    config allows random preferred sides, solvable with a soft score >= 0.

    Every failed check raises :class:`InvariantViolation`.
    """

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        hard_score: ScoreFunction = scoring.get_hard_score,
        soft_score: ScoreFunction = scoring.get_soft_score,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.hard_score = hard_score
        self.soft_score = soft_score

    def check(self, layout: Layout) -> None:
        self.check_part_count(layout)
        self.check_part_ids(layout)
        self.check_part_sides(layout)
        self.check_feasible(layout)
        self.check_optimal(layout)
        self.check_allowed_side_consistency(layout)
        self.check_allowed_side_count(layout)
        self.check_surface_count(layout)
        self.check_surface_sides(layout)

    def check_part_count(self, layout: Layout) -> None:
        parts = len(layout.parts)
        if parts < self.config.min_parts:
            raise InvariantViolation(f"Too few parts: {parts} < {self.config.min_parts}")
        if parts > self.config.max_parts:
            raise InvariantViolation(f"Too many parts: {parts} > {self.config.max_parts}")

    def check_part_ids(self, layout: Layout) -> None:
        parts = len(layout.parts)
        ids = len({p.id for p in layout.parts})
        if parts != ids:
            raise InvariantViolation(f"{parts} parts but {ids} part IDs")

    def check_part_sides(self, layout: Layout) -> None:
        for part in layout.parts:
            if part.min_length() < self.config.min_part_side:
                raise InvariantViolation(
                    f"Part with id {part.id} and dimensions {part.current_dimensions()} "
                    f"has a side < {self.config.min_part_side}"
                )

    def check_feasible(self, layout: Layout) -> None:
        hard = self.hard_score(layout)
        if hard < 0:
            logger.error(
                f"Infeasible layout: overlap={scoring.count_overlapping_parts(layout)} "
                f"outside={scoring.count_parts_outside(layout)} "
                f"misplaced={scoring.count_misplaced_parts(layout)} "
                f"disallowed={scoring.count_disallowed_sides_down(layout)} "
                f"unplaced={scoring.count_unplaced_parts(layout)}"
            )
            raise InvariantViolation(f"Layout not feasible. Hard score: {hard}")

    def check_optimal(self, layout: Layout) -> None:
        soft = self.soft_score(layout)
        # When preferred might be impossible, we tolerate a soft score < 0.
        if self.config.random_preferred_probability == 0.0 and soft < 0:
            raise InvariantViolation(f"Layout not optimal. Soft score: {soft}")

    def check_allowed_side_consistency(self, layout: Layout) -> None:
        for part in layout.parts:
            allowed = part.allowed_down
            if part.preferred_down is not None and part.preferred_down not in allowed:
                raise InvariantViolation(
                    f"Preferred side inconsistent for part with id {part.id}. "
                    f"Preferred = {part.preferred_down.value} but allowed = {_side_names(part)}"
                )
            hint = part.hint
            if hint is not None and hint.side is not None and hint.side not in allowed:
                raise InvariantViolation(
                    f"Hint side inconsistent for part with id {part.id}. "
                    f"Hint = {hint.side.value} but allowed = {_side_names(part)}"
                )

    def check_allowed_side_count(self, layout: Layout) -> None:
        for part in layout.parts:
            allowed = len(part.allowed_down)
            if allowed < self.config.min_allowed_down:
                raise InvariantViolation(
                    f"Part with id {part.id} only has {allowed} < {self.config.min_allowed_down} sides allowed."
                )
            if allowed > self.config.max_allowed_down:
                raise InvariantViolation(
                    f"Part with id {part.id} has {allowed} > {self.config.max_allowed_down} sides allowed."
                )

    def check_surface_count(self, layout: Layout) -> None:
        surfaces = len(layout.wagon.surfaces)
        if surfaces < self.config.min_surfaces:
            raise InvariantViolation(f"Too few surfaces: {surfaces} < {self.config.min_surfaces}")
        if surfaces > self.config.max_surfaces:
            raise InvariantViolation(f"Too many surfaces: {surfaces} > {self.config.max_surfaces}")

    def check_surface_sides(self, layout: Layout) -> None:
        lo = self.config.min_surface_side
        hi = self.config.max_surface_side
        for surface in layout.wagon.surfaces:
            msg = f"Surface with id {surface.id} and dimensions {surface.size}"
            if surface.width < lo:
                raise InvariantViolation(f"{msg} has width < {lo}")
            if surface.depth < lo:
                raise InvariantViolation(f"{msg} has depth < {lo}")
            if surface.width > hi:
                raise InvariantViolation(f"{msg} has width > {hi}")
            if surface.depth > hi:
                raise InvariantViolation(f"{msg} has depth > {hi}")


def _side_names(part: Part) -> list[str]:
    return [s.value for s in part.sorted_allowed_down()]
