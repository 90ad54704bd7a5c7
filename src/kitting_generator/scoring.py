"""Hard and soft scores for layouts."""

from __future__ import annotations

from kitting_generator.geometry import is_inside, parts_overlap
from kitting_generator.models import Layout, Part


def _matches_hint(part: Part) -> bool:
    """True if a placed part is where, and how, its hint asks."""
    hint = part.hint
    if hint is None or part.position is None:
        return False
    if part.position.z != hint.surface:
        return False
    if part.current_center() != hint.position:
        return False
    if hint.rotation is not None and part.rotation != hint.rotation:
        return False
    if hint.side is not None and part.side_down != hint.side:
        return False
    return True


class Constraint:
    """Base class for layout constraints."""

    def count(self, layout: Layout) -> int:
        """
        Measure how badly the layout breaks the constraint.

        Args:
            layout: Layout to check

        Returns:
            0 if the constraint is satisfied, a positive penalty otherwise
        """
        raise NotImplementedError


class OverlapConstraint(Constraint):
    """Counts parts that overlap at least one other part on the same surface."""

    def count(self, layout: Layout) -> int:
        placed = [p for p in layout.parts if p.is_placed]
        overlapping = set()
        for i in range(len(placed)):
            for j in range(i + 1, len(placed)):
                if parts_overlap(placed[i], placed[j]):
                    overlapping.add(i)
                    overlapping.add(j)
        return len(overlapping)


class OutsideConstraint(Constraint):
    """Counts parts that are not within the surface they rest on."""

    def count(self, layout: Layout) -> int:
        outside = 0
        for part in layout.parts:
            if not part.is_placed:
                continue
            surface = layout.wagon.surface(part.position.z)
            if surface is None or not is_inside(part, surface):
                outside += 1
        return outside


class MandatoryHintConstraint(Constraint):
    """Counts parts that ignore a mandatory hint."""

    def count(self, layout: Layout) -> int:
        return sum(
            1
            for p in layout.parts
            if p.is_placed and p.hint is not None and p.hint.is_mandatory and not _matches_hint(p)
        )


class AllowedSideConstraint(Constraint):
    """Counts parts resting on a side they may not rest on."""

    def count(self, layout: Layout) -> int:
        return sum(
            1
            for p in layout.parts
            if p.is_placed and p.side_down is not None and p.side_down not in p.allowed_down
        )


class UnplacedConstraint(Constraint):
    """Counts parts without a position, rotation or resting side."""

    def count(self, layout: Layout) -> int:
        return sum(1 for p in layout.parts if p.position is None or p.rotation is None or p.side_down is None)


class PreferredSideConstraint(Constraint):
    """One point per placed part not resting on its preferred side."""

    def count(self, layout: Layout) -> int:
        return sum(
            1
            for p in layout.parts
            if p.is_placed and p.preferred_down is not None and p.side_down != p.preferred_down
        )


class SoftHintConstraint(Constraint):
    """Sums the weights of non-mandatory hints that are not met."""

    def count(self, layout: Layout) -> int:
        return sum(
            p.hint.weight
            for p in layout.parts
            if p.is_placed and p.hint is not None and not p.hint.is_mandatory and not _matches_hint(p)
        )


def count_overlapping_parts(layout: Layout) -> int:
    return OverlapConstraint().count(layout)


def count_parts_outside(layout: Layout) -> int:
    return OutsideConstraint().count(layout)


def count_misplaced_parts(layout: Layout) -> int:
    return MandatoryHintConstraint().count(layout)


def count_disallowed_sides_down(layout: Layout) -> int:
    return AllowedSideConstraint().count(layout)


def count_unplaced_parts(layout: Layout) -> int:
    return UnplacedConstraint().count(layout)


HARD_CONSTRAINTS: tuple[Constraint, ...] = (
    OverlapConstraint(),
    OutsideConstraint(),
    MandatoryHintConstraint(),
    AllowedSideConstraint(),
    UnplacedConstraint(),
)

SOFT_CONSTRAINTS: tuple[Constraint, ...] = (
    PreferredSideConstraint(),
    SoftHintConstraint(),
)


def get_hard_score(layout: Layout) -> int:
    """Negative if the layout is infeasible."""
    return -sum(c.count(layout) for c in HARD_CONSTRAINTS)


def get_soft_score(layout: Layout) -> int:
    """Negative if some soft preference is not met."""
    return -sum(c.count(layout) for c in SOFT_CONSTRAINTS)
