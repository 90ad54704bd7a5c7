from __future__ import annotations

from kitting_generator.models import (
    MANDATORY_WEIGHT,
    Dimensions,
    Layout,
    LayoutHint,
    Part,
    Rotation,
    Side,
    Surface,
    Wagon,
)
from kitting_generator.scoring import (
    count_disallowed_sides_down,
    count_misplaced_parts,
    count_overlapping_parts,
    count_parts_outside,
    count_unplaced_parts,
    get_hard_score,
    get_soft_score,
)


def make_wagon() -> Wagon:
    size = Dimensions.of(100, 100, 50)
    return Wagon(
        name="wagon",
        surfaces=[
            Surface(id=0, size=size, origin=Dimensions.of(0, 0, 0)),
            Surface(id=1, size=size, origin=Dimensions.of(0, 0, 50)),
        ],
    )


def placed(part_id: int, x: int, y: int, surface: int = 0, **kwargs) -> Part:
    return Part(
        id=part_id,
        size=Dimensions.of(40, 40, 20),
        position=Dimensions.of(x, y, surface),
        rotation=Rotation.ZERO,
        side_down=Side.bottom,
        **kwargs,
    )


def test_feasible_layout_scores_zero() -> None:
    layout = Layout(wagon=make_wagon(), parts=[placed(1, 0, 0), placed(2, 40, 0), placed(3, 0, 0, surface=1)])

    assert get_hard_score(layout) == 0
    assert get_soft_score(layout) == 0


def test_overlap_only_counts_same_surface() -> None:
    layout = Layout(wagon=make_wagon(), parts=[placed(1, 0, 0), placed(2, 20, 20), placed(3, 0, 0, surface=1)])

    assert count_overlapping_parts(layout) == 2
    assert get_hard_score(layout) == -2


def test_outside_and_unknown_surface() -> None:
    layout = Layout(wagon=make_wagon(), parts=[placed(1, 70, 0), placed(2, 0, 0, surface=5)])

    assert count_parts_outside(layout) == 2


def test_disallowed_side() -> None:
    part = placed(1, 0, 0, allowed_down=frozenset({Side.top, Side.left}))
    layout = Layout(wagon=make_wagon(), parts=[part])

    assert count_disallowed_sides_down(layout) == 1
    assert get_hard_score(layout) < 0


def test_mandatory_hint_violation_is_hard() -> None:
    hint = LayoutHint(position=Dimensions.of(80, 80, 0), surface=0, weight=MANDATORY_WEIGHT)
    layout = Layout(wagon=make_wagon(), parts=[placed(1, 0, 0, hint=hint)])

    assert count_misplaced_parts(layout) == 1
    assert get_hard_score(layout) == -1
    assert get_soft_score(layout) == 0


def test_met_mandatory_hint() -> None:
    part = placed(1, 10, 10)
    hint = LayoutHint(
        position=part.current_center(),
        surface=0,
        rotation=Rotation.ZERO,
        side=Side.bottom,
        weight=MANDATORY_WEIGHT,
    )
    layout = Layout(wagon=make_wagon(), parts=[part.model_copy(update={"hint": hint})])

    assert get_hard_score(layout) == 0


def test_soft_hint_penalty_is_weight() -> None:
    hint = LayoutHint(position=Dimensions.of(80, 80, 0), surface=0, weight=4)
    layout = Layout(wagon=make_wagon(), parts=[placed(1, 0, 0, hint=hint)])

    assert get_hard_score(layout) == 0
    assert get_soft_score(layout) == -4


def test_preferred_side_penalty() -> None:
    layout = Layout(wagon=make_wagon(), parts=[placed(1, 0, 0, preferred_down=Side.top)])

    assert get_soft_score(layout) == -1


def test_unplaced_parts_are_infeasible() -> None:
    layout = Layout(wagon=make_wagon(), parts=[Part(id=1, size=Dimensions.of(10, 10, 10))])

    assert count_unplaced_parts(layout) == 1
    assert get_hard_score(layout) == -1
