from __future__ import annotations

import itertools

import pytest

from kitting_generator.geometry import (
    current_dimensions,
    is_inside,
    raw_dimensions,
    rects_overlap,
    rotate_onto_side,
)
from kitting_generator.models import Dimensions, Part, Rotation, Side, Surface


def test_rects_overlap_overlapping() -> None:
    """Test that overlapping rectangles are detected."""
    # a: (0, 0) to (2, 2); b: (1, 1) to (3, 3) - overlaps with a
    a = (0, 0, 2, 2)
    b = (1, 1, 3, 3)

    assert rects_overlap(a, b) is True


def test_rects_overlap_not_overlapping() -> None:
    """Test that separate rectangles are not reported."""
    a = (0, 0, 1, 1)
    b = (2, 2, 3, 3)

    assert rects_overlap(a, b) is False


def test_rects_touching_edges_do_not_overlap() -> None:
    a = (0, 0, 10, 10)
    b = (10, 0, 20, 10)

    assert rects_overlap(a, b) is False


def test_side_opposites_are_involutive() -> None:
    for side in Side:
        assert side.opposite() != side
        assert side.opposite().opposite() == side


def test_rotation_inverse() -> None:
    for rotation in Rotation:
        assert rotation.inverse().inverse() == rotation


def test_resting_side_moves_height() -> None:
    size = Dimensions.of(10, 20, 30)

    assert rotate_onto_side(Side.bottom, size) == size
    assert rotate_onto_side(Side.top, size) == size
    assert rotate_onto_side(Side.front, size) == Dimensions.of(10, 30, 20)
    assert rotate_onto_side(Side.right, size) == Dimensions.of(30, 20, 10)


def test_z90_swaps_footprint() -> None:
    size = Dimensions.of(10, 20, 30)

    assert current_dimensions(size, Rotation.Z90, Side.bottom) == Dimensions.of(20, 10, 30)


@pytest.mark.parametrize("rotation,side", list(itertools.product(Rotation, Side)))
def test_orientation_round_trip(rotation: Rotation, side: Side) -> None:
    """Orienting a box and undoing it gives back the exact raw size."""
    raw = Dimensions.of(37, 211, 498)

    current = current_dimensions(raw, rotation, side)

    assert raw_dimensions(current, rotation, side) == raw
    # And the other way: a raw size chosen for a given footprint reproduces it.
    assert current_dimensions(raw_dimensions(raw, rotation, side), rotation, side) == raw


def test_missing_orientation_keeps_size() -> None:
    size = Dimensions.of(1, 2, 3)

    assert current_dimensions(size, None, None) == size


def test_is_inside() -> None:
    surface = Surface(id=0, size=Dimensions.of(100, 100, 50), origin=Dimensions.of(0, 0, 0))
    inside = Part(id=1, size=Dimensions.of(50, 50, 40), position=Dimensions.of(50, 50, 0))
    sticking_out = Part(id=2, size=Dimensions.of(50, 50, 40), position=Dimensions.of(60, 0, 0))
    too_tall = Part(id=3, size=Dimensions.of(10, 10, 60), position=Dimensions.of(0, 0, 0))

    assert is_inside(inside, surface)
    assert not is_inside(sticking_out, surface)
    assert not is_inside(too_tall, surface)
