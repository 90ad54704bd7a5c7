"""Geometry utilities for part layouts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from kitting_generator.models import Dimensions, Rotation, Side

if TYPE_CHECKING:
    from .models import Part, Surface


# Axis permutation applied to raw (x, y, z) when resting on each side.
# Opposite sides share a permutation, and every permutation is an involution.
_SIDE_AXES: dict[Side, tuple[int, int, int]] = {
    Side.bottom: (0, 1, 2),
    Side.top: (0, 1, 2),
    Side.front: (0, 2, 1),
    Side.back: (0, 2, 1),
    Side.left: (2, 1, 0),
    Side.right: (2, 1, 0),
}

_ROTATION_AXES: dict[Rotation, tuple[int, int, int]] = {
    Rotation.ZERO: (0, 1, 2),
    Rotation.Z90: (1, 0, 2),
}


def _permute(dims: Dimensions, axes: tuple[int, int, int]) -> Dimensions:
    values = (dims.x, dims.y, dims.z)
    return Dimensions.of(values[axes[0]], values[axes[1]], values[axes[2]])


def rotate_onto_side(side: Side, dims: Dimensions) -> Dimensions:
    """Dimensions of a box with raw size ``dims`` after resting it on ``side``."""
    return _permute(dims, _SIDE_AXES[side])


def rotate_z(rotation: Rotation, dims: Dimensions) -> Dimensions:
    """Rotate about the vertical axis. Only 0 and 90 degrees are supported."""
    return _permute(dims, _ROTATION_AXES[rotation])


def current_dimensions(
    size: Dimensions,
    rotation: Optional[Rotation],
    side: Optional[Side],
) -> Dimensions:
    """
    Dimensions as placed: raw size put on ``side`` first, then rotated.
    A missing side or rotation leaves the size as it is.
    """
    dims = size
    if side is not None:
        dims = rotate_onto_side(side, dims)
    if rotation is not None:
        dims = rotate_z(rotation, dims)
    return dims


def raw_dimensions(current: Dimensions, rotation: Rotation, side: Side) -> Dimensions:
    """Inverse of :func:`current_dimensions`: undo the rotation, then the side."""
    before_rotation = rotate_z(rotation.inverse(), current)
    return rotate_onto_side(side.opposite(), before_rotation)


def footprint_bounds(position: Dimensions, dims: Dimensions) -> tuple[int, int, int, int]:
    """Footprint as (x1, y1, x2, y2)."""
    return (position.x, position.y, position.x + dims.x, position.y + dims.y)


def part_bounds(part: "Part") -> tuple[int, int, int, int]:
    if part.position is None:
        raise ValueError(f"Part {part.id} is not placed")
    return footprint_bounds(part.position, part.current_dimensions())


def rects_overlap(
    a: tuple[int, int, int, int],
    b: tuple[int, int, int, int],
) -> bool:
    """
    Axis-aligned rectangle overlap test.

    a, b are bounds: (x1, y1, x2, y2)

    Overlap exists only if they overlap on both axes with positive area.
    Touching edges (ax2 == bx1) is NOT considered overlap.
    """
    ax1, ay1, ax2, ay2 = a
    bx1, by1, bx2, by2 = b

    return (ax1 < bx2 and ax2 > bx1) and (ay1 < by2 and ay2 > by1)


def parts_overlap(a: "Part", b: "Part") -> bool:
    """Two placed parts overlap if they share a surface and their footprints overlap."""
    if a.position is None or b.position is None:
        return False
    if a.position.z != b.position.z:
        return False
    return rects_overlap(part_bounds(a), part_bounds(b))


def is_inside(part: "Part", surface: "Surface") -> bool:
    """
    Check that a placed part lies within the surface footprint and that it
    is not taller than the shelf height.
    """
    x1, y1, x2, y2 = part_bounds(part)
    if x1 < 0 or y1 < 0:
        return False
    if x2 > surface.size.x or y2 > surface.size.y:
        return False
    return part.current_dimensions().z <= surface.size.z


def footprint_area(dims: Dimensions) -> int:
    return dims.x * dims.y
