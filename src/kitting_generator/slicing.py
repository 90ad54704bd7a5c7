# src/kitting_generator/slicing.py

from __future__ import annotations

import logging

from kitting_generator.exceptions import InvariantViolation
from kitting_generator.models import ZERO, Dimensions, Part, Rotation, Side, Surface
from kitting_generator.rng import Rng

logger = logging.getLogger(__name__)


def can_slice(part: Part, min_part_side: int) -> bool:
    """Both halves must keep at least ``min_part_side`` on x and on y."""
    return part.size.x // 2 > min_part_side and part.size.y // 2 > min_part_side


def fill_surface(
    rng: Rng,
    surface: Surface,
    parts: int,
    min_part_side: int,
    surface_height: int,
) -> list[Part]:
    """
    Return ``parts`` parts whose footprints exactly fill the given surface.

    Implemented by repeatedly slicing a randomly chosen part in two, so the
    dimensions (and areas) of parts come out roughly normally distributed.
    Heights are then drawn independently in [min_part_side, surface_height[.
    """
    done: list[Part] = []
    sliceable: list[Part] = [
        Part(
            id=0,
            size=surface.size,
            position=ZERO.with_z(surface.id),
            side_down=Side.bottom,
            rotation=Rotation.ZERO,
        )
    ]

    # Randomly remove one part, slice it, and add the two halves.
    # Loop until desired number of parts have been added.
    while sliceable and len(sliceable) + len(done) < parts:
        part = rng.take_random(sliceable)
        if not can_slice(part, min_part_side):
            done.append(part)
            continue
        sliceable.extend(random_slice(rng, part, min_part_side))
    done.extend(sliceable)

    if len(done) != parts:
        raise InvariantViolation(
            f"Sliced surface {surface.id} ({surface.size}) into {len(done)} parts, expected {parts}"
        )

    # Randomize heights.
    result = []
    for part in done:
        height = rng.bounded_int(min_part_side, surface_height - 1)
        result.append(part.model_copy(update={"size": part.size.with_z(height)}))

    logger.debug(f"Filled surface {surface.id} ({surface.size}) with {len(result)} parts")
    return result


def random_slice(rng: Rng, part: Part, min_part_side: int) -> list[Part]:
    if rng.bernoulli(0.5):
        return slice_x(rng, part, min_part_side)
    return slice_y(rng, part, min_part_side)


def slice_x(rng: Rng, p1: Part, min_part_side: int) -> list[Part]:
    """
    Cut a part in two along x. Returns both halves.

    +------+--------+
    |x,y   |x2,y2   |
    |      |        | d
    |      |        |
    +------+--------+
          w1       w2
    """
    size = p1.size
    # w1 is the new width of part 1, w2 the remainder.
    w1 = rng.bounded_int(min_part_side, size.x - min_part_side)
    w2 = size.x - w1
    # The old part keeps its position; the new one starts at the cut.
    first = p1.model_copy(update={"size": size.with_x(w1)})
    second = p1.model_copy(
        update={
            "id": p1.id + 1,
            "size": size.with_x(w2),
            "position": p1.position.plus(Dimensions.of(w1, 0, 0)),
        }
    )
    return [first, second]


def slice_y(rng: Rng, p1: Part, min_part_side: int) -> list[Part]:
    """
    Cut a part in two along y. Returns both halves.

    +-------------+
    |x,y          |
    |             |
    +-------------+ d1
    |x2,y2        |
    +-------------+ d2
           w
    """
    size = p1.size
    d1 = rng.bounded_int(min_part_side, size.y - min_part_side)
    d2 = size.y - d1
    first = p1.model_copy(update={"size": size.with_y(d1)})
    second = p1.model_copy(
        update={
            "id": p1.id + 1,
            "size": size.with_y(d2),
            "position": p1.position.plus(Dimensions.of(0, d1, 0)),
        }
    )
    return [first, second]
