"""
Randomly generate layout planning problems.

Each layout is built by filling the surfaces of a random wagon with parts
that exactly tile a shrunken copy of each surface, so a perfect solution is
known to exist. Orientations, hints and preferred sides are then randomized
in ways that keep that solution valid, and the result is checked before it
is handed out.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from kitting_generator.config import GeneratorConfig
from kitting_generator.exceptions import InvariantViolation
from kitting_generator.geometry import raw_dimensions
from kitting_generator.models import (
    ALL_SIDES,
    DEFAULT_WEIGHT,
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
from kitting_generator.rng import Rng
from kitting_generator.slicing import fill_surface
from kitting_generator.verifier import LayoutVerifier

logger = logging.getLogger(__name__)


class ProblemGenerator:
    """Generates random layouts from one seeded random source."""

    def __init__(
        self,
        rng: Rng,
        config: Optional[GeneratorConfig] = None,
        verifier: Optional[LayoutVerifier] = None,
    ) -> None:
        self.rng = rng
        self.config = config or GeneratorConfig()
        self.verifier = verifier or LayoutVerifier(self.config)

    @classmethod
    def from_seed(cls, seed: int, config: Optional[GeneratorConfig] = None) -> ProblemGenerator:
        return cls(Rng(seed), config)

    def random_solved_layout(self) -> Layout:
        """Generate a solved layout."""
        return self.random_layout(True)

    def random_layout(self, solved: bool = False) -> Layout:
        """Generate a layout; unsolved (no placements) unless ``solved`` is set."""
        cfg = self.config
        wagon = self.random_wagon()
        density = self.rng.bounded_double(cfg.min_density, cfg.max_density)
        part_count = self.rng.bounded_int(cfg.min_parts, cfg.max_parts)

        parts: list[Part] = []
        counts = split_count(part_count, len(wagon.surfaces))
        for surface, count in zip(wagon.surfaces, counts):
            shrunk = self.shrink_to_density(surface, density)
            parts.extend(fill_surface(self.rng, shrunk, count, cfg.min_part_side, cfg.surface_height))

        parts = renumber(parts)
        parts = self.add_allowed_sides(parts)
        parts = self.shuffle_parts(parts)
        parts = self.add_hints(parts)
        parts = self.add_preferred_sides(parts)
        layout = Layout(wagon=wagon, parts=parts)
        self.verifier.check(layout)

        if not solved:
            layout = self.unsolve(layout)
        logger.info(
            f"Generated {'solved' if solved else 'unsolved'} layout: {len(layout.parts)} parts "
            f"on {len(wagon.surfaces)} surfaces ({wagon.surfaces[0].width}x{wagon.surfaces[0].depth}), "
            f"density {density:.3f}"
        )
        return layout

    def unsolve(self, layout: Layout) -> Layout:
        """Strip placement data from every part and reshuffle the part order."""
        return layout.with_parts(self.reset_parts(layout.parts))

    def reset_parts(self, parts: Iterable[Part]) -> list[Part]:
        cleared = [p.model_copy(update={"side_down": None, "rotation": None, "position": None}) for p in parts]
        return self.rng.shuffled_copy(cleared)

    def random_wagon(self) -> Wagon:
        cfg = self.config
        width = self.rng.bounded_int(cfg.min_surface_side, cfg.max_surface_side)
        depth = self.rng.bounded_int(cfg.min_surface_side, cfg.max_surface_side)
        height = cfg.surface_height
        size = Dimensions.of(width, depth, height)
        surface_count = self.rng.bounded_int(cfg.min_surfaces, cfg.max_surfaces)
        surfaces = [
            Surface(id=i, size=size, origin=Dimensions.of(0, 0, i * height))
            for i in range(surface_count)
        ]
        return Wagon(name="wagon", surfaces=surfaces)

    def shrink_to_density(self, surface: Surface, density: float) -> Surface:
        """
        Shrink a surface so that its area is ``density`` times the original.

        Surface has area A = wd. We want A' = w'd' = (sw)(td) with A'/A = D,
        so st = D; t is drawn in [D, 1[ and s = D/t.
        """
        t = self.rng.bounded_double(density, 1)
        s = density / t
        old = surface.size
        new_size = Dimensions.of(int(old.x * s), int(old.y * t), old.z)
        return surface.model_copy(update={"size": new_size})

    def add_allowed_sides(self, parts: Iterable[Part]) -> list[Part]:
        """Give every part a random set of allowed sides that includes its current one."""
        cfg = self.config
        result = []
        for part in parts:
            count = self.rng.bounded_int(cfg.min_allowed_down, cfg.max_allowed_down)
            others = [s for s in ALL_SIDES if s != part.side_down]
            allowed = {part.side_down, *self.rng.random_sublist(others, count - 1)}
            result.append(part.model_copy(update={"allowed_down": frozenset(allowed)}))
        return result

    def shuffle_parts(self, parts: Iterable[Part]) -> list[Part]:
        """Shuffles the list of parts AND also their orientations."""
        oriented = [self.shuffle_part(p) for p in parts]
        return self.rng.shuffled_copy(oriented)

    def shuffle_part(self, part: Part) -> Part:
        """Put the part on a random allowed side with a random rotation."""
        rotation = self.random_rotation()
        side = self.random_allowed_side(part)
        return self.relabel_sides(part, rotation, side)

    def random_rotation(self) -> Rotation:
        return Rotation.Z90 if self.rng.bernoulli(0.5) else Rotation.ZERO

    def random_allowed_side(self, part: Part) -> Side:
        return self.rng.peek_random(part.sorted_allowed_down())

    def relabel_sides(self, part: Part, rotation: Rotation, side: Side) -> Part:
        """
        Orient the part as given and change its raw size so that the
        transformations cancel out. In other words, we want
        ``part.current_dimensions() == relabel_sides(part, ...).current_dimensions()``
        """
        current = part.current_dimensions()
        relabeled = part.model_copy(
            update={
                "rotation": rotation,
                "side_down": side,
                "size": raw_dimensions(current, rotation, side),
            }
        )
        if relabeled.current_dimensions() != current:
            raise InvariantViolation(
                f"Relabeling failed for part {part.id}: {relabeled.current_dimensions()} != {current} "
                f"(rotation {rotation.value}, side {side.value})"
            )
        return relabeled

    def add_hints(self, parts: Iterable[Part]) -> list[Part]:
        """Give each part, with some probability, a layout hint based on its current state."""
        return [self.add_hint(p) if self.rng.bernoulli(self.config.hint_probability) else p for p in parts]

    def add_hint(self, part: Part) -> Part:
        hint = LayoutHint(
            position=part.current_center(),
            surface=part.position.z,
            rotation=part.rotation,
            side=part.side_down,
        )
        if self.rng.bernoulli(self.config.mandatory_hint_probability):
            hint = hint.with_weight(MANDATORY_WEIGHT)
        else:
            hint = hint.with_weight(self.rng.bounded_int(DEFAULT_WEIGHT, MANDATORY_WEIGHT - 1))
        return part.model_copy(update={"hint": hint})

    def add_preferred_sides(self, parts: Iterable[Part]) -> list[Part]:
        probability = self.config.preferred_side_probability
        return [self.add_preferred_side(p) if self.rng.bernoulli(probability) else p for p in parts]

    def add_preferred_side(self, part: Part) -> Part:
        # A random preferred side may be unreachable, which rules out an optimal solution.
        if self.rng.bernoulli(self.config.random_preferred_probability):
            preferred = self.random_allowed_side(part)
        else:
            preferred = part.side_down
        return part.model_copy(update={"preferred_down": preferred})


def split_count(total: int, buckets: int) -> list[int]:
    """Split ``total`` evenly, giving the remainder to the first buckets."""
    share, remainder = divmod(total, buckets)
    return [share + 1] * remainder + [share] * (buckets - remainder)


def renumber(parts: Iterable[Part]) -> list[Part]:
    """Slicing reuses ids across surfaces; give every part a unique id from 1."""
    return [p.model_copy(update={"id": i}) for i, p in enumerate(parts, start=1)]


def new_generator(seed: int, config: Optional[GeneratorConfig] = None, **overrides: Any) -> ProblemGenerator:
    """Create a generator; keyword overrides replace individual config fields."""
    if overrides:
        base = config.model_dump() if config is not None else {}
        config = GeneratorConfig(**{**base, **overrides})
    return ProblemGenerator.from_seed(seed, config)


def generate_layouts(
    count: int,
    seed: int,
    solved: bool = False,
    config: Optional[GeneratorConfig] = None,
) -> list[Layout]:
    """Generate ``count`` layouts from a single generator."""
    gen = ProblemGenerator.from_seed(seed, config)
    return [gen.random_layout(solved) for _ in range(count)]
