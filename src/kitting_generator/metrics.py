from __future__ import annotations

from kitting_generator.geometry import footprint_area
from kitting_generator.models import Layout, Part, Surface


def part_area(p: Part) -> int:
    return footprint_area(p.current_dimensions())


def compute_metrics(surface: Surface, parts: list[Part]) -> tuple[int, int, float]:
    used_area = sum(part_area(p) for p in parts)
    surface_area = footprint_area(surface.size)
    fill_rate = 0.0 if surface_area == 0 else used_area / surface_area
    return used_area, surface_area, fill_rate


def layout_metrics(layout: Layout) -> dict[int, tuple[int, int, float]]:
    """(used_area, surface_area, fill_rate) for every surface of the wagon."""
    return {s.id: compute_metrics(s, layout.parts_on(s.id)) for s in layout.wagon.surfaces}
