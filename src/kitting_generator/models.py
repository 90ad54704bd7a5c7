from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_WEIGHT = 1
MANDATORY_WEIGHT = 10


class Dimensions(BaseModel):
    """Integer triple used both as a size (width, depth, height) and a position."""

    model_config = ConfigDict(frozen=True)

    x: int = Field(description="Width, or x coordinate")
    y: int = Field(description="Depth, or y coordinate")
    z: int = Field(description="Height, or z coordinate / surface id")

    @classmethod
    def of(cls, x: int, y: int, z: int) -> Dimensions:
        return cls(x=x, y=y, z=z)

    def plus(self, other: Dimensions) -> Dimensions:
        return Dimensions.of(self.x + other.x, self.y + other.y, self.z + other.z)

    def with_x(self, x: int) -> Dimensions:
        return Dimensions.of(x, self.y, self.z)

    def with_y(self, y: int) -> Dimensions:
        return Dimensions.of(self.x, y, self.z)

    def with_z(self, z: int) -> Dimensions:
        return Dimensions.of(self.x, self.y, z)

    def min_length(self) -> int:
        return min(self.x, self.y, self.z)

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"


ZERO = Dimensions.of(0, 0, 0)


class Side(str, Enum):
    """The six faces of a box. The resting side is the face touching the surface."""

    top = "top"
    bottom = "bottom"
    front = "front"
    back = "back"
    left = "left"
    right = "right"

    def opposite(self) -> Side:
        return _OPPOSITE_SIDE[self]


_OPPOSITE_SIDE = {
    Side.top: Side.bottom,
    Side.bottom: Side.top,
    Side.front: Side.back,
    Side.back: Side.front,
    Side.left: Side.right,
    Side.right: Side.left,
}

ALL_SIDES: tuple[Side, ...] = tuple(Side)


class Rotation(str, Enum):
    """Rotation about the vertical axis. Only 0 and 90 degrees are supported."""

    ZERO = "ZERO"
    Z90 = "Z90"

    def inverse(self) -> Rotation:
        return _INVERSE_ROTATION[self]


# Every supported rotation undoes itself. A new member needs its own entry.
_INVERSE_ROTATION = {
    Rotation.ZERO: Rotation.ZERO,
    Rotation.Z90: Rotation.Z90,
}


class Surface(BaseModel):
    """Flat rectangular shelf of a wagon."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0, description="Surface id, equal to its stack level")
    size: Dimensions = Field(description="Width and depth of the surface; z is the shelf height")
    origin: Dimensions = Field(description="Position of the surface in the wagon frame")

    @property
    def width(self) -> int:
        return self.size.x

    @property
    def depth(self) -> int:
        return self.size.y


class Wagon(BaseModel):
    """Named container holding stacked surfaces."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Wagon name")
    surfaces: tuple[Surface, ...] = Field(min_length=1, description="Surfaces, lowest first")

    @model_validator(mode="after")
    def check_distinct_levels(self) -> Wagon:
        ids = [s.id for s in self.surfaces]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Surface ids must be distinct, got {ids}")
        return self

    def surface(self, surface_id: int) -> Optional[Surface]:
        for s in self.surfaces:
            if s.id == surface_id:
                return s
        return None


class LayoutHint(BaseModel):
    """Placement preference for a part. Mandatory hints are hard constraints."""

    model_config = ConfigDict(frozen=True)

    position: Dimensions = Field(description="Preferred center of the part; z is the surface id")
    surface: int = Field(ge=0, description="Preferred surface id")
    rotation: Optional[Rotation] = None
    side: Optional[Side] = None
    weight: int = Field(default=DEFAULT_WEIGHT, ge=0, description="Importance of the hint")

    @property
    def is_mandatory(self) -> bool:
        return self.weight >= MANDATORY_WEIGHT

    def with_rotation(self, rotation: Optional[Rotation]) -> LayoutHint:
        return self.model_copy(update={"rotation": rotation})

    def with_side(self, side: Optional[Side]) -> LayoutHint:
        return self.model_copy(update={"side": side})

    def with_weight(self, weight: int) -> LayoutHint:
        return self.model_copy(update={"weight": weight})


class Part(BaseModel):
    """Rectangular box to place on one of the wagon surfaces."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Part id")
    size: Dimensions = Field(description="Raw (unrotated, unplaced) dimensions")
    position: Optional[Dimensions] = Field(default=None, description="Placed corner; z is the surface id")
    rotation: Optional[Rotation] = None
    side_down: Optional[Side] = None
    allowed_down: frozenset[Side] = Field(default=frozenset(Side), min_length=1)
    preferred_down: Optional[Side] = None
    hint: Optional[LayoutHint] = None

    @property
    def has_hint(self) -> bool:
        return self.hint is not None

    @property
    def is_placed(self) -> bool:
        return self.position is not None

    def current_dimensions(self) -> Dimensions:
        from kitting_generator.geometry import current_dimensions

        return current_dimensions(self.size, self.rotation, self.side_down)

    def current_center(self) -> Dimensions:
        if self.position is None:
            raise ValueError(f"Part {self.id} has no position")
        dims = self.current_dimensions()
        return Dimensions.of(self.position.x + dims.x // 2, self.position.y + dims.y // 2, self.position.z)

    def min_length(self) -> int:
        return self.current_dimensions().min_length()

    def sorted_allowed_down(self) -> list[Side]:
        """Allowed sides in declaration order (sets of enums iterate in hash order)."""
        return [s for s in ALL_SIDES if s in self.allowed_down]


class Layout(BaseModel):
    """A problem instance: a wagon and the parts to lay out on it."""

    model_config = ConfigDict(frozen=True)

    wagon: Wagon
    parts: tuple[Part, ...] = Field(default_factory=tuple)

    def with_parts(self, parts) -> Layout:
        return self.model_copy(update={"parts": tuple(parts)})

    def parts_on(self, surface_id: int) -> list[Part]:
        return [p for p in self.parts if p.position is not None and p.position.z == surface_id]
