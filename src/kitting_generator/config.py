"""Generator settings; loads overrides from .env via python-dotenv."""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, model_validator

logger = logging.getLogger(__name__)

ENV_PREFIX = "KITGEN_"


class GeneratorConfig(BaseModel):
    """Bounds and probabilities used when generating layouts."""

    model_config = ConfigDict(frozen=True)

    min_part_side: int = Field(default=20, gt=0, description="Shortest allowed part side")
    min_surface_side: int = Field(default=800, gt=0, description="Shortest allowed surface side")
    max_surface_side: int = Field(default=1200, gt=0, description="Longest allowed surface side")
    surface_height: int = Field(default=500, gt=0, description="Height between stacked surfaces")
    # Generate at least/most this many parts.
    min_parts: int = Field(default=10, ge=1)
    max_parts: int = Field(default=25, ge=1)
    min_surfaces: int = Field(default=2, ge=1)
    max_surfaces: int = Field(default=3, ge=1)
    min_density: float = Field(default=0.6, gt=0, le=1)
    max_density: float = Field(default=0.8, gt=0, le=1)
    # Allow at least/most this many sides.
    min_allowed_down: int = Field(default=3, ge=1, le=6)
    max_allowed_down: int = Field(default=6, ge=1, le=6)

    hint_probability: float = Field(default=0.33, ge=0, le=1, description="Probability that a part has a layout hint")
    mandatory_hint_probability: float = Field(
        default=0.33, ge=0, le=1, description="Probability that a hint is mandatory"
    )
    preferred_side_probability: float = Field(
        default=0.5, ge=0, le=1, description="Probability that a part has a preferred side"
    )
    # If the preferred side is chosen at random, that side may be infeasible
    # and an optimal solution may not exist. Keep at 0 to guarantee one does.
    random_preferred_probability: float = Field(
        default=0.0, ge=0, le=1, description="Probability that a preferred side is random instead of current"
    )

    @model_validator(mode="after")
    def check_ranges(self) -> GeneratorConfig:
        pairs = [
            ("min_surface_side", "max_surface_side"),
            ("min_parts", "max_parts"),
            ("min_surfaces", "max_surfaces"),
            ("min_density", "max_density"),
            ("min_allowed_down", "max_allowed_down"),
        ]
        for lo_name, hi_name in pairs:
            lo = getattr(self, lo_name)
            hi = getattr(self, hi_name)
            if hi < lo:
                raise ValueError(f"{hi_name} ({hi}) must be >= {lo_name} ({lo})")
        if self.min_parts < self.max_surfaces:
            raise ValueError(
                f"min_parts ({self.min_parts}) must be >= max_surfaces ({self.max_surfaces}) "
                "so that every surface gets a part"
            )
        if self.surface_height <= self.min_part_side:
            raise ValueError(
                f"surface_height ({self.surface_height}) must be > min_part_side ({self.min_part_side})"
            )
        return self

    @classmethod
    def from_env(
        cls,
        prefix: str = ENV_PREFIX,
        env_file: Optional[str] = None,
        **overrides: Any,
    ) -> GeneratorConfig:
        """
        Build a config from ``<prefix><FIELD_NAME>`` environment variables.

        A .env file (``env_file``, or the nearest one above the working
        directory) is loaded when present; it does not override variables
        already set in the environment. Keyword overrides win over both.
        """
        path = env_file or find_dotenv(usecwd=True)
        if path:
            load_dotenv(path)
        values: dict[str, Any] = {}
        for name in cls.model_fields:
            raw = os.getenv(prefix + name.upper())
            if raw is not None:
                values[name] = raw
        if values:
            logger.info(f"Generator settings from environment: {sorted(values)}")
        values.update(overrides)
        return cls(**values)
