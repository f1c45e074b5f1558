"""
Render settings.

RenderConfig collects everything the renderer needs besides the scene and the
camera. Values are checked when the object is created so bad settings fail
before any work is scheduled.
"""
from dataclasses import dataclass, replace
from typing import Optional
from pathtrace.core.vector import Vector3

EXECUTORS = ("process", "thread", "serial")

# Named quality settings: samples per pixel and maximum bounces.
QUALITY_LEVELS = {
    "interactive": {"samples": 1, "bounces": 2},
    "balanced": {"samples": 16, "bounces": 8},
    "high_quality": {"samples": 100, "bounces": 50},
}

@dataclass(frozen=True)
class RenderConfig:
    width: int
    height: int
    samples_per_pixel: int = 10
    max_depth: int = 50
    background: Optional[Vector3] = None  # None renders the sky gradient
    seed: Optional[int] = None
    workers: Optional[int] = None  # None uses os.cpu_count()
    rows_per_chunk: int = 1
    executor: str = "process"

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"image dimensions must be positive, got {self.width}x{self.height}")
        if self.samples_per_pixel <= 0:
            raise ValueError(f"samples_per_pixel must be positive, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {self.max_depth}")
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if self.rows_per_chunk < 1:
            raise ValueError(f"rows_per_chunk must be at least 1, got {self.rows_per_chunk}")
        if self.executor not in EXECUTORS:
            raise ValueError(f"executor must be one of {EXECUTORS}, got {self.executor!r}")
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"seed must not be negative, got {self.seed}")

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    @classmethod
    def for_quality(cls, quality: str, width: int, height: int, **overrides) -> "RenderConfig":
        if quality not in QUALITY_LEVELS:
            raise ValueError(f"unknown quality level {quality!r}; choose from {sorted(QUALITY_LEVELS)}")
        level = QUALITY_LEVELS[quality]
        settings = dict(samples_per_pixel=level["samples"], max_depth=level["bounces"])
        settings.update(overrides)
        return cls(width=width, height=height, **settings)

    def with_changes(self, **changes) -> "RenderConfig":
        return replace(self, **changes)
