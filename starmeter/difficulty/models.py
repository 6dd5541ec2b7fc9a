"""Core data models for difficulty and performance calculation."""

import math
from dataclasses import dataclass

from starmeter.beatmap.models import ObjectKind


@dataclass(frozen=True)
class TimelineNode:
    """One hit object in difficulty-time order.

    Times are clock-adjusted ms, positions are divided by the hit radius.
    Neighbours are looked up through the owning DifficultyTimeline.
    """
    index: int
    kind: ObjectKind
    normalized_x: float
    normalized_y: float
    start_time: float
    delta_time: float
    strain_time: float
    great_window: float
    ok_window: float
    meh_window: float

    @property
    def is_spinner(self) -> bool:
        return self.kind == ObjectKind.SPINNER

    def distance_to(self, other: "TimelineNode") -> float:
        return math.hypot(self.normalized_x - other.normalized_x, self.normalized_y - other.normalized_y)


@dataclass(frozen=True)
class DifficultyAttributes:
    """Per-beatmap difficulty for one mod combination."""
    aim_difficulty: float
    speed_difficulty: float
    accuracy_difficulty: float  # required timing deviation (ms)
    flashlight_difficulty: float
    speed_note_count: float
    hit_circle_count: int
    slider_count: int
    spinner_count: int
    max_combo: int
    overall_difficulty: float
    approach_rate: float
    drain_rate: float
    star_rating: float = 0.0
    clock_rate: float = 1.0

    def __post_init__(self):
        counts = (self.hit_circle_count, self.slider_count, self.spinner_count, self.max_combo)
        if any(c < 0 for c in counts):
            raise ValueError(f"Object counts must be non-negative: {counts}")

    @property
    def object_count(self) -> int:
        return self.hit_circle_count + self.slider_count + self.spinner_count


@dataclass(frozen=True)
class PerformanceAttributes:
    """Per-skill pp values of a score and their combination."""
    aim: float
    speed: float
    accuracy: float
    flashlight: float
    total: float
    effective_miss_count: float = 0.0
    deviation: float | None = None  # ms; inf when nothing was hit
    speed_deviation: float | None = None

    @property
    def estimated_unstable_rate(self) -> float | None:
        if self.deviation is None:
            return None
        return 10 * self.deviation
