"""Pydantic models for JSON input and output."""

import math

from pydantic import BaseModel, Field, field_serializer, field_validator

from starmeter.beatmap.models import (
    Beatmap,
    BeatmapDifficulty,
    HitObject,
    Mod,
    ObjectKind,
    ScoreStatistics,
    parse_mods,
)
from starmeter.difficulty.models import DifficultyAttributes, PerformanceAttributes


def _finite_or_none(value: float | None) -> float | None:
    if value is None or not math.isfinite(value):
        return None
    return value


class HitObjectInput(BaseModel):
    kind: ObjectKind = ObjectKind.CIRCLE
    start_time: float
    x: float = 256.0
    y: float = 192.0
    end_time: float | None = None
    combo: int = Field(default=1, ge=0)

    def to_model(self) -> HitObject:
        return HitObject(
            kind=self.kind,
            start_time=self.start_time,
            x=self.x,
            y=self.y,
            end_time=self.end_time,
            combo=self.combo,
        )


class DifficultyInput(BaseModel):
    circle_size: float = Field(default=5.0, ge=0, le=10)
    overall_difficulty: float = Field(default=5.0, ge=0, le=10)
    approach_rate: float = Field(default=5.0, ge=0, le=10)
    drain_rate: float = Field(default=5.0, ge=0, le=10)


class BeatmapInput(BaseModel):
    difficulty: DifficultyInput = DifficultyInput()
    hit_objects: list[HitObjectInput]

    @field_validator("hit_objects")
    @classmethod
    def _time_ordered(cls, objects: list[HitObjectInput]) -> list[HitObjectInput]:
        for earlier, later in zip(objects, objects[1:]):
            if later.start_time < earlier.start_time:
                raise ValueError("hit objects must be ordered by start_time")
        return objects

    def to_model(self) -> Beatmap:
        return Beatmap(
            hit_objects=[o.to_model() for o in self.hit_objects],
            difficulty=BeatmapDifficulty(**self.difficulty.model_dump()),
        )


class ScoreInput(BaseModel):
    count_great: int = Field(default=0, ge=0)
    count_ok: int = Field(default=0, ge=0)
    count_meh: int = Field(default=0, ge=0)
    count_miss: int = Field(default=0, ge=0)
    max_combo: int = Field(default=0, ge=0)
    accuracy: float = Field(default=1.0, ge=0, le=1)
    mods: list[str] | str = []

    def parsed_mods(self) -> frozenset[Mod]:
        return parse_mods(self.mods)

    @field_validator("mods")
    @classmethod
    def _known_mods(cls, mods: list[str] | str) -> list[str] | str:
        parse_mods(mods)
        return mods

    def to_model(self) -> ScoreStatistics:
        return ScoreStatistics(
            count_great=self.count_great,
            count_ok=self.count_ok,
            count_meh=self.count_meh,
            count_miss=self.count_miss,
            max_combo=self.max_combo,
            accuracy=self.accuracy,
            mods=self.parsed_mods(),
        )


class DifficultyAttributesResponse(BaseModel):
    star_rating: float
    aim_difficulty: float
    speed_difficulty: float
    accuracy_difficulty: float | None
    flashlight_difficulty: float
    speed_note_count: float
    hit_circle_count: int
    slider_count: int
    spinner_count: int
    max_combo: int
    overall_difficulty: float
    approach_rate: float
    drain_rate: float
    clock_rate: float

    @field_serializer("accuracy_difficulty")
    def _serialize_deviation(self, value: float | None) -> float | None:
        return _finite_or_none(value)

    @classmethod
    def from_attributes(cls, attributes: DifficultyAttributes) -> "DifficultyAttributesResponse":
        return cls(
            star_rating=attributes.star_rating,
            aim_difficulty=attributes.aim_difficulty,
            speed_difficulty=attributes.speed_difficulty,
            accuracy_difficulty=attributes.accuracy_difficulty,
            flashlight_difficulty=attributes.flashlight_difficulty,
            speed_note_count=attributes.speed_note_count,
            hit_circle_count=attributes.hit_circle_count,
            slider_count=attributes.slider_count,
            spinner_count=attributes.spinner_count,
            max_combo=attributes.max_combo,
            overall_difficulty=attributes.overall_difficulty,
            approach_rate=attributes.approach_rate,
            drain_rate=attributes.drain_rate,
            clock_rate=attributes.clock_rate,
        )


class PerformanceAttributesResponse(BaseModel):
    total: float
    aim: float
    speed: float
    accuracy: float
    flashlight: float
    effective_miss_count: float
    deviation: float | None = None
    speed_deviation: float | None = None
    estimated_unstable_rate: float | None = None

    @field_serializer("deviation", "speed_deviation", "estimated_unstable_rate")
    def _serialize_deviation(self, value: float | None) -> float | None:
        return _finite_or_none(value)

    @classmethod
    def from_attributes(cls, attributes: PerformanceAttributes) -> "PerformanceAttributesResponse":
        return cls(
            total=attributes.total,
            aim=attributes.aim,
            speed=attributes.speed,
            accuracy=attributes.accuracy,
            flashlight=attributes.flashlight,
            effective_miss_count=attributes.effective_miss_count,
            deviation=attributes.deviation,
            speed_deviation=attributes.speed_deviation,
            estimated_unstable_rate=attributes.estimated_unstable_rate,
        )


class PerformanceReport(BaseModel):
    difficulty: DifficultyAttributesResponse
    performance: PerformanceAttributesResponse
