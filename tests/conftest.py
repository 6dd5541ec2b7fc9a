"""Shared test fixtures: synthetic beatmaps and scores."""

import pytest

from starmeter.beatmap.models import (
    Beatmap,
    BeatmapDifficulty,
    HitObject,
    ObjectKind,
    ScoreStatistics,
)
from starmeter.beatmap.mods import hit_radius
from starmeter.difficulty.models import DifficultyAttributes
from starmeter.difficulty.timeline import build_timeline


def generate_stream(
    n_objects: int = 500,
    spacing: float = 0.5,
    interval_ms: float = 100.0,
    difficulty: BeatmapDifficulty | None = None,
    x0: float = 0.0,
    y: float = 192.0,
) -> Beatmap:
    """Circles on a straight horizontal line at a constant interval.

    *spacing* is in hit radii, so consecutive objects are
    ``spacing * radius`` osu!pixels apart.
    """
    difficulty = difficulty or BeatmapDifficulty()
    radius = hit_radius(difficulty.circle_size)

    hit_objects = [
        HitObject(kind=ObjectKind.CIRCLE, start_time=1000.0 + i * interval_ms, x=x0 + i * spacing * radius, y=y)
        for i in range(n_objects)
    ]
    return Beatmap(hit_objects=hit_objects, difficulty=difficulty)


def generate_jumps(
    n_objects: int = 200,
    interval_ms: float = 150.0,
    difficulty: BeatmapDifficulty | None = None,
) -> Beatmap:
    """Circles alternating between opposite corners of the playfield."""
    corners = [(64.0, 64.0), (448.0, 320.0)]
    hit_objects = [
        HitObject(kind=ObjectKind.CIRCLE, start_time=1000.0 + i * interval_ms,
                  x=corners[i % 2][0], y=corners[i % 2][1])
        for i in range(n_objects)
    ]
    return Beatmap(hit_objects=hit_objects, difficulty=difficulty or BeatmapDifficulty())


def generate_mixed(difficulty: BeatmapDifficulty | None = None) -> Beatmap:
    """Circles, sliders and spinners with a varying rhythm."""
    hit_objects = []
    time = 1000.0
    for bar in range(20):
        for beat in range(4):
            x = 100.0 + 80.0 * beat
            y = 100.0 + 40.0 * (bar % 5)
            if beat == 3:
                hit_objects.append(HitObject(kind=ObjectKind.SLIDER, start_time=time, x=x, y=y,
                                             end_time=time + 150.0, combo=3))
                time += 300.0
            else:
                hit_objects.append(HitObject(kind=ObjectKind.CIRCLE, start_time=time, x=x, y=y))
                time += 150.0 if beat % 2 else 225.0
        if bar % 10 == 9:
            hit_objects.append(HitObject(kind=ObjectKind.SPINNER, start_time=time, x=256.0, y=192.0,
                                         end_time=time + 2000.0))
            time += 2500.0
    return Beatmap(hit_objects=hit_objects, difficulty=difficulty or BeatmapDifficulty(
        circle_size=4.0, overall_difficulty=8.0, approach_rate=9.0, drain_rate=6.0))


def perfect_score(beatmap: Beatmap, mods=frozenset()) -> ScoreStatistics:
    return ScoreStatistics(
        count_great=len(beatmap.hit_objects),
        max_combo=beatmap.max_combo,
        mods=frozenset(mods),
    )


@pytest.fixture
def stream():
    """500 circles, 0.5 radii apart, 100ms apart."""
    return generate_stream()


@pytest.fixture
def stream_timeline(stream):
    return build_timeline(stream)


@pytest.fixture
def mixed():
    return generate_mixed()


def make_attributes(**overrides) -> DifficultyAttributes:
    """Hand-written difficulty attributes of a typical ranked map."""
    values = dict(
        aim_difficulty=2.5,
        speed_difficulty=2.1,
        accuracy_difficulty=14.2,
        flashlight_difficulty=1.3,
        speed_note_count=312.4,
        hit_circle_count=400,
        slider_count=120,
        spinner_count=2,
        max_combo=780,
        overall_difficulty=8.5,
        approach_rate=9.3,
        drain_rate=6.0,
        star_rating=4.9,
        clock_rate=1.5,
    )
    values.update(overrides)
    return DifficultyAttributes(**values)
