"""Tests for per-object evaluators."""

import math

import pytest

from starmeter.beatmap.models import Beatmap, HitObject, ObjectKind
from starmeter.beatmap.mods import hit_radius
from starmeter.difficulty.evaluators import (
    evaluate_aim,
    evaluate_effective_hit_window,
    evaluate_flashlight,
    evaluate_rhythm,
    evaluate_speed,
)
from starmeter.difficulty.evaluators.aim import CursorPath, hermite_position, hermite_velocity, object_velocity
from starmeter.difficulty.timeline import build_timeline
from starmeter.numerics.root_finding import bisect
from tests.conftest import generate_jumps, generate_stream


# --- Aim ---

def test_hermite_endpoints():
    assert hermite_position(1.0, 4.0, 0.3, -0.2, 10.0, 0.0) == pytest.approx(1.0)
    assert hermite_position(1.0, 4.0, 0.3, -0.2, 10.0, 10.0) == pytest.approx(4.0)
    assert hermite_velocity(1.0, 4.0, 0.3, -0.2, 10.0, 0.0) == pytest.approx(0.3)
    assert hermite_velocity(1.0, 4.0, 0.3, -0.2, 10.0, 10.0) == pytest.approx(-0.2)


def test_hermite_is_linear_for_matching_velocities():
    v = (5.0 - 1.0) / 8.0
    for t in (0.0, 1.0, 2.5, 4.0, 7.9):
        assert hermite_position(1.0, 5.0, v, v, 8.0, t) == pytest.approx(1.0 + v * t)
        assert hermite_velocity(1.0, 5.0, v, v, 8.0, t) == pytest.approx(v)


def test_cursor_path_speed_of_stationary_path():
    path = CursorPath(x0=1.0, x1=1.0, vx0=0.0, vx1=0.0, y0=2.0, y1=2.0, vy0=0.0, vy1=0.0, duration=50.0)
    assert path.speed(25.0) == 0.0
    assert path.position(25.0) == (pytest.approx(1.0), pytest.approx(2.0))


def test_straight_stream_closed_form(stream_timeline):
    """On a uniform straight stream the cursor moves at constant speed."""
    n = len(stream_timeline)
    for node in list(stream_timeline)[2:n - 2]:
        expected = 0.5 / node.strain_time
        assert evaluate_aim(stream_timeline, node) == pytest.approx(expected, rel=1e-6)


def test_two_circle_crossing_closed_form():
    """Two circles three radii apart: the cursor starts and stops at rest,
    so the path is the quintic 3 * (10s^3 - 15s^4 + 6s^5) and exactly one
    radius of it lies inside each circle."""
    radius = hit_radius(5.0)
    beatmap = Beatmap(hit_objects=[
        HitObject(kind=ObjectKind.CIRCLE, start_time=1000.0, x=100.0, y=192.0),
        HitObject(kind=ObjectKind.CIRCLE, start_time=1100.0, x=100.0 + 3 * radius, y=192.0),
    ])
    timeline = build_timeline(beatmap)
    first, second = timeline[0], timeline[1]
    assert second.strain_time == 100.0

    time_enter = bisect(lambda t: hermite_position(0.0, 3.0, 0.0, 0.0, 100.0, t) - 2.0, 0.0, 100.0, 1e-12)
    time_exit = bisect(lambda t: hermite_position(0.0, 3.0, 0.0, 0.0, 100.0, t) - 1.0, 0.0, 100.0, 1e-12)
    assert time_exit == pytest.approx(100.0 - time_enter)

    expected_second = 1.0 / (100.0 - time_enter + second.meh_window)
    expected_first = 1.0 / (first.meh_window + time_exit)
    assert evaluate_aim(timeline, second) == pytest.approx(expected_second, rel=1e-4)
    assert evaluate_aim(timeline, first) == pytest.approx(expected_first, rel=1e-4)


def test_stream_object_velocity(stream_timeline):
    vx, vy = object_velocity(stream_timeline, stream_timeline[10])
    assert vx == pytest.approx(0.5 / 100.0)
    assert vy == 0.0
    # no predecessor means the cursor stops there
    assert object_velocity(stream_timeline, stream_timeline[0]) == (0.0, 0.0)


def test_stream_ends_are_finite(stream_timeline):
    n = len(stream_timeline)
    for index in (0, 1, n - 2, n - 1):
        value = evaluate_aim(stream_timeline, stream_timeline[index])
        assert math.isfinite(value)
        assert value >= 0


def test_wider_spacing_is_harder():
    close = build_timeline(generate_stream(n_objects=20, spacing=0.5))
    far = build_timeline(generate_stream(n_objects=20, spacing=0.9))
    assert evaluate_aim(far, far[10]) > evaluate_aim(close, close[10])


def test_jumps_are_positive_and_finite():
    timeline = build_timeline(generate_jumps(n_objects=20))
    for node in list(timeline)[1:-1]:
        value = evaluate_aim(timeline, node)
        assert math.isfinite(value)
        assert value > 0


def test_faster_jumps_are_harder():
    slow = build_timeline(generate_jumps(n_objects=20, interval_ms=300.0))
    fast = build_timeline(generate_jumps(n_objects=20, interval_ms=150.0))
    assert evaluate_aim(fast, fast[10]) > evaluate_aim(slow, slow[10])


def _circle_spinner_circle():
    return build_timeline(Beatmap(hit_objects=[
        HitObject(kind=ObjectKind.CIRCLE, start_time=0.0, x=100.0, y=100.0),
        HitObject(kind=ObjectKind.CIRCLE, start_time=200.0, x=200.0, y=100.0),
        HitObject(kind=ObjectKind.SPINNER, start_time=400.0, x=256.0, y=192.0, end_time=1400.0),
        HitObject(kind=ObjectKind.CIRCLE, start_time=1600.0, x=300.0, y=300.0),
    ]))


def test_spinner_has_no_aim():
    timeline = _circle_spinner_circle()
    assert evaluate_aim(timeline, timeline[2]) == 0.0


def test_spinner_neighbour_is_treated_as_missing():
    timeline = _circle_spinner_circle()
    after_spinner = timeline[3]
    # only the meh allowance on both sides, no movement
    assert evaluate_aim(timeline, after_spinner) == 0.0
    assert evaluate_aim(timeline, timeline[1]) > 0.0


def test_single_object_map():
    timeline = build_timeline(Beatmap(hit_objects=[
        HitObject(kind=ObjectKind.CIRCLE, start_time=0.0, x=100.0, y=100.0),
    ]))
    node = timeline[0]
    assert evaluate_aim(timeline, node) == 0.0
    assert evaluate_speed(timeline, node) == 0.0
    assert evaluate_rhythm(timeline, node) == 1.0
    assert evaluate_flashlight(timeline, node) == 0.0


# --- Rhythm and accuracy ---

def test_constant_rhythm_has_no_complexity(stream_timeline):
    assert evaluate_rhythm(stream_timeline, stream_timeline[100]) == pytest.approx(1.0)


def test_rhythm_changes_add_complexity():
    times = [0.0, 100.0, 300.0, 400.0, 600.0, 700.0, 900.0, 1000.0]
    timeline = build_timeline(Beatmap(hit_objects=[
        HitObject(kind=ObjectKind.CIRCLE, start_time=t, x=256.0, y=192.0) for t in times
    ]))
    rhythm = evaluate_rhythm(timeline, timeline[len(times) - 1])
    assert rhythm > 1.0


def test_effective_hit_window(stream_timeline):
    node = stream_timeline[100]
    assert evaluate_effective_hit_window(stream_timeline, node) == pytest.approx(node.great_window)

    spinner_map = _circle_spinner_circle()
    assert evaluate_effective_hit_window(spinner_map, spinner_map[2]) == math.inf


# --- Speed and flashlight ---

def test_speed_grows_with_tempo():
    slow = build_timeline(generate_stream(n_objects=20, interval_ms=150.0))
    fast = build_timeline(generate_stream(n_objects=20, interval_ms=60.0))
    assert evaluate_speed(fast, fast[10]) > evaluate_speed(slow, slow[10])
    assert evaluate_speed(slow, slow[0]) == 0.0


def test_speed_of_spinner_is_zero():
    timeline = _circle_spinner_circle()
    assert evaluate_speed(timeline, timeline[2]) == 0.0


def test_flashlight_rewards_distance():
    close = build_timeline(generate_stream(n_objects=20, spacing=0.5))
    far = build_timeline(generate_jumps(n_objects=20, interval_ms=100.0))
    assert evaluate_flashlight(far, far[10]) > evaluate_flashlight(close, close[10]) > 0
