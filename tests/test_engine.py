"""Integration tests for the difficulty calculator."""

import math

import pytest

from starmeter.beatmap.models import Beatmap, Mod
from starmeter.config import AimSettings, Settings
from starmeter.difficulty.engine import DifficultyCalculator
from starmeter.difficulty.models import DifficultyAttributes
from starmeter.difficulty.timeline import build_timeline
from tests.conftest import generate_jumps, generate_stream


def test_calculate_returns_attributes(mixed):
    attributes = DifficultyCalculator().calculate(mixed)

    assert isinstance(attributes, DifficultyAttributes)
    assert attributes.hit_circle_count == mixed.hit_circle_count
    assert attributes.slider_count == mixed.slider_count
    assert attributes.spinner_count == mixed.spinner_count
    assert attributes.max_combo == mixed.max_combo
    assert attributes.aim_difficulty > 0
    assert attributes.speed_difficulty > 0
    assert attributes.accuracy_difficulty > 0
    assert 0 < attributes.speed_note_count <= len(mixed.hit_objects)
    assert attributes.clock_rate == 1.0


def test_all_values_finite(mixed):
    attributes = DifficultyCalculator().calculate(mixed, frozenset({Mod.HIDDEN, Mod.FLASHLIGHT}))
    for name in ("aim_difficulty", "speed_difficulty", "accuracy_difficulty", "flashlight_difficulty",
                 "speed_note_count", "star_rating", "overall_difficulty", "approach_rate"):
        value = getattr(attributes, name)
        assert math.isfinite(value), name
        assert value >= 0, name


def test_empty_beatmap():
    attributes = DifficultyCalculator().calculate(Beatmap(hit_objects=[]))
    assert attributes.aim_difficulty == 0.0
    assert attributes.speed_difficulty == 0.0
    assert attributes.accuracy_difficulty == 0.0
    assert attributes.star_rating == 0.0
    assert attributes.max_combo == 0


def test_double_time_is_harder():
    beatmap = generate_jumps(n_objects=100, interval_ms=300.0)
    calculator = DifficultyCalculator()
    normal = calculator.calculate(beatmap)
    fast = calculator.calculate(beatmap, frozenset({Mod.DOUBLE_TIME}))

    assert fast.clock_rate == 1.5
    assert fast.aim_difficulty > normal.aim_difficulty
    assert fast.speed_difficulty > normal.speed_difficulty
    assert fast.accuracy_difficulty < normal.accuracy_difficulty
    assert fast.overall_difficulty > normal.overall_difficulty
    assert fast.approach_rate > normal.approach_rate
    assert fast.star_rating > normal.star_rating


def test_flashlight_counts_towards_star_rating_only_with_mod():
    beatmap = generate_jumps(n_objects=100)
    calculator = DifficultyCalculator()
    plain = calculator.calculate(beatmap)
    flashlight = calculator.calculate(beatmap, frozenset({Mod.FLASHLIGHT}))

    assert plain.flashlight_difficulty == pytest.approx(flashlight.flashlight_difficulty)
    assert flashlight.star_rating > plain.star_rating
    assert plain.star_rating == pytest.approx(
        (plain.aim_difficulty ** 1.1 + plain.speed_difficulty ** 1.1) ** (1 / 1.1))


def test_deterministic(mixed):
    calculator = DifficultyCalculator()
    assert calculator.calculate(mixed) == calculator.calculate(mixed)


def test_settings_override():
    beatmap = generate_stream(n_objects=100)
    default = DifficultyCalculator().calculate(beatmap)

    settings = Settings(aim=AimSettings(skill_multiplier=4 * AimSettings().skill_multiplier))
    boosted = DifficultyCalculator(settings).calculate(beatmap)

    # difficulty is the square root of the weighted peak sum
    assert boosted.aim_difficulty == pytest.approx(2 * default.aim_difficulty, rel=1e-9)
    assert boosted.speed_difficulty == pytest.approx(default.speed_difficulty)


def test_skills_share_timeline_and_settings():
    settings = Settings()
    timeline = build_timeline(generate_stream(n_objects=10), settings=settings)
    skills = DifficultyCalculator(settings).create_skills(timeline)

    assert set(skills) == {"aim", "speed", "accuracy", "flashlight"}
    for skill in skills.values():
        assert skill.timeline is timeline
        assert skill.settings is settings


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("STARMETER_ACCURACY__CLEAN_PASS_THRESHOLD", "0.05")
    settings = Settings()
    assert settings.accuracy.clean_pass_threshold == 0.05
