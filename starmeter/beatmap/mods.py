"""Mod effects on the clock rate and the beatmap difficulty settings.

Hit-window and approach-rate formulas live here so that the difficulty and
performance phases always agree on them.
"""

from dataclasses import dataclass

from starmeter.beatmap.models import BeatmapDifficulty, Mod
from starmeter.config import TimelineSettings, settings


@dataclass(frozen=True)
class HitWindows:
    """Half-widths of the judgement windows in ms."""
    great: float
    ok: float
    meh: float

    def scaled(self, clock_rate: float) -> "HitWindows":
        return HitWindows(self.great / clock_rate, self.ok / clock_rate, self.meh / clock_rate)


def clock_rate(mods: frozenset[Mod]) -> float:
    rate = 1.0
    if Mod.DOUBLE_TIME in mods or Mod.NIGHTCORE in mods:
        rate = 1.5
    if Mod.HALF_TIME in mods:
        rate *= 0.75
    return rate


def apply_mods(difficulty: BeatmapDifficulty, mods: frozenset[Mod]) -> BeatmapDifficulty:
    """Apply HR/EZ to the difficulty settings (clock rate is handled separately)."""
    multiplier = 1.0
    cs_multiplier = 1.0
    if Mod.HARD_ROCK in mods:
        multiplier = 1.4
        cs_multiplier = 1.3
    if Mod.EASY in mods:
        multiplier *= 0.5
        cs_multiplier *= 0.5

    return BeatmapDifficulty(
        circle_size=min(10.0, difficulty.circle_size * cs_multiplier),
        overall_difficulty=min(10.0, difficulty.overall_difficulty * multiplier),
        approach_rate=min(10.0, difficulty.approach_rate * multiplier),
        drain_rate=min(10.0, difficulty.drain_rate * multiplier),
    )


def hit_radius(circle_size: float) -> float:
    """Hit circle radius in osu!pixels."""
    return 54.4 - 4.48 * circle_size


def hit_windows(overall_difficulty: float, config: TimelineSettings | None = None) -> HitWindows:
    config = config or settings.timeline
    od = overall_difficulty
    return HitWindows(
        great=config.great_window_base - config.great_window_step * od,
        ok=config.ok_window_base - config.ok_window_step * od,
        meh=config.meh_window_base - config.meh_window_step * od,
    )


def overall_difficulty_from_great_window(great_window: float, config: TimelineSettings | None = None) -> float:
    config = config or settings.timeline
    return (config.great_window_base - great_window) / config.great_window_step


def preempt(approach_rate: float, config: TimelineSettings | None = None) -> float:
    """Approach preempt time in ms."""
    config = config or settings.timeline
    if approach_rate < 5:
        return config.preempt_ar0 - (config.preempt_ar0 - config.preempt_ar5) * approach_rate / 5
    return config.preempt_ar5 - (config.preempt_ar5 - config.preempt_ar10) * (approach_rate - 5) / 5


def approach_rate_from_preempt(preempt_ms: float, config: TimelineSettings | None = None) -> float:
    config = config or settings.timeline
    if preempt_ms > config.preempt_ar5:
        return 5 * (config.preempt_ar0 - preempt_ms) / (config.preempt_ar0 - config.preempt_ar5)
    return 5 + 5 * (config.preempt_ar5 - preempt_ms) / (config.preempt_ar5 - config.preempt_ar10)


def clock_adjusted(difficulty: BeatmapDifficulty, rate: float, config: TimelineSettings | None = None) -> BeatmapDifficulty:
    """Express OD and AR as the values that would give the sped-up windows at rate 1."""
    config = config or settings.timeline
    great = hit_windows(difficulty.overall_difficulty, config).great / rate
    return BeatmapDifficulty(
        circle_size=difficulty.circle_size,
        overall_difficulty=overall_difficulty_from_great_window(great, config),
        approach_rate=approach_rate_from_preempt(preempt(difficulty.approach_rate, config) / rate, config),
        drain_rate=difficulty.drain_rate,
    )
