"""Performance (pp) calculation from difficulty attributes and a score."""

import logging
import math
from dataclasses import dataclass

from starmeter.beatmap.models import Mod, ScoreStatistics
from starmeter.beatmap.mods import hit_windows
from starmeter.config import Settings, settings as default_settings
from starmeter.difficulty.models import DifficultyAttributes, PerformanceAttributes
from starmeter.numerics.distributions import SQRT2, beta_inverse_cdf, erf, erfinv

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ScoreContext:
    """Everything the per-skill formulas need about one calculation."""
    attributes: DifficultyAttributes
    score: ScoreStatistics
    effective_miss_count: float
    deviation: float | None
    speed_deviation: float | None

    @property
    def mods(self) -> frozenset[Mod]:
        return self.score.mods

    @property
    def total_hits(self) -> int:
        return self.score.total_hits


def _deviation_scaling(constant: float, deviation: float) -> float:
    return erf(constant / (SQRT2 * deviation))


class PerformanceCalculator:
    """Maps DifficultyAttributes and ScoreStatistics to PerformanceAttributes.

    Stateless: every call to :meth:`calculate` is independent.

    The deviation of a score is the standard deviation of a Gaussian hit
    error model consistent with its judgement counts. It is ``None`` when the
    score carries no usable timing information (nothing to scale by) and
    ``inf`` when nothing was hit at all (every deviation-scaled value is 0).
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or default_settings

    @property
    def config(self):
        return self.settings.performance

    def calculate(self, attributes: DifficultyAttributes, score: ScoreStatistics) -> PerformanceAttributes:
        effective_miss_count = self.effective_miss_count(attributes, score)
        ctx = _ScoreContext(
            attributes=attributes,
            score=score,
            effective_miss_count=effective_miss_count,
            deviation=self.deviation(attributes, score),
            speed_deviation=self.speed_deviation(attributes, score),
        )

        aim = self.aim_value(ctx)
        speed = self.speed_value(ctx)
        accuracy = self.accuracy_value(ctx)
        flashlight = self.flashlight_value(ctx)

        p = self.config.total_exponent
        total = self.total_multiplier(ctx) * sum(v ** p for v in (aim, speed, accuracy, flashlight)) ** (1 / p)

        logger.debug(f"pp: aim={aim:.2f} speed={speed:.2f} acc={accuracy:.2f} fl={flashlight:.2f} "
                     f"total={total:.2f} (misses={effective_miss_count:.2f}, deviation={ctx.deviation})")

        return PerformanceAttributes(
            aim=aim,
            speed=speed,
            accuracy=accuracy,
            flashlight=flashlight,
            total=total,
            effective_miss_count=effective_miss_count,
            deviation=ctx.deviation,
            speed_deviation=ctx.speed_deviation,
        )

    # ------------------------------------------------------------------
    # Score interpretation
    # ------------------------------------------------------------------

    def effective_miss_count(self, attributes: DifficultyAttributes, score: ScoreStatistics) -> float:
        """Misses plus an estimate of slider breaks derived from the combo."""
        combo_based_miss_count = 0.0

        if attributes.slider_count > 0:
            full_combo_threshold = attributes.max_combo - self.config.combo_break_slider_ratio * attributes.slider_count
            if score.max_combo < full_combo_threshold:
                combo_based_miss_count = full_combo_threshold / max(1.0, score.max_combo)

        # derived from combo, so it can exceed the number of objects
        combo_based_miss_count = min(combo_based_miss_count, score.total_hits)

        return max(float(score.count_miss), combo_based_miss_count)

    def deviation(self, attributes: DifficultyAttributes, score: ScoreStatistics) -> float | None:
        """Hit-error deviation (ms) estimated from the judgements on circles."""
        if score.total_successful_hits == 0:
            return math.inf
        if attributes.hit_circle_count == 0 or attributes.hit_circle_count - score.count_miss <= 0:
            return None

        great_count_on_circles = max(0, score.count_great - attributes.slider_count - attributes.spinner_count)
        return self._estimate_deviation(attributes, great_count_on_circles, score.count_ok + score.count_meh)

    def speed_deviation(self, attributes: DifficultyAttributes, score: ScoreStatistics) -> float | None:
        """Deviation restricted to the notes that carry the speed difficulty.

        Misses take their share of the relevant notes first, then mehs and
        oks, so the remaining greats are a lower bound.
        """
        if score.total_successful_hits == 0:
            return math.inf

        speed_note_count = attributes.speed_note_count
        speed_note_count += (score.total_hits - speed_note_count) * self.config.speed_note_leniency
        if speed_note_count <= 0:
            return None

        relevant_miss = min(score.count_miss, speed_note_count)
        relevant_meh = min(score.count_meh, speed_note_count - relevant_miss)
        relevant_ok = min(score.count_ok, speed_note_count - relevant_miss - relevant_meh)
        relevant_great = max(0.0, speed_note_count - relevant_miss - relevant_meh - relevant_ok)

        if relevant_great + relevant_ok + relevant_meh <= 0:
            return math.inf

        return self._estimate_deviation(attributes, relevant_great, relevant_ok + relevant_meh)

    def _estimate_deviation(self, attributes: DifficultyAttributes, greats: float, non_greats: float) -> float | None:
        if greats <= 0:
            return None

        # lower confidence bound on the probability of a great, not the raw proportion
        great_probability = beta_inverse_cdf(1 - self.config.deviation_confidence, greats, 1 + non_greats)
        great_window = hit_windows(attributes.overall_difficulty, self.settings.timeline).great
        if great_window <= 0 or great_probability <= 0:
            return math.inf

        return great_window / (SQRT2 * erfinv(great_probability))

    def miss_penalty(self, ctx: _ScoreContext) -> float:
        misses = ctx.effective_miss_count
        if misses <= 0:
            return 1.0
        return 0.97 * (1 - (misses / ctx.total_hits) ** 0.775) ** (misses ** 0.875)

    def combo_scaling(self, ctx: _ScoreContext) -> float:
        max_combo = ctx.attributes.max_combo
        if max_combo <= 0:
            return 1.0
        exponent = self.config.combo_scaling_exponent
        return min(1.0, (ctx.score.max_combo / max_combo) ** exponent)

    def hidden_bonus(self, ctx: _ScoreContext) -> float:
        # rewards low AR, nerfs high AR
        return 1.0 + self.config.hidden_bonus_per_ar * (12.0 - ctx.attributes.approach_rate)

    # ------------------------------------------------------------------
    # Skill values
    # ------------------------------------------------------------------

    def aim_value(self, ctx: _ScoreContext) -> float:
        attributes = ctx.attributes
        aim_difficulty = attributes.aim_difficulty
        if Mod.TOUCH_DEVICE in ctx.mods:
            aim_difficulty **= self.config.touch_device_exponent

        aim_value = aim_difficulty ** 3
        aim_value *= self.miss_penalty(ctx)
        aim_value *= self.combo_scaling(ctx)

        if Mod.BLINDS in ctx.mods:
            aim_value *= (1.3 + ctx.total_hits * (0.0016 / (1 + 2 * ctx.effective_miss_count))
                          * ctx.score.accuracy ** 16 * (1 - 0.003 * attributes.drain_rate ** 2))
        elif Mod.HIDDEN in ctx.mods:
            aim_value *= self.hidden_bonus(ctx)

        if ctx.deviation is not None and math.isinf(ctx.deviation):
            return 0.0
        if attributes.hit_circle_count - ctx.score.count_miss <= 0 or ctx.deviation is None:
            return aim_value

        return aim_value * _deviation_scaling(self.config.aim_deviation_constant, ctx.deviation)

    def speed_value(self, ctx: _ScoreContext) -> float:
        speed_value = ctx.attributes.speed_difficulty ** 3
        speed_value *= self.miss_penalty(ctx)
        speed_value *= self.combo_scaling(ctx)

        if Mod.HIDDEN in ctx.mods:
            speed_value *= self.hidden_bonus(ctx)

        if ctx.speed_deviation is None:
            return speed_value
        if math.isinf(ctx.speed_deviation):
            return 0.0

        return speed_value * _deviation_scaling(self.config.speed_deviation_constant, ctx.speed_deviation)

    def accuracy_value(self, ctx: _ScoreContext) -> float:
        if ctx.attributes.hit_circle_count == 0 or ctx.deviation is None:
            return 0.0
        if math.isinf(ctx.deviation):
            return 0.0

        accuracy_value = self.config.accuracy_scale * (self.config.accuracy_reference_deviation / ctx.deviation) ** 2

        if Mod.HIDDEN in ctx.mods:
            accuracy_value *= 1.08
        if Mod.FLASHLIGHT in ctx.mods:
            accuracy_value *= 1.02

        return accuracy_value

    def flashlight_value(self, ctx: _ScoreContext) -> float:
        if Mod.FLASHLIGHT not in ctx.mods:
            return 0.0

        raw_flashlight = ctx.attributes.flashlight_difficulty
        if Mod.TOUCH_DEVICE in ctx.mods:
            raw_flashlight **= self.config.touch_device_exponent

        flashlight_value = raw_flashlight ** 2 * 25.0

        # Additional bonus for HDFL
        if Mod.HIDDEN in ctx.mods:
            flashlight_value *= 1.3

        flashlight_value *= self.miss_penalty(ctx)
        flashlight_value *= self.combo_scaling(ctx)

        # Shorter maps have a higher share of objects under the small early radius
        total_hits = ctx.total_hits
        length_bonus = 0.7 + 0.1 * min(1.0, total_hits / 200.0)
        if total_hits > 200:
            length_bonus += 0.2 * min(1.0, (total_hits - 200) / 200.0)
        flashlight_value *= length_bonus

        if ctx.deviation is None:
            return flashlight_value
        if math.isinf(ctx.deviation):
            return 0.0

        return flashlight_value * _deviation_scaling(self.config.flashlight_deviation_constant, ctx.deviation)

    def total_multiplier(self, ctx: _ScoreContext) -> float:
        multiplier = self.config.base_multiplier

        if Mod.NO_FAIL in ctx.mods:
            multiplier *= max(0.9, 1.0 - 0.02 * ctx.effective_miss_count)

        if Mod.SPUN_OUT in ctx.mods and ctx.total_hits > 0:
            multiplier *= max(0.0, 1.0 - (ctx.attributes.spinner_count / ctx.total_hits) ** 0.85)

        return multiplier
