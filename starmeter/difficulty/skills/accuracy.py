"""Accuracy skill: timing precision required for a clean pass."""

import logging
import math

from starmeter.difficulty.evaluators import evaluate_effective_hit_window
from starmeter.difficulty.skills.base import Skill
from starmeter.numerics.distributions import hit_probability
from starmeter.numerics.root_finding import chandrupatla

logger = logging.getLogger(__name__)


class Accuracy(Skill):
    """Finds the hit-error deviation at which a clean pass becomes unlikely.

    Hit errors are modelled as i.i.d. Gaussian with standard deviation sigma.
    The probability of hitting every object within its effective window
    falls monotonically with sigma; the difficulty value is the sigma at
    which it equals ``clean_pass_threshold``. Smaller values mean tighter
    timing is required.
    """

    def __init__(self, timeline, settings=None):
        super().__init__(timeline, settings)
        self.effective_hit_windows: list[float] = []

    def process(self, node) -> None:
        window = evaluate_effective_hit_window(self.timeline, node, self.settings)
        if math.isfinite(window):
            self.effective_hit_windows.append(window)

    def log_clean_pass_probability(self, deviation: float) -> float:
        total = 0.0
        for window in self.effective_hit_windows:
            probability = hit_probability(window, deviation)
            if probability <= 0:
                return -math.inf
            total += math.log(probability)
        return total

    def clean_pass_probability(self, deviation: float) -> float:
        return math.exp(self.log_clean_pass_probability(deviation))

    def difficulty_value(self) -> float:
        if not self.effective_hit_windows:
            return 0.0

        config = self.settings.accuracy
        target = math.log(config.clean_pass_threshold)

        deviation = chandrupatla(
            lambda sigma: self.log_clean_pass_probability(sigma) - target,
            0.0,
            config.initial_deviation_guess,
            config.root_tolerance,
            max_iterations=config.root_max_iterations,
        )
        logger.debug(f"Accuracy: {len(self.effective_hit_windows)} windows, deviation={deviation:.3f}ms")
        return deviation
