"""Flashlight skill."""

import math

from starmeter.difficulty.evaluators import evaluate_flashlight
from starmeter.difficulty.skills.base import StrainSkill


class Flashlight(StrainSkill):

    # every section counts fully, longer maps are harder to memorize
    decay_weight = 1.0

    @property
    def skill_multiplier(self) -> float:
        return self.settings.flashlight.skill_multiplier

    @property
    def strain_decay_base(self) -> float:
        return self.settings.flashlight.strain_decay_base

    def strain_value_of(self, node):
        return evaluate_flashlight(self.timeline, node, self.settings)

    def difficulty_value(self) -> float:
        return math.sqrt(self.weighted_peak_sum()) * self.settings.flashlight.difficulty_multiplier
