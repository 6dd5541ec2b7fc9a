"""Aim skill."""

import math

from starmeter.difficulty.evaluators import evaluate_aim
from starmeter.difficulty.skills.base import StrainSkill


class Aim(StrainSkill):

    @property
    def skill_multiplier(self) -> float:
        return self.settings.aim.skill_multiplier

    @property
    def strain_decay_base(self) -> float:
        return self.settings.aim.strain_decay_base

    def strain_value_of(self, node):
        return evaluate_aim(self.timeline, node, self.settings)

    def difficulty_value(self) -> float:
        return math.sqrt(self.weighted_peak_sum()) * self.settings.aim.difficulty_multiplier
