"""Speed skill."""

import math

from starmeter.difficulty.evaluators import evaluate_speed
from starmeter.difficulty.skills.base import StrainSkill


class Speed(StrainSkill):

    @property
    def skill_multiplier(self) -> float:
        return self.settings.speed.skill_multiplier

    @property
    def strain_decay_base(self) -> float:
        return self.settings.speed.strain_decay_base

    def strain_value_of(self, node):
        return evaluate_speed(self.timeline, node, self.settings)

    def difficulty_value(self) -> float:
        return math.sqrt(self.weighted_peak_sum()) * self.settings.speed.difficulty_multiplier

    def relevant_note_count(self) -> float:
        """Effective number of notes that carry the speed difficulty.

        Each object counts through a logistic curve of its strain relative
        to the hardest one, so easy notes, spinners and long gaps count
        only fractionally.
        """
        if not self.object_strains:
            return 0.0

        max_strain = max(self.object_strains)
        if max_strain == 0:
            return 0.0

        return sum(1.0 / (1.0 + math.exp(-(strain / max_strain * 12.0 - 6.0)))
                   for strain in self.object_strains)
