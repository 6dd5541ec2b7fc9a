"""Skill accumulators: process every timeline node once, then report a value."""

import math
from abc import ABC, abstractmethod

from starmeter.config import Settings, settings as default_settings
from starmeter.difficulty.models import TimelineNode
from starmeter.difficulty.timeline import DifficultyTimeline


class Skill(ABC):
    """Two-phase accumulator: ``process`` each node in order, then ``difficulty_value``."""

    def __init__(self, timeline: DifficultyTimeline, settings: Settings | None = None):
        self.timeline = timeline
        self.settings = settings or default_settings

    @abstractmethod
    def process(self, node: TimelineNode) -> None:
        ...

    @abstractmethod
    def difficulty_value(self) -> float:
        ...


class StrainSkill(Skill):
    """Exponentially decaying strain, summarized by weighted section peaks.

    The timeline is cut into fixed sections; the highest strain of each
    section is kept and the peaks are summed from highest to lowest with a
    geometrically decaying weight.
    """

    section_length = 400.0  # ms, clock-adjusted
    decay_weight = 0.9

    def __init__(self, timeline, settings=None):
        super().__init__(timeline, settings)
        self.object_strains: list[float] = []
        self._strain_peaks: list[float] = []
        self._current_strain = 0.0
        self._current_section_peak = 0.0
        self._current_section_end: float | None = None
        self._last_start_time = 0.0

    @property
    @abstractmethod
    def skill_multiplier(self) -> float:
        ...

    @property
    @abstractmethod
    def strain_decay_base(self) -> float:
        ...

    @abstractmethod
    def strain_value_of(self, node: TimelineNode) -> float:
        ...

    def _strain_decay(self, ms: float) -> float:
        return self.strain_decay_base ** (ms / 1000)

    def process(self, node: TimelineNode) -> None:
        if self._current_section_end is None:
            self._current_section_end = math.ceil(node.start_time / self.section_length) * self.section_length
            self._last_start_time = node.start_time

        while node.start_time > self._current_section_end:
            self._strain_peaks.append(self._current_section_peak)
            # the new section starts with the strain left over from the last object
            self._current_section_peak = self._current_strain * self._strain_decay(
                self._current_section_end - self._last_start_time)
            self._current_section_end += self.section_length

        self._current_strain *= self._strain_decay(node.delta_time)
        self._current_strain += self.strain_value_of(node) * self.skill_multiplier
        self.object_strains.append(self._current_strain)

        self._current_section_peak = max(self._current_section_peak, self._current_strain)
        self._last_start_time = node.start_time

    def strain_peaks(self) -> list[float]:
        if self._current_section_end is None:
            return []
        return self._strain_peaks + [self._current_section_peak]

    def weighted_peak_sum(self) -> float:
        total = 0.0
        weight = 1.0
        for peak in sorted(self.strain_peaks(), reverse=True):
            total += peak * weight
            weight *= self.decay_weight
        return total

    def difficulty_value(self) -> float:
        return self.weighted_peak_sum()
