"""Effective great hit window per object."""

import math

from starmeter.config import Settings
from starmeter.difficulty.evaluators.rhythm import evaluate_rhythm
from starmeter.difficulty.models import TimelineNode
from starmeter.difficulty.timeline import DifficultyTimeline


def evaluate_effective_hit_window(
    timeline: DifficultyTimeline,
    node: TimelineNode,
    settings: Settings | None = None,
) -> float:
    """Great window (ms, one side) shrunk by the local rhythm complexity.

    Spinners have no timing judgement, so their window is infinite.
    """
    if node.is_spinner:
        return math.inf

    # node windows are already half-widths (+-ms around the object)
    return node.great_window / evaluate_rhythm(timeline, node, settings)
