"""Rhythm complexity multiplier from changes in note spacing over time."""

import math

from starmeter.config import Settings, settings as default_settings
from starmeter.difficulty.models import TimelineNode
from starmeter.difficulty.timeline import DifficultyTimeline


def evaluate_rhythm(
    timeline: DifficultyTimeline,
    node: TimelineNode,
    settings: Settings | None = None,
) -> float:
    """Multiplier >= 1 that grows with the number of recent rhythm changes.

    Each pair of consecutive strain times in the history window contributes
    ``sin(pi / ratio) ** 2`` (zero for an unchanged rhythm, one for a
    doubling or halving), weighted by how recent the pair is.
    """
    config = (settings or default_settings).rhythm

    if node.is_spinner:
        return 1.0

    complexity = 0.0
    later = node
    for k in range(config.history_objects_max):
        earlier = timeline.previous(node, k)
        # the earlier object needs its own predecessor for a meaningful delta
        if earlier is None or earlier.index == 0 or earlier.is_spinner:
            break

        decay = (config.history_time_max - (node.start_time - later.start_time)) / config.history_time_max
        if decay <= 0:
            break

        ratio = max(later.strain_time, earlier.strain_time) / min(later.strain_time, earlier.strain_time)
        complexity += decay * math.sin(math.pi / ratio) ** 2
        later = earlier

    return math.sqrt(4 + complexity * config.rhythm_multiplier) / 2
