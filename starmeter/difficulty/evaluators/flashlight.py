"""Memory difficulty under a reduced field of view."""

from starmeter.config import Settings, settings as default_settings
from starmeter.difficulty.models import TimelineNode
from starmeter.difficulty.timeline import DifficultyTimeline


def evaluate_flashlight(
    timeline: DifficultyTimeline,
    node: TimelineNode,
    settings: Settings | None = None,
) -> float:
    """Sum of jump distances to recent objects over elapsed time, squared.

    Objects further back count less, both through the cumulative time and a
    geometric decay. Short jumps are nerfed since the target stays visible.
    """
    settings = settings or default_settings
    config = settings.flashlight
    scale = settings.timeline.scaled_radius

    if node.is_spinner:
        return 0.0

    result = 0.0
    cumulative_time = 0.0
    last = node
    for k in range(config.history_objects_max):
        previous = timeline.previous(node, k)
        if previous is None:
            break

        cumulative_time += last.strain_time
        if cumulative_time > config.history_time_max:
            break

        if not previous.is_spinner:
            jump = node.distance_to(previous) * scale
            small_distance_nerf = min(1.0, jump / config.small_distance_threshold)
            result += small_distance_nerf * jump / cumulative_time * config.history_decay ** k

        last = previous

    return result * result
