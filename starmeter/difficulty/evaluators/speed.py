"""Tapping speed difficulty of a single object."""

from starmeter.config import Settings, settings as default_settings
from starmeter.difficulty.models import TimelineNode
from starmeter.difficulty.timeline import DifficultyTimeline


def evaluate_speed(
    timeline: DifficultyTimeline,
    node: TimelineNode,
    settings: Settings | None = None,
) -> float:
    settings = settings or default_settings
    config = settings.speed

    previous = timeline.previous(node)
    if node.is_spinner or previous is None:
        return 0.0

    strain_time = node.strain_time

    speed_bonus = 1.0
    if strain_time < config.min_speed_bonus:
        speed_bonus += 0.75 * ((config.min_speed_bonus - strain_time) / config.speed_balancing_factor) ** 2

    # Wide spacing makes alternating harder, capped at single-tap spacing
    distance = 0.0
    if not previous.is_spinner:
        distance = min(config.single_spacing_threshold,
                       previous.distance_to(node) * settings.timeline.scaled_radius)
    distance_bonus = (distance / config.single_spacing_threshold) ** config.distance_exponent

    return speed_bonus * (1 + distance_bonus) / strain_time
