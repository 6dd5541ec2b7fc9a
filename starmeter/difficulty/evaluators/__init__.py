"""Per-object difficulty evaluators, one module per skill."""

from starmeter.difficulty.evaluators.aim import evaluate_aim
from starmeter.difficulty.evaluators.accuracy import evaluate_effective_hit_window
from starmeter.difficulty.evaluators.flashlight import evaluate_flashlight
from starmeter.difficulty.evaluators.rhythm import evaluate_rhythm
from starmeter.difficulty.evaluators.speed import evaluate_speed

__all__ = [
    "evaluate_aim",
    "evaluate_effective_hit_window",
    "evaluate_flashlight",
    "evaluate_rhythm",
    "evaluate_speed",
]
