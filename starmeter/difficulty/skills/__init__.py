"""Skill accumulators folding evaluator output across the timeline."""

from starmeter.difficulty.skills.accuracy import Accuracy
from starmeter.difficulty.skills.aim import Aim
from starmeter.difficulty.skills.base import Skill, StrainSkill
from starmeter.difficulty.skills.flashlight import Flashlight
from starmeter.difficulty.skills.speed import Speed

__all__ = ["Accuracy", "Aim", "Flashlight", "Skill", "Speed", "StrainSkill"]
