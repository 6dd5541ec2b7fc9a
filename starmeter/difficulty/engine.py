"""Difficulty calculation orchestrator - timeline, skills, attributes."""

import logging

from starmeter.beatmap.models import Beatmap, Mod
from starmeter.beatmap.mods import apply_mods, clock_adjusted
from starmeter.config import Settings, settings as default_settings
from starmeter.difficulty.models import DifficultyAttributes
from starmeter.difficulty.skills import Accuracy, Aim, Flashlight, Skill, Speed
from starmeter.difficulty.timeline import DifficultyTimeline, build_timeline

logger = logging.getLogger(__name__)


class DifficultyCalculator:
    """Runs the full difficulty pipeline for one beatmap and mod combination."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or default_settings

    def create_skills(self, timeline: DifficultyTimeline) -> dict[str, Skill]:
        return {
            "aim": Aim(timeline, self.settings),
            "speed": Speed(timeline, self.settings),
            "accuracy": Accuracy(timeline, self.settings),
            "flashlight": Flashlight(timeline, self.settings),
        }

    def calculate(self, beatmap: Beatmap, mods: frozenset[Mod] = frozenset()) -> DifficultyAttributes:
        """Compute the difficulty attributes of *beatmap* with *mods* applied."""
        mods = frozenset(mods)
        mod_label = "".join(sorted(m.value for m in mods)) or "NM"
        logger.info(f"Calculating difficulty of {len(beatmap.hit_objects)} objects ({mod_label})")

        # Step 1: Timeline
        logger.info("Step 1: Building timeline")
        timeline = build_timeline(beatmap, mods, self.settings)

        # Step 2: Skills
        logger.info("Step 2: Processing skills")
        skills = self.create_skills(timeline)
        for node in timeline:
            for skill in skills.values():
                skill.process(node)

        aim = skills["aim"].difficulty_value()
        speed = skills["speed"].difficulty_value()
        accuracy = skills["accuracy"].difficulty_value()
        flashlight = skills["flashlight"].difficulty_value()
        speed_note_count = skills["speed"].relevant_note_count()
        logger.info(f"  aim={aim:.3f} speed={speed:.3f} accuracy={accuracy:.2f}ms "
                    f"flashlight={flashlight:.3f} speed notes={speed_note_count:.1f}")

        # Step 3: Attributes
        logger.info("Step 3: Attributes")
        difficulty = clock_adjusted(apply_mods(beatmap.difficulty, mods), timeline.clock_rate, self.settings.timeline)

        return DifficultyAttributes(
            aim_difficulty=aim,
            speed_difficulty=speed,
            accuracy_difficulty=accuracy,
            flashlight_difficulty=flashlight,
            speed_note_count=speed_note_count,
            hit_circle_count=beatmap.hit_circle_count,
            slider_count=beatmap.slider_count,
            spinner_count=beatmap.spinner_count,
            max_combo=beatmap.max_combo,
            overall_difficulty=difficulty.overall_difficulty,
            approach_rate=difficulty.approach_rate,
            drain_rate=difficulty.drain_rate,
            star_rating=self.star_rating(aim, speed, flashlight, mods),
            clock_rate=timeline.clock_rate,
        )

    def star_rating(self, aim: float, speed: float, flashlight: float, mods: frozenset[Mod]) -> float:
        """Lp-norm of the skill ratings; flashlight only counts when FL is active."""
        p = self.settings.performance.star_rating_exponent
        values = [aim, speed]
        if Mod.FLASHLIGHT in mods:
            values.append(flashlight)
        return sum(v ** p for v in values) ** (1 / p)
