"""Columnar (attribute id -> value) form of DifficultyAttributes.

Persistence layers store difficulty attributes as flat rows keyed by a
small integer id. The ids are stable and must never be reused.
"""

from collections.abc import Mapping
from enum import IntEnum

from starmeter.difficulty.models import DifficultyAttributes


class AttributeId(IntEnum):
    AIM = 1
    SPEED = 3
    OVERALL_DIFFICULTY = 5
    APPROACH_RATE = 7
    MAX_COMBO = 9
    STAR_RATING = 11
    FLASHLIGHT = 17
    SPEED_NOTE_COUNT = 21
    ACCURACY = 23
    HIT_CIRCLE_COUNT = 25
    SLIDER_COUNT = 27
    SPINNER_COUNT = 29
    DRAIN_RATE = 31
    CLOCK_RATE = 33


FIELD_BY_ID: dict[AttributeId, str] = {
    AttributeId.AIM: "aim_difficulty",
    AttributeId.SPEED: "speed_difficulty",
    AttributeId.OVERALL_DIFFICULTY: "overall_difficulty",
    AttributeId.APPROACH_RATE: "approach_rate",
    AttributeId.MAX_COMBO: "max_combo",
    AttributeId.STAR_RATING: "star_rating",
    AttributeId.FLASHLIGHT: "flashlight_difficulty",
    AttributeId.SPEED_NOTE_COUNT: "speed_note_count",
    AttributeId.ACCURACY: "accuracy_difficulty",
    AttributeId.HIT_CIRCLE_COUNT: "hit_circle_count",
    AttributeId.SLIDER_COUNT: "slider_count",
    AttributeId.SPINNER_COUNT: "spinner_count",
    AttributeId.DRAIN_RATE: "drain_rate",
    AttributeId.CLOCK_RATE: "clock_rate",
}

_INTEGER_FIELDS = {"max_combo", "hit_circle_count", "slider_count", "spinner_count"}


def to_database_attributes(attributes: DifficultyAttributes) -> list[tuple[int, float]]:
    """Flatten to ``(attribute_id, value)`` pairs ordered by id."""
    return [(int(attr_id), float(getattr(attributes, name)))
            for attr_id, name in sorted(FIELD_BY_ID.items())]


def from_database_attributes(values: Mapping[int, float]) -> DifficultyAttributes:
    """Rebuild DifficultyAttributes from stored rows.

    Raises KeyError when a required id is absent.
    """
    kwargs = {}
    for attr_id, name in FIELD_BY_ID.items():
        value = values[int(attr_id)]
        kwargs[name] = int(round(value)) if name in _INTEGER_FIELDS else float(value)

    return DifficultyAttributes(**kwargs)
