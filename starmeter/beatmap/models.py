"""Beatmap and score input models.

These are the already-parsed values handed to the engine by the beatmap
and score collaborators; nothing here reads files.
"""

from dataclasses import dataclass, field
from enum import Enum


class ObjectKind(str, Enum):
    CIRCLE = "circle"
    SLIDER = "slider"
    SPINNER = "spinner"


class Mod(str, Enum):
    """Game modifiers that influence difficulty or performance."""
    EASY = "EZ"
    NO_FAIL = "NF"
    HALF_TIME = "HT"
    HARD_ROCK = "HR"
    DOUBLE_TIME = "DT"
    NIGHTCORE = "NC"
    HIDDEN = "HD"
    FLASHLIGHT = "FL"
    SPUN_OUT = "SO"
    TOUCH_DEVICE = "TD"
    BLINDS = "BL"


def parse_mods(acronyms: str | list[str] | None) -> frozenset[Mod]:
    """Parse ``"HDDT"``, ``"HD,DT"`` or ``["HD", "DT"]`` into a mod set."""
    if not acronyms:
        return frozenset()

    if isinstance(acronyms, str):
        text = acronyms.replace(",", "").replace(" ", "").upper()
        if len(text) % 2:
            raise ValueError(f"Malformed mod string: {acronyms!r}")
        acronyms = [text[i:i + 2] for i in range(0, len(text), 2)]

    mods = set()
    for acronym in acronyms:
        try:
            mods.add(Mod(acronym.upper()))
        except ValueError:
            raise ValueError(f"Unknown mod acronym: {acronym!r}") from None
    return frozenset(mods)


@dataclass(frozen=True)
class HitObject:
    """A single hit object in playfield coordinates (osu!pixels, ms)."""
    kind: ObjectKind
    start_time: float
    x: float
    y: float
    end_time: float | None = None
    combo: int = 1  # combo contribution, nested judgements for sliders


@dataclass(frozen=True)
class BeatmapDifficulty:
    circle_size: float = 5.0
    overall_difficulty: float = 5.0
    approach_rate: float = 5.0
    drain_rate: float = 5.0


@dataclass
class Beatmap:
    """Hit objects in time order plus the global difficulty settings."""
    hit_objects: list[HitObject]
    difficulty: BeatmapDifficulty = field(default_factory=BeatmapDifficulty)

    def _count(self, kind: ObjectKind) -> int:
        return sum(1 for o in self.hit_objects if o.kind == kind)

    @property
    def hit_circle_count(self) -> int:
        return self._count(ObjectKind.CIRCLE)

    @property
    def slider_count(self) -> int:
        return self._count(ObjectKind.SLIDER)

    @property
    def spinner_count(self) -> int:
        return self._count(ObjectKind.SPINNER)

    @property
    def max_combo(self) -> int:
        return sum(o.combo for o in self.hit_objects)


@dataclass(frozen=True)
class ScoreStatistics:
    """Judgement counts of a single play."""
    count_great: int = 0
    count_ok: int = 0
    count_meh: int = 0
    count_miss: int = 0
    max_combo: int = 0
    accuracy: float = 1.0  # 0.0-1.0
    mods: frozenset[Mod] = frozenset()

    def __post_init__(self):
        counts = (self.count_great, self.count_ok, self.count_meh, self.count_miss, self.max_combo)
        if any(c < 0 for c in counts):
            raise ValueError(f"Judgement counts must be non-negative: {counts}")

    @property
    def total_hits(self) -> int:
        return self.count_great + self.count_ok + self.count_meh + self.count_miss

    @property
    def total_successful_hits(self) -> int:
        return self.count_great + self.count_ok + self.count_meh
