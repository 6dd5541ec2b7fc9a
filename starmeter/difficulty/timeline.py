"""Difficulty timeline: a flat, index-addressed sequence of preprocessed hit objects."""

import logging
from collections.abc import Iterator

from starmeter.beatmap.models import Beatmap, Mod, ObjectKind
from starmeter.beatmap.mods import apply_mods, clock_rate, hit_radius, hit_windows
from starmeter.config import Settings, settings as default_settings
from starmeter.difficulty.models import TimelineNode

logger = logging.getLogger(__name__)


class DifficultyTimeline:
    """Ordered TimelineNodes with O(1) neighbour lookup by index."""

    def __init__(self, nodes: tuple[TimelineNode, ...], clock_rate: float = 1.0):
        self.nodes = nodes
        self.clock_rate = clock_rate

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[TimelineNode]:
        return iter(self.nodes)

    def __getitem__(self, index: int) -> TimelineNode:
        return self.nodes[index]

    def previous(self, node: TimelineNode, k: int = 0) -> TimelineNode | None:
        """The k-th node before *node* (k=0 is the immediate predecessor), or None."""
        index = node.index - (k + 1)
        if index < 0:
            return None
        return self.nodes[index]

    def next(self, node: TimelineNode, k: int = 0) -> TimelineNode | None:
        """The k-th node after *node* (k=0 is the immediate successor), or None."""
        index = node.index + (k + 1)
        if index >= len(self.nodes):
            return None
        return self.nodes[index]


def build_timeline(
    beatmap: Beatmap,
    mods: frozenset[Mod] = frozenset(),
    settings: Settings | None = None,
) -> DifficultyTimeline:
    """Preprocess a beatmap into a DifficultyTimeline for one mod combination."""
    config = (settings or default_settings).timeline

    rate = clock_rate(mods)
    difficulty = apply_mods(beatmap.difficulty, mods)
    radius = hit_radius(difficulty.circle_size)
    windows = hit_windows(difficulty.overall_difficulty, config).scaled(rate)

    center_x = config.playfield_width / 2 / radius
    center_y = config.playfield_height / 2 / radius

    nodes = []
    previous_start = None
    for index, obj in enumerate(beatmap.hit_objects):
        start_time = obj.start_time / rate
        delta_time = 0.0 if previous_start is None else start_time - previous_start
        previous_start = start_time

        if obj.kind == ObjectKind.SPINNER:
            x, y = center_x, center_y
        else:
            x, y = obj.x / radius, obj.y / radius

        nodes.append(TimelineNode(
            index=index,
            kind=obj.kind,
            normalized_x=x,
            normalized_y=y,
            start_time=start_time,
            delta_time=delta_time,
            strain_time=max(delta_time, config.min_delta_time),
            great_window=windows.great,
            ok_window=windows.ok,
            meh_window=windows.meh,
        ))

    logger.debug(f"Timeline: {len(nodes)} nodes, radius={radius:.2f}px, clock rate {rate}")
    return DifficultyTimeline(tuple(nodes), clock_rate=rate)
