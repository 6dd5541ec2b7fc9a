"""Aim evaluator: average cursor speed while inside the hit circle.

The cursor path between two consecutive objects is modelled per axis as a
quintic Hermite curve: it starts at the previous object and ends at the
current one, matches the entry velocities at both ends and has zero
acceleration there. The velocity at an object is the central difference of
its neighbours' positions, or zero when a neighbour is missing, so a
stopping point (snap aim) and a pass-through (flow aim) are both expressible.

The average speed inside the note is the integral of the speed from the
moment the path enters the unit circle around the object (positions are
normalized by the hit radius) until it leaves it, divided by that time.
The integral is split at the click: the part before comes from the path
into the object, the part after from the path into the next object.
"""

import math
from dataclasses import dataclass

import numpy as np

from starmeter.config import Settings, settings as default_settings
from starmeter.difficulty.models import TimelineNode
from starmeter.difficulty.timeline import DifficultyTimeline
from starmeter.numerics.quadrature import integrate
from starmeter.numerics.root_finding import brent


def hermite_position(x0, x1, v0, v1, dt, t):
    """Position along one axis at time t in [0, dt]."""
    s = t / dt
    s3 = s * s * s
    s4 = s3 * s
    s5 = s4 * s
    h_start = 1 - 10 * s3 + 15 * s4 - 6 * s5
    h_end = 10 * s3 - 15 * s4 + 6 * s5
    h_v0 = s - 6 * s3 + 8 * s4 - 3 * s5
    h_v1 = -4 * s3 + 7 * s4 - 3 * s5
    return x0 * h_start + x1 * h_end + dt * (v0 * h_v0 + v1 * h_v1)


def hermite_velocity(x0, x1, v0, v1, dt, t):
    """Derivative of :func:`hermite_position` with respect to t."""
    s = t / dt
    s2 = s * s
    s3 = s2 * s
    s4 = s3 * s
    d_end = 30 * s2 - 60 * s3 + 30 * s4
    d_v0 = 1 - 18 * s2 + 32 * s3 - 15 * s4
    d_v1 = -12 * s2 + 28 * s3 - 15 * s4
    return (x1 - x0) / dt * d_end + v0 * d_v0 + v1 * d_v1


def object_velocity(timeline: DifficultyTimeline, node: TimelineNode) -> tuple[float, float]:
    """Cursor velocity when passing *node*, in normalized units per ms."""
    previous = timeline.previous(node)
    following = timeline.next(node)
    if previous is None or following is None or previous.is_spinner or following.is_spinner:
        return 0.0, 0.0

    elapsed = following.start_time - previous.start_time
    if elapsed <= 0:
        return 0.0, 0.0

    return (
        (following.normalized_x - previous.normalized_x) / elapsed,
        (following.normalized_y - previous.normalized_y) / elapsed,
    )


@dataclass(frozen=True)
class CursorPath:
    """The path from the previous object into *target*, one set of terms per axis."""
    x0: float
    x1: float
    vx0: float
    vx1: float
    y0: float
    y1: float
    vy0: float
    vy1: float
    duration: float

    def position(self, t):
        return (
            hermite_position(self.x0, self.x1, self.vx0, self.vx1, self.duration, t),
            hermite_position(self.y0, self.y1, self.vy0, self.vy1, self.duration, t),
        )

    def speed(self, t):
        vx = hermite_velocity(self.x0, self.x1, self.vx0, self.vx1, self.duration, t)
        vy = hermite_velocity(self.y0, self.y1, self.vy0, self.vy1, self.duration, t)
        return np.hypot(vx, vy)

    def squared_distance_to(self, node: TimelineNode, t: float) -> float:
        x, y = self.position(t)
        return (x - node.normalized_x) ** 2 + (y - node.normalized_y) ** 2


def path_into(timeline: DifficultyTimeline, target: TimelineNode) -> CursorPath:
    """Cursor path from the object before *target* to *target* over its strain time."""
    source = timeline.previous(target)
    vx0, vy0 = object_velocity(timeline, source)
    vx1, vy1 = object_velocity(timeline, target)
    return CursorPath(
        x0=source.normalized_x, x1=target.normalized_x, vx0=vx0, vx1=vx1,
        y0=source.normalized_y, y1=target.normalized_y, vy0=vy0, vy1=vy1,
        duration=target.strain_time,
    )


def evaluate_aim(
    timeline: DifficultyTimeline,
    node: TimelineNode,
    settings: Settings | None = None,
) -> float:
    """Average cursor speed inside *node*'s circle (normalized units per ms)."""
    config = (settings or default_settings).aim
    accuracy = config.numerical_algorithm_accuracy

    # A spinner's effective window is infinite, it never limits aim
    if node.is_spinner:
        return 0.0

    previous = timeline.previous(node)
    following = timeline.next(node)

    distance = 0.0
    time_in_note = 0.0

    # From entering the circle until the click
    if previous is not None and not previous.is_spinner:
        path = path_into(timeline, node)
        duration = path.duration

        if previous.distance_to(node) <= 1:
            # Overlapping circles: the cursor is inside as soon as the previous one is hit
            time_enter = 0.0
        else:
            time_enter = brent(
                lambda t: path.squared_distance_to(node, t) - 1,
                0.0, duration, accuracy, max_iterations=config.root_max_iterations,
            )

        distance += integrate(path.speed, time_enter, duration, accuracy)
        time_in_note += duration - time_enter
    else:
        time_in_note += node.meh_window

    # From the click until leaving the circle
    if following is not None and not following.is_spinner:
        path = path_into(timeline, following)
        duration = path.duration

        if following.distance_to(node) <= 1:
            time_exit = duration
        else:
            time_exit = brent(
                lambda t: path.squared_distance_to(node, t) - 1,
                0.0, duration, accuracy, max_iterations=config.root_max_iterations,
            )

        distance += integrate(path.speed, 0.0, time_exit, accuracy)
        time_in_note += time_exit
    else:
        time_in_note += node.meh_window

    if time_in_note <= 0 or not math.isfinite(time_in_note):
        return 0.0

    return distance / time_in_note
