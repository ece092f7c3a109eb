"""Heart curve, displacement fields and the beat waveform. No state."""

import math
from typing import NamedTuple, Protocol

from heartbeat.constants import IMAGE_ENLARGE, MIN_DISTANCE_SQ, SHRINK_EXPONENT


class RandomSource(Protocol):
    """Anything with random() -> float in [0, 1), e.g. random.Random."""

    def random(self) -> float: ...


class Point2D(NamedTuple):
    x: float
    y: float


def heart_curve(t: float, center_x: float, center_y: float) -> Point2D:
    """Evaluate the heart curve at angle t, enlarged and centered.

    The two cos(3t) terms are both kept: the reference shape is drawn with
    this exact sum.
    """
    x = 17 * math.sin(t) ** 3
    y = -(16 * math.cos(t) - 5 * math.cos(2 * t) - 2 * math.cos(3 * t) - math.cos(3 * t))
    return Point2D(x * IMAGE_ENLARGE + center_x, y * IMAGE_ENLARGE + center_y)


def outward_force(dx: float, dy: float, exponent: float) -> float:
    """1 / (dx² + dy²)^exponent, with the squared distance floored at MIN_DISTANCE_SQ."""
    dist_sq = max(dx * dx + dy * dy, MIN_DISTANCE_SQ)
    return 1 / dist_sq ** exponent


def scatter_inside(x: float, y: float, center_x: float, center_y: float,
                   beta: float, rng: RandomSource) -> Point2D:
    """Pull a point toward the center by two exponentially distributed ratios."""
    # 1 - random() lies in (0, 1], so the log is always defined
    ratio_x = -beta * math.log(1.0 - rng.random())
    ratio_y = -beta * math.log(1.0 - rng.random())
    dx = ratio_x * (x - center_x)
    dy = ratio_y * (y - center_y)
    return Point2D(x - dx, y - dy)


def shrink(x: float, y: float, center_x: float, center_y: float, ratio: float) -> Point2D:
    """Displace a point along its offset from the center by an inverse-power force.

    The force is negative and is subtracted, so a positive ratio moves the
    point away from the center by ratio / dist^0.2.
    """
    offset_x = x - center_x
    offset_y = y - center_y
    force = -outward_force(offset_x, offset_y, SHRINK_EXPONENT)
    dx = ratio * force * offset_x
    dy = ratio * force * offset_y
    return Point2D(x - dx, y - dy)


def beat_wave(phase: float) -> float:
    """Beat signal, period pi/2 in phase, magnitude at most 2/pi."""
    return 2 * (2 * math.sin(4 * phase)) / (2 * math.pi)
