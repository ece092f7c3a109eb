"""Heart-shaped particle system: base point generation and per-frame rendering."""

import enum
import logging
import math
import random
from typing import NamedTuple, Protocol

from heartbeat.constants import (
    ACCENT_COLOR, BACKGROUND_COLOR, CENTER_BETA, CENTER_COUNT, CORE_FILL, Color,
    EDGE_BETA, EDGE_PER_OUTLINE, FILL_SIZE, GLOW_BLUR_INNER, GLOW_BLUR_OUTER,
    GLOW_COLOR, GLOW_FILL, HALO_BASE_COUNT, HALO_BASE_RADIUS, HALO_JITTER,
    HALO_RADIUS_GAIN, JITTER, LABEL_BASE_OPACITY, LABEL_FONT_FAMILIES,
    LABEL_FONT_SIZE, LABEL_OPACITY_GAIN, LABEL_SCALE_GAIN, LABEL_TEXT,
    OUTLINE_COUNT, OUTLINE_SIZE, PHASE_DIVISOR, PRIMARY_COLOR,
    PRIMARY_PROBABILITY, PULSE_AMPLITUDE, PULSE_EXPONENT, TWO_PI,
)
from heartbeat.canvas import Font
from heartbeat.geometry import (
    RandomSource, beat_wave, heart_curve, outward_force, scatter_inside, shrink,
)

logger = logging.getLogger(__name__)


class Surface(Protocol):
    """Drawing surface the particle system renders onto. Canvas implements it."""

    width: int
    height: int
    font: Font
    text_align: str
    text_baseline: str
    shadow_color: tuple
    shadow_blur: float
    fill_style: tuple

    def clear(self, color: Color) -> None: ...
    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None: ...
    def save(self) -> None: ...
    def restore(self) -> None: ...
    def translate(self, dx: float, dy: float) -> None: ...
    def scale(self, sx: float, sy: float | None = None) -> None: ...
    def fill_text(self, text: str, x: float, y: float) -> None: ...


class PointType(enum.Enum):
    OUTLINE = "outline"
    EDGE = "edge"
    CENTER = "center"
    HALO = "halo"


class BasePoint(NamedTuple):
    x: float
    y: float
    size: float
    color: Color
    type: PointType


class FrameParams(NamedTuple):
    """Everything a frame derives from the time value."""
    phase: float
    beat: float
    ratio: float
    halo_radius: float
    halo_count: int
    text_scale: float
    text_opacity: float


def frame_params(time_value: float) -> FrameParams:
    phase = time_value / PHASE_DIVISOR * math.pi
    beat = beat_wave(phase)
    opacity = LABEL_BASE_OPACITY + beat * LABEL_OPACITY_GAIN
    return FrameParams(
        phase=phase,
        beat=beat,
        ratio=PULSE_AMPLITUDE * beat,
        halo_radius=HALO_BASE_RADIUS + HALO_RADIUS_GAIN * (1 + beat),
        halo_count=math.floor(HALO_BASE_COUNT + HALO_BASE_COUNT * abs(beat) ** 2),
        text_scale=1 - beat * LABEL_SCALE_GAIN,
        text_opacity=min(1.0, max(0.0, opacity)),
    )


def pick_color(rng: RandomSource) -> Color:
    return PRIMARY_COLOR if rng.random() < PRIMARY_PROBABILITY else ACCENT_COLOR


def _uniform(rng: RandomSource, low: float, high: float) -> float:
    return low + (high - low) * rng.random()


class ParticleSystem:
    """Fixed cloud of base points around a heart outline, pulsed on every render.

    One instance belongs to one surface size. The driver builds a new one
    when the size changes; base_points is never modified afterwards.
    """

    def __init__(self, width: float, height: float, rng: RandomSource | None = None):
        self.center_x = width / 2
        self.center_y = height / 2
        self.rng = rng if rng is not None else random.Random()
        self.base_points: tuple[BasePoint, ...] = self._generate(self.rng)
        logger.info("Generated %d base points around (%.1f, %.1f)",
                    len(self.base_points), self.center_x, self.center_y)

    def _generate(self, rng: RandomSource) -> tuple[BasePoint, ...]:
        cx, cy = self.center_x, self.center_y

        outline = []
        for _ in range(OUTLINE_COUNT):
            x, y = heart_curve(rng.random() * TWO_PI, cx, cy)
            outline.append(BasePoint(x, y, _uniform(rng, *OUTLINE_SIZE), pick_color(rng), PointType.OUTLINE))
        outline = tuple(outline)

        edge = []
        for p in outline:
            for _ in range(EDGE_PER_OUTLINE):
                x, y = scatter_inside(p.x, p.y, cx, cy, EDGE_BETA, rng)
                edge.append(BasePoint(x, y, _uniform(rng, *FILL_SIZE), pick_color(rng), PointType.EDGE))

        center = []
        for _ in range(CENTER_COUNT):
            p = outline[min(int(rng.random() * len(outline)), len(outline) - 1)]
            x, y = scatter_inside(p.x, p.y, cx, cy, CENTER_BETA, rng)
            center.append(BasePoint(x, y, _uniform(rng, *FILL_SIZE), pick_color(rng), PointType.CENTER))

        return outline + tuple(edge) + tuple(center)

    def render(self, surface: Surface, time_value: float, rng: RandomSource | None = None) -> None:
        """Draw one frame for time_value. Only the surface is modified."""
        rng = rng if rng is not None else self.rng
        params = frame_params(time_value)
        cx, cy = self.center_x, self.center_y

        surface.clear(BACKGROUND_COLOR)

        # Base points, pulsed outward and jittered
        ratio = params.ratio
        fill_rect = surface.fill_rect
        for p in self.base_points:
            offset_x = p.x - cx
            offset_y = p.y - cy
            force = outward_force(offset_x, offset_y, PULSE_EXPONENT)
            dx = ratio * force * offset_x + (rng.random() * 2 - 1) * JITTER
            dy = ratio * force * offset_y + (rng.random() * 2 - 1) * JITTER
            fill_rect(p.x - dx, p.y - dy, p.size, p.size, p.color)

        # Halo, regenerated every frame
        for _ in range(params.halo_count):
            x, y = heart_curve(rng.random() * TWO_PI, cx, cy)
            x, y = shrink(x, y, cx, cy, params.halo_radius)
            x += _uniform(rng, -HALO_JITTER, HALO_JITTER)
            y += _uniform(rng, -HALO_JITTER, HALO_JITTER)
            color = pick_color(rng)
            size = 1 if rng.random() < 0.5 else 2
            fill_rect(x, y, size, size, color)

        self._draw_label(surface, params)

    def _draw_label(self, surface: Surface, params: FrameParams) -> None:
        opacity = params.text_opacity
        surface.save()
        try:
            surface.translate(self.center_x, self.center_y)
            surface.scale(params.text_scale, params.text_scale)
            surface.font = Font(LABEL_FONT_SIZE, LABEL_FONT_FAMILIES)
            surface.text_align = "center"
            surface.text_baseline = "middle"

            surface.shadow_color = GLOW_COLOR
            surface.shadow_blur = GLOW_BLUR_INNER
            surface.fill_style = (*GLOW_FILL, opacity)
            surface.fill_text(LABEL_TEXT, 0, 0)

            surface.shadow_blur = GLOW_BLUR_OUTER
            surface.fill_text(LABEL_TEXT, 0, 0)

            surface.shadow_blur = 0
            surface.fill_style = (*CORE_FILL, opacity)
            surface.fill_text(LABEL_TEXT, 0, 0)
        finally:
            surface.restore()
