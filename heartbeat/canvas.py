"""RGB pixel buffer with rectangle fills and a canvas-style text API."""

import functools
import logging
import math
from typing import NamedTuple

import numpy as np
from PIL import Image, ImageDraw, ImageFilter, ImageFont

from heartbeat.constants import Color

logger = logging.getLogger(__name__)

# RGB plus a float alpha in [0, 1]
RGBA = tuple[int, int, int, float]

_H_ANCHORS = {"left": "l", "center": "m", "right": "r"}
_V_ANCHORS = {"top": "t", "middle": "m", "alphabetic": "s", "bottom": "b"}

_STATE_ATTRS = (
    "_tx", "_ty", "_sx", "_sy", "font", "text_align", "text_baseline",
    "shadow_color", "shadow_blur", "fill_style", "letter_spacing",
)


class Font(NamedTuple):
    """Font request: pixel size plus TrueType files to try in order."""
    size: float
    families: tuple[str, ...] = ()


@functools.lru_cache(maxsize=64)
def load_font(families: tuple[str, ...], size: int) -> ImageFont.FreeTypeFont:
    """First loadable TrueType font from families, else Pillow's default at that size."""
    for family in families:
        try:
            return ImageFont.truetype(family, size)
        except OSError:
            continue
    logger.debug("None of %s found, using Pillow's default font at %dpx", families, size)
    return ImageFont.load_default(size)


def _text_width(font: ImageFont.FreeTypeFont, text: str, spacing: float) -> float:
    """Sum of glyph advances plus spacing between glyphs."""
    if not text:
        return 0.0
    return sum(font.getlength(ch) for ch in text) + spacing * (len(text) - 1)


class Canvas:
    """RGB pixel buffer with drawing primitives.

    Pixels are stored as a flat bytearray in RGB order: [R0,G0,B0, R1,G1,B1, ...]
    Row-major: pixel (x, y) is at index (y * width + x) * 3.

    Text drawing follows the 2D canvas model: a scale + translate transform,
    save()/restore() of transform and style, a blurred shadow and an
    alpha-blended fill color.
    """

    def __init__(self, width: int = 800, height: int = 600):
        self.width = max(0, int(width))
        self.height = max(0, int(height))
        self.buffer = bytearray(self.width * self.height * 3)
        self._stack: list[tuple] = []
        self.reset_state()

    def reset_state(self) -> None:
        """Identity transform and default text style."""
        self._tx, self._ty = 0.0, 0.0
        self._sx, self._sy = 1.0, 1.0
        self.font = Font(10)
        self.text_align = "left"
        self.text_baseline = "alphabetic"
        self.shadow_color: RGBA = (0, 0, 0, 0.0)
        self.shadow_blur = 0.0
        self.fill_style: RGBA = (0, 0, 0, 1.0)
        self.letter_spacing = 0.0

    # --- Pixels ---

    def clear(self, color: Color = (0, 0, 0)) -> None:
        """Fill entire canvas with a color (default black)."""
        self.buffer[:] = bytes(color[:3]) * (self.width * self.height)

    def get(self, x: int, y: int) -> Color:
        """Get a pixel's color. Returns (0,0,0) for out-of-bounds."""
        if 0 <= x < self.width and 0 <= y < self.height:
            idx = (y * self.width + x) * 3
            return (self.buffer[idx], self.buffer[idx + 1], self.buffer[idx + 2])
        return (0, 0, 0)

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None:
        """Fill a rectangle given in float pixel coordinates.

        Edges are rounded to the nearest pixel, any positive size covers at
        least one pixel, and the part outside the canvas is clipped.
        """
        if w <= 0 or h <= 0 or not (math.isfinite(x) and math.isfinite(y)):
            return
        x0 = math.floor(x + 0.5)
        y0 = math.floor(y + 0.5)
        x1 = max(math.floor(x + w + 0.5), x0 + 1)
        y1 = max(math.floor(y + h + 0.5), y0 + 1)
        x0, x1 = max(x0, 0), min(x1, self.width)
        y0, y1 = max(y0, 0), min(y1, self.height)
        if x0 >= x1 or y0 >= y1:
            return
        row = bytes(color[:3]) * (x1 - x0)
        stride = self.width * 3
        for py in range(y0, y1):
            start = py * stride + x0 * 3
            self.buffer[start:start + len(row)] = row

    def get_buffer(self) -> bytes:
        """Get the entire pixel buffer as bytes."""
        return bytes(self.buffer)

    # --- Transform and style state ---

    def save(self) -> None:
        self._stack.append(tuple(getattr(self, name) for name in _STATE_ATTRS))

    def restore(self) -> None:
        """Pop the last saved state. A restore without a save is ignored."""
        if not self._stack:
            return
        for name, value in zip(_STATE_ATTRS, self._stack.pop()):
            setattr(self, name, value)

    def translate(self, dx: float, dy: float) -> None:
        self._tx += self._sx * dx
        self._ty += self._sy * dy

    def scale(self, sx: float, sy: float | None = None) -> None:
        self._sx *= sx
        self._sy *= sx if sy is None else sy

    def to_device(self, x: float, y: float) -> tuple[float, float]:
        """Map a point through the current transform."""
        return (self._tx + self._sx * x, self._ty + self._sy * y)

    # --- Text ---

    def fill_text(self, text: str, x: float, y: float) -> None:
        """Draw text at (x, y) with the current font, alignment, shadow and fill style."""
        r, g, b, alpha = self.fill_style
        if not text or alpha <= 0 or self.width == 0 or self.height == 0:
            return
        size = round(self.font.size * abs(self._sy))
        if size <= 0:
            return
        font = load_font(self.font.families, size)
        px, py = self.to_device(x, y)

        mask = Image.new("L", (self.width, self.height))
        self._draw_mask(ImageDraw.Draw(mask), text, px, py, font, self.letter_spacing * abs(self._sx))

        sr, sg, sb, shadow_alpha = self.shadow_color
        if self.shadow_blur > 0 and shadow_alpha > 0:
            # Canvas shadows blur with a standard deviation of half the blur radius
            shadow = mask.filter(ImageFilter.GaussianBlur(self.shadow_blur / 2))
            self._blend(shadow, shadow_alpha * alpha, (sr, sg, sb))
        self._blend(mask, alpha, (r, g, b))

    def measure_text(self, text: str) -> float:
        """Advance width of text in user units, letter spacing included."""
        font = load_font(self.font.families, max(1, round(self.font.size)))
        return _text_width(font, text, self.letter_spacing)

    def _draw_mask(self, draw: ImageDraw.ImageDraw, text: str, x: float, y: float,
                   font: ImageFont.FreeTypeFont, spacing: float) -> None:
        h_anchor = _H_ANCHORS.get(self.text_align, "l")
        v_anchor = _V_ANCHORS.get(self.text_baseline, "s")
        if not spacing:
            draw.text((x, y), text, fill=255, font=font, anchor=h_anchor + v_anchor)
            return
        # Tracked text is laid out one glyph at a time from the left edge
        total = _text_width(font, text, spacing)
        if h_anchor == "m":
            x -= total / 2
        elif h_anchor == "r":
            x -= total
        for ch in text:
            draw.text((x, y), ch, fill=255, font=font, anchor="l" + v_anchor)
            x += font.getlength(ch) + spacing

    def _blend(self, mask: Image.Image, opacity: float, color: Color) -> None:
        """Source-over blend color into the buffer, weighted by mask * opacity."""
        box = mask.getbbox()
        if box is None:
            return
        left, top, right, bottom = box
        coverage = np.asarray(mask.crop(box), dtype=np.float32) * (min(opacity, 1.0) / 255.0)
        pixels = np.frombuffer(self.buffer, dtype=np.uint8).reshape(self.height, self.width, 3)
        region = pixels[top:bottom, left:right]
        a = coverage[..., None]
        blended = region * (1.0 - a) + np.asarray(color, dtype=np.float32) * a
        region[...] = np.clip(blended + 0.5, 0, 255).astype(np.uint8)
