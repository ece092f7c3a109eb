"""Main run loop - ties together Canvas, ParticleSystem and Simulator."""

import logging
import os
import random

from heartbeat.canvas import Canvas, Font
from heartbeat.constants import (
    CAPTION_BOTTOM_MARGIN, CAPTION_FILL, CAPTION_FONT_FAMILIES, CAPTION_FONT_SIZE,
    CAPTION_TEXT, CAPTION_TRACKING, FPS, TIME_STEP,
)
from heartbeat.particles import ParticleSystem
from heartbeat.simulator import Simulator

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Console logging at HEARTBEAT_LOG_LEVEL (default INFO)."""
    level = (level or os.environ.get("HEARTBEAT_LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)


def make_rng(seed: int | str | None = None) -> random.Random:
    """Random source for a run, seeded from HEARTBEAT_SEED when set."""
    if seed is None:
        seed = os.environ.get("HEARTBEAT_SEED") or None
    if seed is not None:
        logger.info("Seeding random source with %s", seed)
        return random.Random(int(seed))
    return random.Random()


def draw_caption(canvas: Canvas) -> None:
    """Faint tracked footer caption, centered near the bottom edge."""
    canvas.save()
    try:
        canvas.font = Font(CAPTION_FONT_SIZE, CAPTION_FONT_FAMILIES)
        canvas.text_align = "center"
        canvas.text_baseline = "bottom"
        canvas.letter_spacing = CAPTION_TRACKING
        canvas.fill_style = CAPTION_FILL
        canvas.fill_text(CAPTION_TEXT, canvas.width / 2, canvas.height - CAPTION_BOTTOM_MARGIN)
    finally:
        canvas.restore()


class HeartbeatDriver:
    """Owns the canvas, the preview window, the time counter and the particle system.

    start() opens the window and subscribes to its resize events, stop()
    releases them. step() renders one frame and can be used without a
    window for headless rendering.
    """

    def __init__(self, width: int = 800, height: int = 600, fps: int = FPS,
                 title: str = "Heart Beat", scale: int = 1, rng: random.Random | None = None,
                 caption: bool = True):
        self.fps = fps
        self.title = title
        self.scale = scale
        self.caption = caption
        self.rng = rng if rng is not None else make_rng()
        self.time_value = 0.0
        self.frame = 0
        self.sim = None
        self.canvas: Canvas | None = None
        self.system: ParticleSystem | None = None
        self.resize(width, height)

    def resize(self, width: int, height: int) -> None:
        """Replace the canvas and rebuild the particle system for the new size."""
        logger.info("Building particle system for %dx%d", width, height)
        self.canvas = Canvas(width, height)
        self.system = ParticleSystem(self.canvas.width, self.canvas.height, self.rng)
        if self.sim is not None:
            self.sim.canvas = self.canvas

    def step(self) -> Canvas:
        """Render the current frame, then advance the time counter."""
        self.system.render(self.canvas, self.time_value, self.rng)
        if self.caption:
            draw_caption(self.canvas)
        self.time_value += TIME_STEP
        self.frame += 1
        return self.canvas

    def start(self) -> None:
        if self.sim is not None:
            return
        logger.info("Starting %s at %d fps", self.title, self.fps)
        self.sim = Simulator(self.canvas, scale=self.scale, title=self.title, on_resize=self.resize)

    def stop(self) -> None:
        """Close the window. Safe to call more than once."""
        if self.sim is None:
            return
        self.sim.close()
        self.sim = None
        logger.info("Stopped after %d frames", self.frame)

    def __enter__(self) -> "HeartbeatDriver":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()

    def run(self) -> None:
        """Render until the window is closed or the process is interrupted."""
        with self:
            try:
                while True:
                    self.step()
                    if not self.sim.update():
                        break
                    self.sim.tick(self.fps)
            except KeyboardInterrupt:
                pass


def run(fps: int = FPS, title: str = "Heart Beat", scale: int = 1,
        width: int = 800, height: int = 600) -> None:
    """Main entry point. Opens the preview window and animates the heart.

    Args:
        fps: Target frames per second (default 60).
        title: Window title.
        scale: Pixel scale factor for the window (default 1).
        width: Initial canvas width in pixels.
        height: Initial canvas height in pixels.
    """
    setup_logging()
    HeartbeatDriver(width, height, fps=fps, title=title, scale=scale).run()
