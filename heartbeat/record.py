"""Render heartbeat frames headlessly and save them as an animated GIF.

Usage: python -m heartbeat.record [out.gif]
Output: media/heartbeat.gif by default
"""

import logging
import random
import sys
from pathlib import Path

from PIL import Image

from heartbeat.canvas import Canvas
from heartbeat.constants import TIME_STEP
from heartbeat.particles import ParticleSystem

logger = logging.getLogger(__name__)

MEDIA_DIR = Path("media")

# GIF settings
SCALE = 1          # Upscale factor
N_FRAMES = 75      # One beat: period 5 in time, TIME_STEP per frame
GIF_FPS = 20       # Frames per second in the GIF


def canvas_to_image(canvas: Canvas, scale: int = SCALE) -> Image.Image:
    """Convert a Canvas buffer to a scaled-up PIL Image."""
    img = Image.frombytes("RGB", (canvas.width, canvas.height), canvas.get_buffer())
    if scale > 1:
        img = img.resize(
            (canvas.width * scale, canvas.height * scale),
            Image.NEAREST,
        )
    return img


def render_frames(n_frames: int = N_FRAMES, width: int = 500, height: int = 500,
                  rng: random.Random | None = None, t_offset: float = 0.0,
                  scale: int = SCALE) -> list[Image.Image]:
    """Render n_frames consecutive frames, advancing time by TIME_STEP each."""
    rng = rng if rng is not None else random.Random()
    canvas = Canvas(width, height)
    system = ParticleSystem(canvas.width, canvas.height, rng)
    frames = []
    for i in range(n_frames):
        system.render(canvas, t_offset + i * TIME_STEP, rng)
        frames.append(canvas_to_image(canvas, scale))
    return frames


def render_gif(out_path: Path, n_frames: int = N_FRAMES, fps: float = GIF_FPS, **kwargs) -> Path:
    """Render frames and save as animated GIF."""
    frames = render_frames(n_frames, **kwargs)
    if not frames:
        raise ValueError("n_frames must be at least 1")
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    # Save as GIF (duration in ms per frame)
    frames[0].save(
        out_path,
        save_all=True,
        append_images=frames[1:],
        duration=int(1000 / fps),
        loop=0,
        optimize=True,
    )
    logger.info("Saved %s (%d frames)", out_path, len(frames))
    return out_path


if __name__ == "__main__":
    from heartbeat.run import make_rng, setup_logging

    setup_logging()
    target = Path(sys.argv[1]) if len(sys.argv) > 1 else MEDIA_DIR / "heartbeat.gif"
    render_gif(target, rng=make_rng())
