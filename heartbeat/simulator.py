"""Pygame preview window. Shows the canvas, optionally upscaled, and reports resizes."""

import logging
import os
from typing import Callable

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from heartbeat.canvas import Canvas

logger = logging.getLogger(__name__)

# Callback type: fn(width, height) -> None, sizes in canvas pixels
ResizeFn = Callable[[int, int], None]


class Simulator:
    """Opens a resizable window that displays the Canvas contents."""

    def __init__(self, canvas: Canvas, scale: int = 1, title: str = "Heart Beat",
                 on_resize: ResizeFn | None = None):
        self.canvas = canvas
        self.scale = max(1, scale)
        self.on_resize = on_resize

        pygame.init()
        self.screen = pygame.display.set_mode(
            (canvas.width * self.scale, canvas.height * self.scale), pygame.RESIZABLE)
        pygame.display.set_caption(title)
        self.clock = pygame.time.Clock()

    def update(self) -> bool:
        """Handle window events and blit canvas to screen. Returns False if window was closed."""
        resized = False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return False
            if event.type == pygame.VIDEORESIZE:
                self._resize(event.w, event.h)
                resized = True

        if resized:
            # The new canvas has not been rendered yet
            return True

        w, h = self.canvas.width, self.canvas.height
        if w == 0 or h == 0:
            self.screen.fill((0, 0, 0))
        else:
            frame = pygame.image.frombuffer(self.canvas.buffer, (w, h), "RGB")
            if self.screen.get_size() == (w, h):
                self.screen.blit(frame, (0, 0))
            else:
                pygame.transform.scale(frame, self.screen.get_size(), self.screen)
        pygame.display.flip()
        return True

    def _resize(self, width: int, height: int) -> None:
        logger.info("Window resized to %dx%d", width, height)
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        if self.on_resize is not None:
            self.on_resize(width // self.scale, height // self.scale)

    def tick(self, fps: int = 60) -> None:
        """Limit framerate."""
        self.clock.tick(fps)

    def close(self) -> None:
        pygame.quit()
