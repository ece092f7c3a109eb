"""Animated heart-shaped particle field, pulsed by a periodic beat."""

from heartbeat.canvas import Canvas
from heartbeat.particles import ParticleSystem, frame_params
from heartbeat.run import HeartbeatDriver, run

__all__ = ["Canvas", "HeartbeatDriver", "ParticleSystem", "frame_params", "run"]
