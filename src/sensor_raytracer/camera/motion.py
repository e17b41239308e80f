"""Caller-owned camera animation.

The renderer never mutates a camera; animations are callables that take the
current snapshot and return the next one. They are handed to
:meth:`sensor_raytracer.core.frame.FrameDriver.run` as ``advance``.
"""

from __future__ import annotations

import math
from dataclasses import replace

from sensor_raytracer.camera.sensor import Camera, millimeters
from sensor_raytracer.errors import ConfigurationError


class FocalLengthOscillation:
    """Breathe the focal length with a sine wave, one step per frame.

    Each call advances an internal clock by ``step`` and adds
    ``amplitude * sin(t)`` to the focal length.

    Attributes:
        step: Clock increment per call.
        amplitude: Focal length change scale, in world units.
        t: Current clock value.
    """

    def __init__(self, step: float = 0.1, amplitude: float = millimeters(5.0)) -> None:
        self.step = step
        self.amplitude = amplitude
        self.t = 0.0

    def __call__(self, camera: Camera) -> Camera:
        """Return the next camera snapshot.

        Raises:
            ConfigurationError: If the focal length would become non-positive.
        """
        self.t += self.step
        focal_length = camera.focal_length + self.amplitude * math.sin(self.t)
        if focal_length <= 0.0:
            raise ConfigurationError(
                f"Focal length oscillation reached {focal_length} at t={self.t:.3f}"
            )
        return replace(camera, focal_length=focal_length)

    def reset(self) -> None:
        self.t = 0.0
