"""Render configuration.

Window dimensions derive from a fixed aspect ratio (a 36x24 mm full-frame
sensor): ``width = int(height * aspect_ratio)``, 768x512 by default.

Example:
    >>> from sensor_raytracer.config import RenderConfig
    >>> config = RenderConfig(height=256)
    >>> config.width
    384
    >>> camera = config.camera()
"""

from __future__ import annotations

from dataclasses import dataclass

from sensor_raytracer.camera.sensor import Camera, millimeters
from sensor_raytracer.core.frame import BACKENDS, Backend
from sensor_raytracer.errors import ConfigurationError
from sensor_raytracer.scene.presets import SCENES

ASPECT_RATIO = 36.0 / 24.0
WINDOW_HEIGHT = 512
WINDOW_WIDTH = int(WINDOW_HEIGHT * ASPECT_RATIO)


@dataclass(frozen=True)
class RenderConfig:
    """Settings for a rendering session.

    Attributes:
        height: Frame height in pixels.
        aspect_ratio: Width divided by height.
        backend: "reference" (sequential Python) or "taichi" (parallel kernel).
        scene: Name of a preset in sensor_raytracer.scene.presets.SCENES.
        camera_position: Camera position in meters.
        camera_target: Point the camera looks at.
        sensor: Sensor size (width, height) in meters.
        exposure: Exposure; samples per pixel = floor(round(100 * exposure, 9)).
        focal_length: Distance from sensor to focal point, in meters.
        iso: Reserved color scale.
        oscillate: Animate the focal length between frames.
    """

    height: int = WINDOW_HEIGHT
    aspect_ratio: float = ASPECT_RATIO
    backend: Backend = "taichi"
    scene: str = "two-spheres"
    camera_position: tuple[float, float, float] = (10.0, 10.0, 10.0)
    camera_target: tuple[float, float, float] = (0.0, 0.0, 0.0)
    sensor: tuple[float, float] = (millimeters(36.0), millimeters(24.0))
    exposure: float = 0.01
    focal_length: float = millimeters(50.0)
    iso: float = 1.0
    oscillate: bool = True

    def __post_init__(self) -> None:
        if self.height <= 0:
            raise ConfigurationError(f"Height must be positive, got {self.height}")
        if self.aspect_ratio <= 0.0:
            raise ConfigurationError(f"Aspect ratio must be positive, got {self.aspect_ratio}")
        if self.width <= 0:
            raise ConfigurationError(
                f"Aspect ratio {self.aspect_ratio} gives zero width at height {self.height}"
            )
        if self.backend not in BACKENDS:
            raise ConfigurationError(f"Unknown backend {self.backend!r}; choose from {BACKENDS}")
        if self.scene not in SCENES:
            raise ConfigurationError(f"Unknown scene {self.scene!r}; choose from {sorted(SCENES)}")

    @property
    def width(self) -> int:
        """Frame width, int(height * aspect_ratio)."""
        return int(self.height * self.aspect_ratio)

    def camera(self) -> Camera:
        """Build the initial camera snapshot.

        Raises:
            ConfigurationError: If position and target coincide.
        """
        return Camera.looking_at(
            position=self.camera_position,
            target=self.camera_target,
            sensor=self.sensor,
            exposure=self.exposure,
            focal_length=self.focal_length,
            iso=self.iso,
        )
