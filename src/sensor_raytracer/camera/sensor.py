"""Physical sensor camera model.

Rays start on a simulated sensor plane and pass through a focal point that
sits ``focal_length`` in front of the camera position along the look
direction. The sensor basis is derived from the look and world-up vectors:

    sensor_x    = cross(look, world_up)
    sensor_y    = cross(look, sensor_x)
    focal_point = position + look * focal_length
    bottom_left = position - sensor_x * width/2 - sensor_y * height/2

``sensor_x`` and ``sensor_y`` are not renormalized; for a look direction at
an angle to world-up their length is the sine of that angle.

In this project, 1 unit of space = 1 meter.

Example:
    >>> from sensor_raytracer.camera.sensor import Camera, millimeters
    >>> camera = Camera.looking_at(
    ...     position=(10.0, 10.0, 10.0),
    ...     target=(0.0, 0.0, 0.0),
    ...     sensor=(millimeters(36.0), millimeters(24.0)),
    ...     exposure=0.01,
    ...     focal_length=millimeters(50.0),
    ... )
    >>> camera.samples_per_pixel()
    1
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from sensor_raytracer.core.ray import Vec3, as_vec3, cross, is_finite, length, normalize, vec3
from sensor_raytracer.errors import ConfigurationError, InvalidRayError

# Samples taken per pixel for each unit of exposure
SAMPLES_PER_EXPOSURE = 100

# Allowed deviation of |look| from 1
UNIT_LENGTH_TOLERANCE = 1e-6

# Sensor axes shorter than this mean look is parallel to world_up
DEGENERATE_AXIS_LENGTH = 1e-9

WORLD_UP = vec3(0.0, 1.0, 0.0)


def centimeters(n: float) -> float:
    """Return an engine space representation of n centimeters."""
    return n / 100.0


def millimeters(n: float) -> float:
    """Return an engine space representation of n millimeters."""
    return n / 1000.0


@dataclass(frozen=True)
class SensorBasis:
    """Derived sensor geometry for one camera snapshot.

    Attributes:
        sensor_x: Horizontal sensor axis, cross(look, world_up).
        sensor_y: Vertical sensor axis, cross(look, sensor_x).
        focal_point: Point all sensor rays converge toward.
        bottom_left: World-space bottom-left corner of the sensor.
        sensor_width: Sensor width in world units.
        sensor_height: Sensor height in world units.
    """

    sensor_x: Vec3
    sensor_y: Vec3
    focal_point: Vec3
    bottom_left: Vec3
    sensor_width: float
    sensor_height: float


@dataclass(frozen=True, eq=False)
class Camera:
    """A camera that casts rays from a simulated sensor through a focal point.

    Camera is an immutable snapshot. To change it between frames, build a new
    one with ``dataclasses.replace``. Construction does not validate;
    :meth:`derive_basis` does, and every sample generator calls it first.

    Attributes:
        position: Position of the camera (center of the sensor).
        look: Unit look direction.
        sensor: Sensor size (width, height) in world units.
        exposure: Amount of "time" to expose for; higher values take more
            samples per pixel.
        focal_length: Distance from the sensor to where the rays cross over.
        iso: How much color each ray adds. Reserved; unused by the flat
            color resolver.
        world_up: World up direction used to orient the sensor.
    """

    position: Vec3
    look: Vec3
    sensor: tuple[float, float]
    exposure: float
    focal_length: float
    iso: float = 1.0
    world_up: Vec3 = field(default_factory=lambda: WORLD_UP)

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", as_vec3(self.position))
        object.__setattr__(self, "look", as_vec3(self.look))
        object.__setattr__(self, "world_up", as_vec3(self.world_up))
        width, height = self.sensor
        object.__setattr__(self, "sensor", (float(width), float(height)))
        object.__setattr__(self, "exposure", float(self.exposure))
        object.__setattr__(self, "focal_length", float(self.focal_length))
        object.__setattr__(self, "iso", float(self.iso))

    @classmethod
    def looking_at(
        cls,
        position: Iterable[float],
        target: Iterable[float],
        sensor: tuple[float, float],
        exposure: float,
        focal_length: float,
        iso: float = 1.0,
        world_up: Iterable[float] = (0.0, 1.0, 0.0),
    ) -> Camera:
        """Create a camera at ``position`` looking toward ``target``.

        Raises:
            ConfigurationError: If position and target coincide.
        """
        position = as_vec3(position)
        try:
            look = normalize(as_vec3(target) - position)
        except InvalidRayError as e:
            raise ConfigurationError("Camera position and target must differ") from e
        return cls(
            position=position,
            look=look,
            sensor=sensor,
            exposure=exposure,
            focal_length=focal_length,
            iso=iso,
            world_up=as_vec3(world_up),
        )

    @property
    def sensor_width(self) -> float:
        return self.sensor[0]

    @property
    def sensor_height(self) -> float:
        return self.sensor[1]

    def samples_per_pixel(self) -> int:
        """Number of samples taken for each pixel: floor(round(100 * exposure, 9)).

        Monotonically non-decreasing in exposure. The derived count is
        checked by :meth:`validate`.
        """
        # Round away representation noise (0.07 * 100 == 7.000000000000001)
        return math.floor(round(SAMPLES_PER_EXPOSURE * self.exposure, 9))

    def validate(self) -> None:
        """Check every camera invariant.

        Raises:
            ConfigurationError: If any parameter is non-finite or out of
                range, look is not unit length, look is parallel to
                world_up, or the exposure yields fewer than one sample
                per pixel.
        """
        self._basis_vectors()

    def _basis_vectors(self) -> tuple[Vec3, Vec3]:
        for name in ("position", "look", "world_up"):
            if not is_finite(getattr(self, name)):
                raise ConfigurationError(f"Camera {name} must be finite")
        for name, value in (
            ("sensor width", self.sensor_width),
            ("sensor height", self.sensor_height),
            ("focal length", self.focal_length),
            ("exposure", self.exposure),
        ):
            if not math.isfinite(value) or value <= 0.0:
                raise ConfigurationError(f"Camera {name} must be positive, got {value}")
        if not math.isfinite(self.iso):
            raise ConfigurationError(f"Camera iso must be finite, got {self.iso}")

        look_length = length(self.look)
        if abs(look_length - 1.0) > UNIT_LENGTH_TOLERANCE:
            raise ConfigurationError(f"Camera look must be unit length, got |look| = {look_length}")

        spp = self.samples_per_pixel()
        if spp < 1:
            raise ConfigurationError(
                f"Exposure {self.exposure} yields {spp} samples per pixel; need at least 1"
            )

        sensor_x = cross(self.look, self.world_up)
        if length(sensor_x) < DEGENERATE_AXIS_LENGTH:
            raise ConfigurationError(
                f"Camera look {tuple(self.look)} is parallel to world up "
                f"{tuple(self.world_up)}; the sensor basis is degenerate"
            )
        sensor_y = cross(self.look, sensor_x)
        return sensor_x, sensor_y

    def derive_basis(self) -> SensorBasis:
        """Validate the camera and compute its sensor basis.

        Raises:
            ConfigurationError: If the camera is invalid. See :meth:`validate`.
        """
        sensor_x, sensor_y = self._basis_vectors()
        focal_point = self.position + self.look * self.focal_length
        bottom_left = (
            self.position
            - sensor_x * (self.sensor_width * 0.5)
            - sensor_y * (self.sensor_height * 0.5)
        )
        return SensorBasis(
            sensor_x=sensor_x,
            sensor_y=sensor_y,
            focal_point=as_vec3(focal_point),
            bottom_left=as_vec3(bottom_left),
            sensor_width=self.sensor_width,
            sensor_height=self.sensor_height,
        )

    def sensor_bottom_left(self) -> Vec3:
        """World-space bottom-left corner of the sensor.

        Raises:
            ConfigurationError: If the camera is invalid.
        """
        return self.derive_basis().bottom_left
