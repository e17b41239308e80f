"""A sensor-camera raytracer.

Rays start on a simulated camera sensor, pass through a focal point and are
intersected with a scene of primitives; each pixel takes the flat color of
the nearest primitive hit, or the scene background.

Subpackages:
    core: Rays, colors, framebuffer, Taichi frame kernel and frame driver
    geometry: Sphere and quad primitives with intersection routines
    camera: Camera snapshot, sensor basis, sample generation, animation
    scene: Primitive collection, nearest-hit policy, color resolution
    preview: Presenters (window, headless) and PNG export
"""

from sensor_raytracer.errors import (
    ConfigurationError,
    InitializationError,
    InvalidRayError,
    RaytracerError,
)

__version__ = "0.1.0"

__all__ = [
    "RaytracerError",
    "ConfigurationError",
    "InvalidRayError",
    "InitializationError",
    "__version__",
]
