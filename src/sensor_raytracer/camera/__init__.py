"""Camera module for sensor geometry and ray generation.

Components:
    sensor: Camera snapshot and derived sensor basis
    samples: Deterministic (pixel, ray) sample sequence
    motion: Caller-owned per-frame camera animation

Sensor coordinates are measured from the bottom-left corner:
    x in [0, width): left to right
    y in [0, height): bottom to top

The camera is validated before any ray is generated; a degenerate camera
raises ConfigurationError instead of producing NaN rays.
"""

from .motion import FocalLengthOscillation
from .samples import Pixel, Sample, SampleGenerator
from .sensor import (
    SAMPLES_PER_EXPOSURE,
    WORLD_UP,
    Camera,
    SensorBasis,
    centimeters,
    millimeters,
)

__all__ = [
    "Camera",
    "SensorBasis",
    "SampleGenerator",
    "Pixel",
    "Sample",
    "FocalLengthOscillation",
    "centimeters",
    "millimeters",
    "SAMPLES_PER_EXPOSURE",
    "WORLD_UP",
]
