"""Deterministic sample generation for a camera snapshot.

A :class:`SampleGenerator` is a finite, restartable sequence of
``(pixel, ray)`` pairs. Sample ``i`` belongs to pixel
``i // samples_per_pixel``; pixels are enumerated row-major from the
bottom-left, x fastest, so every pixel receives ``samples_per_pixel``
consecutive samples before the next pixel starts.

There is no randomness and no hidden state: iterating the same generator
twice, or two generators built from equal camera snapshots, yields
identical sequences.

Every sample of a pixel currently gets the exact same ray (no sub-pixel
jitter), so more than one sample per pixel is redundant.

Example:
    >>> from sensor_raytracer.camera.samples import SampleGenerator
    >>> samples = SampleGenerator(camera, width=768, height=512)
    >>> len(samples) == samples.samples_per_pixel * 768 * 512
    True
    >>> for pixel, ray in samples:
    ...     ...
"""

from __future__ import annotations

import operator
from collections.abc import Iterator, Sequence
from typing import overload

from sensor_raytracer.camera.sensor import Camera, SensorBasis
from sensor_raytracer.core.ray import Ray, normalize
from sensor_raytracer.errors import ConfigurationError

# Pixel coordinate (x, y), (0, 0) = bottom left
Pixel = tuple[int, int]
Sample = tuple[Pixel, Ray]


class SampleGenerator(Sequence[Sample]):
    """Finite sequence of (pixel, ray) samples for one camera snapshot.

    Attributes:
        camera: The camera snapshot the samples were derived from.
        width: Horizontal resolution in pixels.
        height: Vertical resolution in pixels.
        basis: The sensor basis derived from the camera.
        samples_per_pixel: Consecutive samples emitted for each pixel.
        total_samples: samples_per_pixel * width * height.
    """

    def __init__(self, camera: Camera, width: int, height: int) -> None:
        """Snapshot the camera and prepare the sample sequence.

        Raises:
            ConfigurationError: If the camera is invalid or the resolution
                is not positive.
        """
        for name, value in (("width", width), ("height", height)):
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigurationError(f"Resolution {name} must be a positive int, got {value!r}")

        self.basis: SensorBasis = camera.derive_basis()
        self.camera = camera
        self.width = width
        self.height = height
        self.samples_per_pixel = camera.samples_per_pixel()
        self.total_samples = self.samples_per_pixel * width * height

    def __len__(self) -> int:
        return self.total_samples

    @overload
    def __getitem__(self, index: int) -> Sample: ...

    @overload
    def __getitem__(self, index: slice) -> list[Sample]: ...

    def __getitem__(self, index: int | slice) -> Sample | list[Sample]:
        if isinstance(index, slice):
            return [self._sample(i) for i in range(*index.indices(self.total_samples))]
        i = operator.index(index)
        if i < 0:
            i += self.total_samples
        if not 0 <= i < self.total_samples:
            raise IndexError(f"Sample index {index} out of range [0, {self.total_samples})")
        return self._sample(i)

    def __iter__(self) -> Iterator[Sample]:
        # Consecutive samples of a pixel share one ray; build it once per pixel
        spp = self.samples_per_pixel
        for y in range(self.height):
            for x in range(self.width):
                pixel = (x, y)
                ray = self.ray_for_pixel(x, y)
                for _ in range(spp):
                    yield pixel, ray

    def _sample(self, i: int) -> Sample:
        pixel_index = i // self.samples_per_pixel
        x = pixel_index % self.width
        y = pixel_index // self.width
        return (x, y), self.ray_for_pixel(x, y)

    def pixel_of(self, i: int) -> Pixel:
        """Pixel coordinate that sample ``i`` belongs to."""
        pixel_index = i // self.samples_per_pixel
        return (pixel_index % self.width, pixel_index // self.width)

    def pixels(self) -> Iterator[Pixel]:
        """Yield every pixel once, in emission order."""
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)

    def ray_for_pixel(self, x: int, y: int) -> Ray:
        """Compute the ray shared by every sample of pixel (x, y).

        Raises:
            IndexError: If the pixel lies outside the resolution.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height}")

        basis = self.basis
        # How far to move along the sensor from the bottom left, (0, 0) = bottom left
        advance_x = x / self.width
        advance_y = y / self.height

        origin = (
            basis.bottom_left
            + basis.sensor_x * (advance_x * basis.sensor_width)
            + basis.sensor_y * (advance_y * basis.sensor_height)
        )
        direction = normalize(basis.focal_point - origin)
        return Ray(origin, direction)

    def __repr__(self) -> str:
        return (
            f"SampleGenerator(width={self.width}, height={self.height}, "
            f"samples_per_pixel={self.samples_per_pixel}, total_samples={self.total_samples})"
        )
