"""Framebuffer holding one 8-bit RGB color per pixel.

Pixel (0, 0) is the bottom-left corner, matching the sample generator. The
backing array has shape (height, width, 3) with row 0 at the bottom; use
:meth:`Framebuffer.to_image` for the usual top-left image layout.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from sensor_raytracer.core.color import BLACK, Color


class Framebuffer:
    """A fixed-size RGB pixel buffer.

    The buffer is allocated once and overwritten in place every frame; it
    is never resized.

    Attributes:
        width: Width in pixels.
        height: Height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Framebuffer dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self._pixels: npt.NDArray[np.uint8] = np.zeros((height, width, 3), dtype=np.uint8)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def pixels(self) -> npt.NDArray[np.uint8]:
        """The backing array, shape (height, width, 3), bottom row first.

        Writable so that bulk writers (the Taichi integrator) can fill it in
        place; its shape must not be changed.
        """
        return self._pixels

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(
                f"Pixel ({x}, {y}) outside framebuffer {self._width}x{self._height}"
            )

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        """Write one pixel. (0, 0) is bottom-left."""
        self._check_bounds(x, y)
        self._pixels[y, x] = (color.r, color.g, color.b)

    def get_pixel(self, x: int, y: int) -> Color:
        """Read one pixel. (0, 0) is bottom-left."""
        self._check_bounds(x, y)
        r, g, b = self._pixels[y, x]
        return Color(int(r), int(g), int(b))

    def fill(self, color: Color) -> None:
        """Set every pixel to one color."""
        self._pixels[:, :] = (color.r, color.g, color.b)

    def clear(self) -> None:
        """Reset every pixel to black."""
        self.fill(BLACK)

    def write_column_major(self, image: npt.NDArray[np.uint8]) -> None:
        """Copy a (width, height, 3) array, as Taichi fields store it, into the buffer.

        Raises:
            ValueError: If the array shape does not match the buffer.
        """
        expected = (self._width, self._height, 3)
        if image.shape != expected:
            raise ValueError(f"Image shape {image.shape} doesn't match expected {expected}")
        self._pixels[...] = np.transpose(image, (1, 0, 2))

    def to_image(self) -> npt.NDArray[np.uint8]:
        """Return a copy in top-left-origin (height, width, 3) layout."""
        return np.ascontiguousarray(np.flipud(self._pixels))

    def to_column_major(self) -> npt.NDArray[np.uint8]:
        """Return a copy in (width, height, 3) layout, bottom-left origin."""
        return np.ascontiguousarray(np.transpose(self._pixels, (1, 0, 2)))

    def __repr__(self) -> str:
        return f"Framebuffer(width={self._width}, height={self._height})"
