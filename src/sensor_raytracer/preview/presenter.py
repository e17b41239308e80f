"""Presenter contract and a headless presenter.

A presenter is the display side of the frame loop. It owns its own pixel
buffer, receives finished frames from the frame driver, and reports when
the user asked to close. Pixel (0, 0) is the bottom-left corner.

Lifecycle::

    presenter = SomePresenter.create(width, height)
    presenter.initialize()            # acquire display resources
    while not presenter.should_close():
        presenter.blit(framebuffer)   # or set_pixel(...) per pixel
        presenter.update()            # present and process events
    presenter.close()
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TypeVar

from sensor_raytracer.core.color import Color
from sensor_raytracer.core.framebuffer import Framebuffer
from sensor_raytracer.preview.export import save_png

logger = logging.getLogger(__name__)

PresenterT = TypeVar("PresenterT", bound="Presenter")


class Presenter(ABC):
    """Display target for finished frames.

    Attributes:
        width: Display width in pixels.
        height: Display height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Presenter dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height

    @classmethod
    def create(cls: type[PresenterT], width: int, height: int) -> PresenterT:
        """Create a presenter without acquiring any resources."""
        return cls(width, height)

    @abstractmethod
    def initialize(self) -> None:
        """Acquire display resources.

        Raises:
            InitializationError: If the resources cannot be acquired.
        """

    @abstractmethod
    def set_pixel(self, x: int, y: int, color: Color) -> None:
        """Write one color into the backing buffer. (0, 0) is bottom-left."""

    @abstractmethod
    def update(self) -> None:
        """Present the current buffer and process pending input events."""

    @abstractmethod
    def should_close(self) -> bool:
        """Whether a close was requested."""

    def blit(self, framebuffer: Framebuffer) -> None:
        """Copy a whole frame into the backing buffer.

        Raises:
            ValueError: If the framebuffer size does not match.
        """
        self._check_size(framebuffer)
        for y in range(framebuffer.height):
            for x in range(framebuffer.width):
                self.set_pixel(x, y, framebuffer.get_pixel(x, y))

    def close(self) -> None:
        """Release display resources. Safe to call more than once."""

    def _check_size(self, framebuffer: Framebuffer) -> None:
        if (framebuffer.width, framebuffer.height) != (self.width, self.height):
            raise ValueError(
                f"Framebuffer {framebuffer.width}x{framebuffer.height} doesn't match "
                f"presenter {self.width}x{self.height}"
            )


class ImagePresenter(Presenter):
    """Headless presenter that keeps frames in memory and optionally saves PNGs.

    Attributes:
        output_dir: Directory for ``frame_NNNN.png`` files, or None to keep
            frames only in memory.
        max_frames: Request close after this many updates, or None for never.
        frames_presented: Number of update() calls so far.
        buffer: The presenter's own copy of the last frame.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        output_dir: str | Path | None = None,
        max_frames: int | None = 1,
    ) -> None:
        super().__init__(width, height)
        self.output_dir = Path(output_dir) if output_dir is not None else None
        self.max_frames = max_frames
        self.frames_presented = 0
        self.buffer = Framebuffer(width, height)
        self.saved_paths: list[Path] = []
        self._closed = False

    def initialize(self) -> None:
        if self.output_dir is not None:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("Image presenter ready (%dx%d)", self.width, self.height)

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        self.buffer.set_pixel(x, y, color)

    def blit(self, framebuffer: Framebuffer) -> None:
        self._check_size(framebuffer)
        self.buffer.pixels[...] = framebuffer.pixels

    def update(self) -> None:
        self.frames_presented += 1
        if self.output_dir is not None:
            path = save_png(self.buffer, self.output_dir / f"frame_{self.frames_presented:04d}.png")
            self.saved_paths.append(path)
            logger.info("Saved %s", path)
        if self.max_frames is not None and self.frames_presented >= self.max_frames:
            self._closed = True

    def should_close(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True
