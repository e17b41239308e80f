"""Interactive window presenter using Taichi GGUI.

The window shows the presenter's display field, a Taichi vector field of
shape (width, height). GGUI canvases put (0, 0) at the bottom-left, the
same convention as the sample generator, so frames are shown without any
flipping.

Controls:
    Escape: request close

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.gpu)
    >>> from sensor_raytracer.preview.window import WindowPresenter
    >>> presenter = WindowPresenter.create(768, 512)
    >>> presenter.initialize()
    >>> while not presenter.should_close():
    ...     presenter.blit(framebuffer)
    ...     presenter.update()
"""

from __future__ import annotations

import logging
import os
import platform

import numpy as np
import taichi as ti

from sensor_raytracer.core.color import Color
from sensor_raytracer.core.framebuffer import Framebuffer
from sensor_raytracer.errors import InitializationError
from sensor_raytracer.preview.presenter import Presenter

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Sensor Raytracer"


class WindowPresenter(Presenter):
    """Presenter backed by a ``ti.ui.Window``.

    Attributes:
        width: Window width in pixels.
        height: Window height in pixels.
        title: Window title.
        display_image: Taichi field of shape (width, height) holding RGB
            floats in [0, 1]. Allocated by initialize().
    """

    def __init__(self, width: int, height: int, *, title: str = DEFAULT_TITLE) -> None:
        super().__init__(width, height)
        self.title = title
        self._window: ti.ui.Window | None = None
        self._canvas: ti.ui.Canvas | None = None
        self.display_image: ti.MatrixField | None = None
        self._close_requested = False

    def initialize(self) -> None:
        """Open the window and allocate the display field.

        Raises:
            InitializationError: If no display is available or the window
                cannot be created.
        """
        if self._window is not None:
            return

        if not self.is_display_available():
            raise InitializationError("No display available for the preview window")

        try:
            self.display_image = ti.Vector.field(3, dtype=ti.f32, shape=(self.width, self.height))
            self._window = ti.ui.Window(
                name=self.title,
                res=(self.width, self.height),
                vsync=True,
            )
            self._canvas = self._window.get_canvas()
        except Exception as e:
            raise InitializationError(f"Failed to create preview window: {e}") from e

        logger.info("Opened %dx%d preview window", self.width, self.height)

    def _require_window(self) -> tuple[ti.ui.Window, ti.ui.Canvas, ti.MatrixField]:
        if self._window is None or self._canvas is None or self.display_image is None:
            raise RuntimeError("Window presenter used before initialize()")
        return self._window, self._canvas, self.display_image

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside window {self.width}x{self.height}")
        _, _, image = self._require_window()
        image[x, y] = list(color.as_unit())

    def blit(self, framebuffer: Framebuffer) -> None:
        """Upload a whole frame in one transfer."""
        self._check_size(framebuffer)
        _, _, image = self._require_window()
        columns = framebuffer.to_column_major().astype(np.float32) / 255.0
        image.from_numpy(columns)

    def update(self) -> None:
        """Draw the display field, swap buffers and handle key presses."""
        window, canvas, image = self._require_window()

        for event in window.get_events(ti.ui.PRESS):
            if event.key == ti.ui.ESCAPE:
                self._close_requested = True

        canvas.set_image(image)
        window.show()

    def should_close(self) -> bool:
        if self._close_requested:
            return True
        if self._window is None:
            return False
        return not self._window.running

    def close(self) -> None:
        if self._window is not None:
            # Taichi windows close when the reference is dropped
            self._window.running = False
        self._close_requested = True

    @staticmethod
    def is_display_available() -> bool:
        """Check if a display is available for GUI rendering.

        Returns:
            True if a display is available, False for headless environments.
        """
        display = os.environ.get("DISPLAY")
        wayland = os.environ.get("WAYLAND_DISPLAY")

        system = platform.system()
        if system == "Darwin":
            # SSH sessions without X forwarding have no display
            return not (os.environ.get("SSH_CONNECTION") and not display)
        if system == "Windows":
            return True

        return bool(display or wayland)
