"""Frame driver: camera snapshot in, finished framebuffer out.

One frame is:

1. Build a fresh sample generator from the current camera snapshot
   (validating the camera before any ray exists).
2. Resolve a color for every (pixel, ray) sample and write it into the
   framebuffer.
3. Hand the complete framebuffer to the presenter and let it process input.

The presenter never sees a partially written frame, and a close request is
only checked between frames.

Two backends compute step 2:

- ``"reference"``: walks the sample generator in Python, one sample at a time.
- ``"taichi"``: :class:`~sensor_raytracer.core.integrator.TaichiIntegrator`
  computes all pixels in parallel. Requires ``ti.init()`` first.

Example:
    >>> from sensor_raytracer.core.frame import FrameDriver
    >>> from sensor_raytracer.scene.presets import two_sphere_scene
    >>> driver = FrameDriver(two_sphere_scene(), 96, 64)
    >>> framebuffer = driver.render(camera)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Literal

from sensor_raytracer.camera.samples import SampleGenerator
from sensor_raytracer.camera.sensor import Camera
from sensor_raytracer.core.framebuffer import Framebuffer
from sensor_raytracer.scene.resolver import resolve_color
from sensor_raytracer.scene.scene import T_MAX, T_MIN, Scene

if TYPE_CHECKING:
    from sensor_raytracer.core.integrator import TaichiIntegrator
    from sensor_raytracer.preview.presenter import Presenter

logger = logging.getLogger(__name__)

Backend = Literal["reference", "taichi"]
BACKENDS: tuple[Backend, ...] = ("reference", "taichi")

# Advances the caller-owned camera state between frames
CameraAdvance = Callable[[Camera], Camera]


class FrameDriver:
    """Render frames of a scene into one long-lived framebuffer.

    Attributes:
        scene: The scene being rendered.
        width: Frame width in pixels.
        height: Frame height in pixels.
        backend: Which backend computes the frame.
        framebuffer: The buffer every frame is written into.
        frame_count: Number of frames rendered so far.
    """

    def __init__(
        self,
        scene: Scene,
        width: int,
        height: int,
        *,
        backend: Backend = "reference",
        t_min: float = T_MIN,
        t_max: float = T_MAX,
    ) -> None:
        """Create a frame driver.

        Raises:
            ValueError: If the backend is unknown or the size not positive.
        """
        if backend not in BACKENDS:
            raise ValueError(f"Unknown backend {backend!r}; choose from {BACKENDS}")

        self.scene = scene
        self.width = width
        self.height = height
        self.backend: Backend = backend
        self.t_min = t_min
        self.t_max = t_max
        self.framebuffer = Framebuffer(width, height)
        self.frame_count = 0
        self._integrator: TaichiIntegrator | None = None

        logger.info("Frame driver: %dx%d, backend=%s, %d objects", width, height, backend, len(scene))

    def _get_integrator(self) -> TaichiIntegrator:
        """Create the Taichi integrator lazily, after Taichi is initialized."""
        if self._integrator is None:
            from sensor_raytracer.core.integrator import TaichiIntegrator

            self._integrator = TaichiIntegrator(self.scene, self.width, self.height)
        return self._integrator

    def samples(self, camera: Camera) -> SampleGenerator:
        """Build the sample sequence for a camera snapshot.

        Raises:
            ConfigurationError: If the camera is invalid.
        """
        return SampleGenerator(camera, self.width, self.height)

    def render(self, camera: Camera) -> Framebuffer:
        """Render one complete frame into the framebuffer.

        Raises:
            ConfigurationError: If the camera is invalid. Raised before any
                pixel is written.
        """
        start = time.perf_counter()

        if self.backend == "taichi":
            self._get_integrator().render(camera, self.framebuffer, self.t_min, self.t_max)
            count = self.width * self.height * camera.samples_per_pixel()
        else:
            samples = self.samples(camera)
            framebuffer = self.framebuffer
            for (x, y), ray in samples:
                framebuffer.set_pixel(x, y, resolve_color(ray, self.scene, self.t_min, self.t_max))
            count = len(samples)

        self.frame_count += 1
        logger.debug(
            "Frame %d: %d samples in %.3fs",
            self.frame_count,
            count,
            time.perf_counter() - start,
        )
        return self.framebuffer

    def present(self, presenter: Presenter) -> None:
        """Hand the finished framebuffer to the presenter and let it update."""
        presenter.blit(self.framebuffer)
        presenter.update()

    def run(
        self,
        presenter: Presenter,
        camera: Camera,
        advance: CameraAdvance | None = None,
        max_frames: int | None = None,
    ) -> int:
        """Render and present frames until the presenter asks to close.

        The presenter is closed on return, including when a frame raises.

        Args:
            presenter: Display target. Initialized and closed here.
            camera: Initial camera snapshot.
            advance: Optional callable producing the next camera snapshot
                after each presented frame.
            max_frames: Stop after this many frames even if the presenter
                stays open.

        Returns:
            The number of frames presented.

        Raises:
            InitializationError: If the presenter cannot acquire its display.
            ConfigurationError: If a camera snapshot is invalid.
        """
        presented = 0
        try:
            presenter.initialize()
            while not presenter.should_close():
                if max_frames is not None and presented >= max_frames:
                    break
                self.render(camera)
                self.present(presenter)
                presented += 1
                if advance is not None:
                    camera = advance(camera)
        finally:
            presenter.close()

        logger.info("Presented %d frames", presented)
        return presented

    def __repr__(self) -> str:
        return (
            f"FrameDriver(width={self.width}, height={self.height}, "
            f"backend={self.backend!r}, frames={self.frame_count})"
        )
