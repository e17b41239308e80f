"""Preview module: presenters and image export.

Components:
    presenter: Presenter contract and a headless PNG/in-memory presenter
    window: Taichi GGUI window presenter
    export: PNG export via Pillow

Presenters sit outside the rendering core. The core never constructs one;
only the frame driver's ``run``/``present`` loop talks to them.
"""

from sensor_raytracer.preview.export import (
    count_mismatched_pixels,
    framebuffer_to_pil,
    load_png,
    save_png,
)
from sensor_raytracer.preview.presenter import ImagePresenter, Presenter
from sensor_raytracer.preview.window import WindowPresenter

__all__ = [
    "Presenter",
    "ImagePresenter",
    "WindowPresenter",
    "save_png",
    "load_png",
    "framebuffer_to_pil",
    "count_mismatched_pixels",
]
