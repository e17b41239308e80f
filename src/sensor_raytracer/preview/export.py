"""Image export utilities for rendered frames.

Supported formats:
    - PNG (8-bit sRGB via Pillow)

Example:
    >>> from sensor_raytracer.preview.export import save_png
    >>> framebuffer = driver.render(camera)
    >>> save_png(framebuffer, "frame.png")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from sensor_raytracer.core.framebuffer import Framebuffer


def framebuffer_to_pil(framebuffer: Framebuffer) -> PILImage.Image:
    """Convert a framebuffer to a Pillow image (top-left origin)."""
    # uint8 arrays of shape (H, W, 3) load as RGB
    return PILImage.fromarray(framebuffer.to_image())


def save_png(framebuffer: Framebuffer, filepath: str | Path) -> Path:
    """Save a framebuffer as a PNG file.

    The framebuffer's bottom row becomes the bottom row of the image.

    Args:
        framebuffer: The frame to save.
        filepath: Output file path (should end in .png). Parent directories
            are created if needed.

    Returns:
        The path written.
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    framebuffer_to_pil(framebuffer).save(path, format="PNG")
    return path


def load_png(filepath: str | Path) -> npt.NDArray[np.uint8]:
    """Load a PNG as a top-left-origin (height, width, 3) uint8 array."""
    with PILImage.open(filepath) as image:
        return np.asarray(image.convert("RGB"), dtype=np.uint8)


def count_mismatched_pixels(
    image_a: npt.NDArray[np.uint8],
    image_b: npt.NDArray[np.uint8],
) -> int:
    """Count pixels whose color differs between two images.

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(f"Image shapes must match: {image_a.shape} vs {image_b.shape}")
    return int(np.count_nonzero(np.any(image_a != image_b, axis=-1)))
