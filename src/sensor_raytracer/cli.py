"""Command-line entry point.

Usage:
    python -m sensor_raytracer [options]

Options:
    --height HEIGHT      Frame height in pixels; width = height * 1.5 (default: 512)
    --backend BACKEND    "taichi" (parallel) or "reference" (sequential Python)
    --scene NAME         Scene preset (default: two-spheres)
    --exposure VALUE     Samples per pixel = floor(100 * exposure) (default: 0.01)
    --focal-length MM    Focal length in millimeters (default: 50)
    --no-oscillate       Keep the focal length fixed between frames
    --frames N           Stop after N frames (default: until the window closes)
    --headless           Render without a window, saving PNG frames
    --output DIR         Directory for headless frames (default: frames)
    --log-level LEVEL    Logging level (default: INFO)

Example:
    python -m sensor_raytracer --headless --frames 3 --height 128
"""

from __future__ import annotations

import argparse
import logging
import platform
import sys
from collections.abc import Sequence
from pathlib import Path

import taichi as ti

from sensor_raytracer.camera.motion import FocalLengthOscillation
from sensor_raytracer.camera.sensor import millimeters
from sensor_raytracer.config import WINDOW_HEIGHT, RenderConfig
from sensor_raytracer.core.frame import BACKENDS, FrameDriver
from sensor_raytracer.errors import RaytracerError
from sensor_raytracer.preview.presenter import ImagePresenter, Presenter
from sensor_raytracer.preview.window import WindowPresenter
from sensor_raytracer.scene.presets import SCENES, get_scene

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="sensor-raytracer",
        description="Render a scene through a simulated camera sensor.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--height",
        type=int,
        default=WINDOW_HEIGHT,
        help=f"Frame height in pixels, width is derived (default: {WINDOW_HEIGHT})",
    )
    parser.add_argument(
        "--backend",
        choices=BACKENDS,
        default="taichi",
        help="Frame backend (default: taichi)",
    )
    parser.add_argument(
        "--scene",
        choices=sorted(SCENES),
        default="two-spheres",
        help="Scene preset (default: two-spheres)",
    )
    parser.add_argument(
        "--exposure",
        type=float,
        default=0.01,
        help="Exposure, samples per pixel = floor(100 * exposure) (default: 0.01)",
    )
    parser.add_argument(
        "--focal-length",
        type=float,
        default=50.0,
        help="Focal length in millimeters (default: 50)",
    )
    parser.add_argument(
        "--no-oscillate",
        action="store_true",
        help="Keep the focal length fixed between frames",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=None,
        help="Stop after this many frames (default: run until closed)",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Render without a window and save PNG frames",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="frames",
        help="Directory for headless PNG frames (default: frames)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> RenderConfig:
    """Map parsed arguments onto a RenderConfig.

    Raises:
        ConfigurationError: If the combination of settings is invalid.
    """
    return RenderConfig(
        height=args.height,
        backend=args.backend,
        scene=args.scene,
        exposure=args.exposure,
        focal_length=millimeters(args.focal_length),
        oscillate=not args.no_oscillate,
    )


def initialize_taichi() -> str:
    """Initialize Taichi with the best available backend.

    On macOS, prefers Metal. Falls back to CPU if no GPU is usable.

    Returns:
        Name of the backend being used.
    """
    if platform.system() == "Darwin":
        try:
            ti.init(arch=ti.metal)
            return "Metal (GPU)"
        except Exception as e:
            logger.debug("Metal backend unavailable: %s", e)

    try:
        ti.init(arch=ti.gpu)
        return "GPU"
    except Exception as e:
        logger.debug("GPU backend unavailable: %s", e)

    ti.init(arch=ti.cpu)
    return "CPU"


def run(
    config: RenderConfig,
    presenter: Presenter,
    max_frames: int | None = None,
) -> int:
    """Run the frame loop for a configuration.

    Returns:
        The number of frames presented.
    """
    driver = FrameDriver(get_scene(config.scene), config.width, config.height, backend=config.backend)
    advance = FocalLengthOscillation() if config.oscillate else None
    return driver.run(presenter, config.camera(), advance=advance, max_frames=max_frames)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = config_from_args(args)

        # The window presenter needs Taichi even with the reference backend
        if config.backend == "taichi" or not args.headless:
            logger.info("Taichi backend: %s", initialize_taichi())

        if args.headless:
            frames = args.frames if args.frames is not None else 1
            presenter: Presenter = ImagePresenter(
                config.width, config.height, output_dir=Path(args.output), max_frames=frames
            )
        else:
            presenter = WindowPresenter.create(config.width, config.height)

        presented = run(config, presenter, max_frames=args.frames)
    except RaytracerError as e:
        logger.error("%s", e)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130

    logger.info("Done after %d frames", presented)
    return 0


if __name__ == "__main__":
    sys.exit(main())
