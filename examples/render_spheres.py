#!/usr/bin/env python3
"""Render the two-sphere scene to PNG files without opening a window.

Usage:
    python examples/render_spheres.py [options]

Options:
    --height HEIGHT     Frame height in pixels, width = 1.5 * height (default: 256)
    --frames FRAMES     Number of frames to render (default: 1)
    --backend BACKEND   "taichi" or "reference" (default: taichi)
    --output DIR        Output directory (default: frames)

Example:
    python examples/render_spheres.py --height 128 --frames 5 --backend reference
"""

from __future__ import annotations

import argparse
import sys

from sensor_raytracer.cli import main as cli_main


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Render the two-sphere scene to PNG files.")
    parser.add_argument("--height", type=int, default=256, help="Frame height (default: 256)")
    parser.add_argument("--frames", type=int, default=1, help="Frames to render (default: 1)")
    parser.add_argument(
        "--backend",
        choices=["taichi", "reference"],
        default="taichi",
        help="Frame backend (default: taichi)",
    )
    parser.add_argument("--output", default="frames", help="Output directory (default: frames)")
    return parser.parse_args()


def main() -> int:
    """Main entry point."""
    args = parse_args()
    return cli_main(
        [
            "--headless",
            "--scene",
            "two-spheres",
            "--height",
            str(args.height),
            "--frames",
            str(args.frames),
            "--backend",
            args.backend,
            "--output",
            args.output,
        ]
    )


if __name__ == "__main__":
    sys.exit(main())
