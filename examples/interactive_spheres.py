#!/usr/bin/env python3
"""Interactive two-sphere renderer with a breathing focal length.

Opens a 768x512 Taichi GGUI window and renders the default scene every
frame while the focal length oscillates around 50 mm.

Usage:
    python examples/interactive_spheres.py

Controls:
    - Escape or closing the window: exit
"""

from __future__ import annotations

import sys

from sensor_raytracer.cli import main as cli_main


def main() -> int:
    """Main entry point for the interactive renderer.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    return cli_main(["--scene", "two-spheres", "--backend", "taichi"])


if __name__ == "__main__":
    sys.exit(main())
