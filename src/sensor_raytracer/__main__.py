import sys

from sensor_raytracer.cli import main

sys.exit(main())
