"""Parallel frame rendering with Taichi.

The :class:`TaichiIntegrator` packs a scene into Taichi fields, in scene
order, and renders a whole frame in one kernel launch with one thread per
pixel. It implements the same pipeline as walking a
:class:`~sensor_raytracer.camera.samples.SampleGenerator` and calling
:func:`~sensor_raytracer.scene.resolver.resolve_color` for every sample:

- ray origin on the sensor at ``(x / width, y / height)``, direction toward
  the focal point
- nearest hit over every primitive, earliest primitive wins ties
- the hit primitive's fixed color, or the scene background

Every sample of a pixel shares one ray, so a single evaluation per pixel
produces the same frame regardless of the samples-per-pixel count. Kernel
arithmetic is float32; pixels exactly on a silhouette can differ from the
float64 reference path.

Camera validation runs in Python before the kernel launches, so a degenerate
camera raises ConfigurationError and never reaches the GPU.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from sensor_raytracer.core.integrator import TaichiIntegrator
    >>> integrator = TaichiIntegrator(scene, 768, 512)
    >>> framebuffer = integrator.render(camera)
"""

import logging

import numpy as np
import taichi as ti
import taichi.math as tm

from sensor_raytracer.camera.sensor import Camera
from sensor_raytracer.core.framebuffer import Framebuffer
from sensor_raytracer.errors import ConfigurationError
from sensor_raytracer.geometry.quad import Quad, hit_quad_kernel
from sensor_raytracer.geometry.sphere import Sphere, hit_sphere_kernel
from sensor_raytracer.scene.scene import T_MAX, T_MIN, Scene

logger = logging.getLogger(__name__)

# Type alias for 3D vectors
vec3 = tm.vec3

# Primitive kinds stored in the kind field
KIND_SPHERE = 0
KIND_QUAD = 1


@ti.data_oriented
class TaichiIntegrator:
    """Render frames of a fixed scene on the Taichi backend.

    The scene is copied into fields on construction; later changes to the
    Scene object are not seen. Taichi must be initialized first.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        num_objects: Number of primitives packed from the scene.
        image: Taichi field of shape (width, height) holding RGB ints,
            (0, 0) = bottom left.
    """

    def __init__(self, scene: Scene, width: int, height: int) -> None:
        """Pack the scene and allocate the image field.

        Raises:
            ConfigurationError: If the resolution is not positive or the scene
                holds a primitive type the kernel cannot intersect.
        """
        if width <= 0 or height <= 0:
            raise ConfigurationError(f"Resolution must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self.num_objects = len(scene)

        # Fields must have at least one element even for an empty scene
        capacity = max(self.num_objects, 1)

        # Primitive storage: Structure of Arrays layout
        # point_a is the sphere center or the quad corner
        self.kinds = ti.field(dtype=ti.i32, shape=capacity)
        self.point_a = ti.Vector.field(3, dtype=ti.f32, shape=capacity)
        self.edge_u = ti.Vector.field(3, dtype=ti.f32, shape=capacity)
        self.edge_v = ti.Vector.field(3, dtype=ti.f32, shape=capacity)
        self.radii = ti.field(dtype=ti.f32, shape=capacity)
        self.colors = ti.Vector.field(3, dtype=ti.i32, shape=capacity)
        self.background = ti.Vector.field(3, dtype=ti.i32, shape=())

        # Sensor basis for the current frame
        self.bottom_left = ti.Vector.field(3, dtype=ti.f32, shape=())
        self.sensor_x = ti.Vector.field(3, dtype=ti.f32, shape=())
        self.sensor_y = ti.Vector.field(3, dtype=ti.f32, shape=())
        self.focal_point = ti.Vector.field(3, dtype=ti.f32, shape=())

        self.image = ti.Vector.field(3, dtype=ti.i32, shape=(width, height))

        self._load_scene(scene)

    def _load_scene(self, scene: Scene) -> None:
        for index, obj in enumerate(scene):
            primitive = obj.primitive
            if isinstance(primitive, Sphere):
                self.kinds[index] = KIND_SPHERE
                self.point_a[index] = primitive.center.tolist()
                self.radii[index] = primitive.radius
            elif isinstance(primitive, Quad):
                self.kinds[index] = KIND_QUAD
                self.point_a[index] = primitive.corner.tolist()
                self.edge_u[index] = primitive.edge_u.tolist()
                self.edge_v[index] = primitive.edge_v.tolist()
            else:
                raise ConfigurationError(
                    f"Primitive {type(primitive).__name__} at index {index} "
                    "is not supported by the Taichi backend"
                )
            self.colors[index] = list(obj.color.as_tuple())
        self.background[None] = list(scene.background.as_tuple())
        logger.debug("Packed %d primitives into Taichi fields", self.num_objects)

    @ti.kernel
    def _render_frame(
        self,
        sensor_width: ti.f32,
        sensor_height: ti.f32,
        t_min: ti.f32,
        t_max: ti.f32,
    ):
        for i, j in ti.ndrange(self.width, self.height):
            advance_x = ti.cast(i, ti.f32) / ti.cast(self.width, ti.f32)
            advance_y = ti.cast(j, ti.f32) / ti.cast(self.height, ti.f32)

            origin = (
                self.bottom_left[None]
                + self.sensor_x[None] * (advance_x * sensor_width)
                + self.sensor_y[None] * (advance_y * sensor_height)
            )
            direction = tm.normalize(self.focal_point[None] - origin)

            color = self.background[None]
            closest = t_max
            found = 0

            for k in range(self.num_objects):
                did_hit = 0
                hit_t = 0.0
                if self.kinds[k] == KIND_SPHERE:
                    sphere_hit, sphere_t = hit_sphere_kernel(
                        origin, direction, self.point_a[k], self.radii[k], t_min, t_max
                    )
                    did_hit = sphere_hit
                    hit_t = sphere_t
                else:
                    quad_hit, quad_t = hit_quad_kernel(
                        origin,
                        direction,
                        self.point_a[k],
                        self.edge_u[k],
                        self.edge_v[k],
                        t_min,
                        t_max,
                    )
                    did_hit = quad_hit
                    hit_t = quad_t

                # Strictly nearer replaces; ties keep the earlier primitive
                if did_hit == 1 and (found == 0 or hit_t < closest):
                    found = 1
                    closest = hit_t
                    color = self.colors[k]

            self.image[i, j] = color

    def render(
        self,
        camera: Camera,
        framebuffer: Framebuffer | None = None,
        t_min: float = T_MIN,
        t_max: float = T_MAX,
    ) -> Framebuffer:
        """Render one frame of the packed scene.

        Args:
            camera: Camera snapshot to render from.
            framebuffer: Buffer to overwrite. A new one is allocated if None.
            t_min: Minimum accepted hit distance.
            t_max: Maximum accepted hit distance.

        Returns:
            The framebuffer holding the finished frame.

        Raises:
            ConfigurationError: If the camera is invalid.
            ValueError: If the framebuffer size does not match.
        """
        basis = camera.derive_basis()

        if framebuffer is None:
            framebuffer = Framebuffer(self.width, self.height)
        elif (framebuffer.width, framebuffer.height) != (self.width, self.height):
            raise ValueError(
                f"Framebuffer {framebuffer.width}x{framebuffer.height} doesn't match "
                f"integrator {self.width}x{self.height}"
            )

        self.bottom_left[None] = basis.bottom_left.tolist()
        self.sensor_x[None] = basis.sensor_x.tolist()
        self.sensor_y[None] = basis.sensor_y.tolist()
        self.focal_point[None] = basis.focal_point.tolist()

        self._render_frame(basis.sensor_width, basis.sensor_height, t_min, t_max)

        # to_numpy() waits for the kernel to finish
        framebuffer.write_column_major(self.image.to_numpy().astype(np.uint8))
        return framebuffer

    def __repr__(self) -> str:
        return (
            f"TaichiIntegrator(width={self.width}, height={self.height}, "
            f"objects={self.num_objects})"
        )
