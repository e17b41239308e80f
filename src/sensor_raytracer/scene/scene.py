"""Scene container and nearest-hit queries.

A scene is an ordered list of primitives, each paired with the flat color
it renders as. Primitives only need an ``intersect`` method (the
:class:`Intersectable` protocol), so spheres, quads and any future variant
can be mixed freely.

Nearest-hit policy: the primitive with the strictly smallest hit distance
wins. When two primitives report exactly the same distance, the one added
to the scene first wins.

Example:
    >>> from sensor_raytracer.core.color import GREEN, MAGENTA, RED
    >>> from sensor_raytracer.geometry.sphere import Sphere
    >>> scene = Scene(background=MAGENTA)
    >>> scene.add(Sphere((0.0, 0.0, 0.0), 2.0), RED)
    0
    >>> scene.add(Sphere((0.0, 3.0, 0.0), 1.0), GREEN)
    1
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from sensor_raytracer.core.color import MAGENTA, Color
from sensor_raytracer.core.ray import Ray
from sensor_raytracer.geometry.hit import HitRecord

# Practical "infinity" for the far end of the intersection range
T_MAX = 10_000.0
T_MIN = 0.0


@runtime_checkable
class Intersectable(Protocol):
    """Anything a ray can be intersected with."""

    def intersect(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None: ...


@dataclass(frozen=True)
class SceneObject:
    """A primitive and the fixed color it renders as."""

    primitive: Intersectable
    color: Color


@dataclass(frozen=True)
class SceneHit:
    """Nearest intersection found in a scene.

    Attributes:
        record: The primitive's hit record.
        color: The fixed color of the hit primitive.
        index: Position of the hit primitive in scene order.
    """

    record: HitRecord
    color: Color
    index: int


class Scene:
    """An ordered collection of colored primitives.

    Attributes:
        background: Color returned for rays that hit nothing.
    """

    def __init__(
        self,
        objects: Iterable[SceneObject] = (),
        *,
        background: Color = MAGENTA,
    ) -> None:
        self.background = background
        self._objects: list[SceneObject] = []
        for obj in objects:
            self.add(obj.primitive, obj.color)

    def add(self, primitive: Intersectable, color: Color) -> int:
        """Append a primitive with its color.

        Returns:
            The index of the added object.

        Raises:
            TypeError: If the primitive has no ``intersect`` method or the
                color is not a Color.
        """
        if not isinstance(primitive, Intersectable):
            raise TypeError(f"{type(primitive).__name__} does not implement intersect()")
        if not isinstance(color, Color):
            raise TypeError(f"Expected a Color, got {type(color).__name__}")
        self._objects.append(SceneObject(primitive, color))
        return len(self._objects) - 1

    @property
    def objects(self) -> tuple[SceneObject, ...]:
        return tuple(self._objects)

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[SceneObject]:
        return iter(self._objects)

    def nearest_hit(
        self,
        ray: Ray,
        t_min: float = T_MIN,
        t_max: float = T_MAX,
    ) -> SceneHit | None:
        """Find the nearest primitive hit by the ray.

        Every primitive is tested over the full ``[t_min, t_max]`` range and
        the smallest distance kept; a later primitive replaces the current
        best only if it is strictly nearer.

        Raises:
            InvalidRayError: If the ray direction has zero length.
        """
        best: SceneHit | None = None
        for index, obj in enumerate(self._objects):
            record = obj.primitive.intersect(ray, t_min, t_max)
            if record is None:
                continue
            if best is None or record.t < best.record.t:
                best = SceneHit(record=record, color=obj.color, index=index)
        return best

    def __repr__(self) -> str:
        return f"Scene(objects={len(self._objects)}, background={self.background})"
