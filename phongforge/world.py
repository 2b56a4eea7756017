"""
A flat scene: a list of shapes lit by a single point light.

There is no acceleration structure; every ray is tested against every
object.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Optional
import logging

from .tuples import Tuple, BLACK, color, point
from .matrix import scaling
from .ray import Ray
from .shapes import Shape, Sphere
from .materials import Material
from .intersections import Intersection, hit
from .lights import PointLight, lighting

logger = logging.getLogger(__name__)


@dataclass
class Computations:
    """Precomputed shading state for an intersection.

    Attributes:
        t: The ray parameter at the hit
        object: The shape that was hit
        point: World-space hit point
        eyev: Unit vector from the point back towards the eye
        normalv: Unit normal, flipped to face the eye
        inside: True if the ray started inside the object
    """
    t: float
    object: Shape
    point: Tuple
    eyev: Tuple
    normalv: Tuple
    inside: bool


class World:
    """A collection of shapes and the light illuminating them."""

    def __init__(self, objects: Optional[list[Shape]] = None, light: Optional[PointLight] = None):
        self.objects: list[Shape] = list(objects) if objects else []
        self.light = light

    def add(self, obj: Shape) -> None:
        """Add a shape to the world."""
        self.objects.append(obj)

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Shape]:
        return iter(self.objects)

    def intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect a ray with every object.

        Returns:
            All intersections sorted by t
        """
        xs = []
        for obj in self.objects:
            xs.extend(obj.intersect(ray))
        xs.sort(key=lambda i: i.t)
        return xs

    @staticmethod
    def prepare_computations(intersection: Intersection, ray: Ray) -> Computations:
        """Compute the point, eye vector and normal for an intersection."""
        position = ray.position(intersection.t)
        eyev = -ray.direction.normalize()
        normalv = intersection.object.normal_at(position)

        inside = normalv.dot(eyev) < 0
        if inside:
            normalv = -normalv

        return Computations(
            t=intersection.t,
            object=intersection.object,
            point=position,
            eyev=eyev,
            normalv=normalv,
            inside=inside
        )

    def shade_hit(self, comps: Computations) -> Tuple:
        """Return the color at a prepared intersection."""
        if self.light is None:
            return BLACK
        return lighting(
            comps.object.material,
            self.light,
            comps.point,
            comps.eyev,
            comps.normalv
        )

    def color_at(self, ray: Ray, background: Tuple = BLACK) -> Tuple:
        """Return the color seen along a ray, or background if nothing is hit."""
        h = hit(self.intersect(ray))
        if h is None:
            return background
        return self.shade_hit(self.prepare_computations(h, ray))

    def __repr__(self) -> str:
        return f"World(objects={len(self.objects)}, light={self.light})"


def default_world() -> World:
    """Two concentric spheres lit from the upper left.

    The outer sphere is a unit sphere with a green-yellow material; the inner
    one is half its size.
    """
    outer = Sphere(material=Material(color=color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2))
    inner = Sphere(transform=scaling(0.5, 0.5, 0.5))
    light = PointLight(color(1.0, 1.0, 1.0), point(-10.0, 10.0, -10.0))
    world = World([outer, inner], light)
    logger.debug("Built default world with %d objects", len(world))
    return world
