"""
Geometric shapes for the tracer.

Each shape is defined in its own object space and placed in the world by a
transform. Subclasses implement the object-space `local_intersect` and
`local_normal_at`; the base class converts rays and points between world
and object space.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional
import math

from .tuples import Tuple, ORIGIN, KindMismatchError
from .matrix import Matrix, identity
from .ray import Ray
from .materials import Material
from .intersections import Intersection


class Shape(ABC):
    """Abstract base class for all objects that can be hit by rays."""

    def __init__(self, transform: Optional[Matrix] = None, material: Optional[Material] = None):
        """Create a shape.

        Args:
            transform: Object-to-world transform (identity if None)
            material: Surface material (default Material if None)

        Raises:
            SingularMatrixError: If the transform is not invertible
        """
        self.transform = transform if transform is not None else identity()
        self.material = material if material is not None else Material()

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, value: Matrix) -> None:
        # Invert once here so a singular transform fails at scene setup
        self._inverse = value.inverse()
        self._transform = value

    @property
    def inverse_transform(self) -> Matrix:
        return self._inverse

    def intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect a world-space ray with this shape.

        Returns:
            Intersections sorted by t (empty if the ray misses)
        """
        return self.local_intersect(ray.transform(self._inverse))

    def normal_at(self, world_point: Tuple) -> Tuple:
        """Return the unit surface normal at a world-space point."""
        if not world_point.is_point():
            raise KindMismatchError(f"normal_at expects a point, got {world_point!r}")
        object_point = self._inverse * world_point
        object_normal = self.local_normal_at(object_point)
        # Multiplying a vector keeps it a vector, so any w picked up from
        # the translation part of the inverse transpose is discarded
        world_normal = self._inverse.transpose() * object_normal
        return world_normal.normalize()

    @abstractmethod
    def local_intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect an object-space ray with this shape."""
        pass

    @abstractmethod
    def local_normal_at(self, object_point: Tuple) -> Tuple:
        """Return the (unnormalized) object-space normal at an object-space point."""
        pass


class Sphere(Shape):
    """A unit sphere centered at the object-space origin.

    Translation, scaling and rotation of the transform place and size it;
    a non-uniform scale turns it into an ellipsoid.
    """

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        """Solve the ray-sphere quadratic.

        The equation (P-O)·(P-O) = 1 where P = ray.position(t)
        expands to: t²(d·d) + 2t(d·(O'-O)) + (O'-O)·(O'-O) - 1 = 0
        which is the quadratic at² + bt + c = 0.
        """
        oc = ray.origin - ORIGIN
        a = ray.direction.dot(ray.direction)
        b = 2 * ray.direction.dot(oc)
        c = oc.dot(oc) - 1

        discriminant = b * b - 4 * a * c
        if discriminant < 0:
            return []

        sqrtd = math.sqrt(discriminant)
        t1 = (-b - sqrtd) / (2 * a)
        t2 = (-b + sqrtd) / (2 * a)
        return [Intersection(t1, self), Intersection(t2, self)]

    def local_normal_at(self, object_point: Tuple) -> Tuple:
        return object_point - ORIGIN

    def __repr__(self) -> str:
        return f"Sphere(transform={self.transform!r})"
