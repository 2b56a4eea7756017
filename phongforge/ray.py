"""
Ray class for representing rays in 3D space.

A ray is defined by an origin point and a direction vector.
Ray(t) = origin + t * direction
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from .tuples import Tuple, KindMismatchError, ZeroMagnitudeError

if TYPE_CHECKING:
    from .matrix import Matrix


class Ray:
    """A ray with origin and direction.

    The parametric form is: P(t) = origin + t * direction
    where t >= 0 represents points in front of the origin.
    """

    __slots__ = ('origin', 'direction')

    def __init__(self, origin: Tuple, direction: Tuple):
        """Create a ray with given origin and direction.

        Args:
            origin: The starting point of the ray
            direction: The direction vector (not necessarily normalized)

        Raises:
            KindMismatchError: If origin is not a point or direction is not
                a vector
            ZeroMagnitudeError: If direction has zero length
        """
        if not origin.is_point():
            raise KindMismatchError(f"Ray origin must be a point, got {origin!r}")
        if not direction.is_vector():
            raise KindMismatchError(f"Ray direction must be a vector, got {direction!r}")
        if direction.magnitude() == 0:
            raise ZeroMagnitudeError("Ray direction must not be the zero vector")
        self.origin = origin
        self.direction = direction

    def position(self, t: float) -> Tuple:
        """Get the point along the ray at parameter t.

        Args:
            t: The parameter value (distance if direction is normalized)

        Returns:
            The point at origin + t * direction
        """
        return self.origin + self.direction * t

    def transform(self, m: Matrix) -> Ray:
        """Return a new ray with the matrix applied to origin and direction."""
        return Ray(m * self.origin, m * self.direction)

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin}, direction={self.direction})"
