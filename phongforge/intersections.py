"""
Ray-object intersection records and hit selection.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .shapes import Shape


@dataclass(frozen=True, eq=False)
class Intersection:
    """A ray crossing the surface of an object.

    Attributes:
        t: The ray parameter at the crossing
        object: The shape that was crossed (not owned by the record)
    """
    t: float
    object: Shape

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Intersection):
            return NotImplemented
        return self.t == other.t and self.object is other.object

    def __lt__(self, other: Intersection) -> bool:
        return self.t < other.t

    __hash__ = None


def intersections(*xs: Intersection) -> list[Intersection]:
    """Collect intersections into a list sorted by t."""
    return sorted(xs, key=lambda i: i.t)


def hit(xs: Iterable[Intersection]) -> Optional[Intersection]:
    """Return the visible intersection: the one with the lowest t >= 0.

    Intersections behind the ray origin (t < 0) are ignored. If several
    share the lowest t, the first one encountered wins.

    Returns:
        The hit, or None if every intersection is behind the ray
    """
    best = None
    for i in xs:
        if i.t >= 0 and (best is None or i.t < best.t):
            best = i
    return best
