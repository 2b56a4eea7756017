"""
Tuple class for points, vectors and colors.

This is the fundamental building block of the tracer. A single type is used
for all three, tagged with a `Kind`:
- Points (homogeneous w = 1)
- Direction vectors (homogeneous w = 0)
- RGB color values (no homogeneous coordinate)

Operations check the kinds of their operands and raise `KindMismatchError`
for combinations that have no geometric meaning (adding two points, taking
the dot product of two colors, and so on).
"""

from __future__ import annotations
from enum import Enum
from typing import Union
import math
import numpy as np

from .common import TracerError, approx_equal


class KindMismatchError(TracerError):
    """An operation received tuples of incompatible kinds."""
    pass


class ZeroMagnitudeError(TracerError):
    """A zero-length vector cannot be normalized."""
    pass


class Kind(Enum):
    """What a Tuple represents."""
    POINT = 'point'
    VECTOR = 'vector'
    COLOR = 'color'


POINT = Kind.POINT
VECTOR = Kind.VECTOR
COLOR = Kind.COLOR

# Result kind for each legal (left, right) combination
_ADD_KINDS = {
    (VECTOR, VECTOR): VECTOR,
    (POINT, VECTOR): POINT,
    (VECTOR, POINT): POINT,
    (COLOR, COLOR): COLOR,
}

_SUB_KINDS = {
    (VECTOR, VECTOR): VECTOR,
    (POINT, VECTOR): POINT,
    (POINT, POINT): VECTOR,
    (COLOR, COLOR): COLOR,
}

_DOT_KINDS = {(VECTOR, VECTOR), (POINT, VECTOR), (VECTOR, POINT)}


class Tuple:
    """A kind-tagged 3-component value.

    Uses numpy internally for the components. Instances are immutable:
    every operation returns a new Tuple.
    """

    __slots__ = ('_data', '_kind')

    def __init__(self, x: float, y: float, z: float, kind: Kind):
        if not isinstance(kind, Kind):
            raise TypeError(f"kind must be a Kind, got {kind!r}")
        data = np.array([x, y, z], dtype=np.float64)
        data.flags.writeable = False
        self._data = data
        self._kind = kind

    @classmethod
    def from_array(cls, arr: np.ndarray, kind: Kind) -> Tuple:
        """Create a Tuple from the first three entries of a numpy array."""
        t = cls.__new__(cls)
        data = np.array(arr[:3], dtype=np.float64)
        data.flags.writeable = False
        t._data = data
        t._kind = kind
        return t

    @property
    def kind(self) -> Kind:
        return self._kind

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    @property
    def w(self) -> float:
        """Homogeneous coordinate: 1.0 for points, 0.0 for vectors."""
        if self._kind is POINT:
            return 1.0
        if self._kind is VECTOR:
            return 0.0
        raise KindMismatchError("A color has no homogeneous coordinate")

    # Aliases for color operations
    @property
    def r(self) -> float:
        return self.x

    @property
    def g(self) -> float:
        return self.y

    @property
    def b(self) -> float:
        return self.z

    def is_point(self) -> bool:
        return self._kind is POINT

    def is_vector(self) -> bool:
        return self._kind is VECTOR

    def is_color(self) -> bool:
        return self._kind is COLOR

    def __repr__(self) -> str:
        return f"{self._kind.value}({self.x:.5f}, {self.y:.5f}, {self.z:.5f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        if self._kind is not other._kind:
            return False
        return all(approx_equal(a, b) for a, b in zip(self._data, other._data))

    __hash__ = None

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def __neg__(self) -> Tuple:
        return Tuple.from_array(-self._data, self._kind)

    def __add__(self, other: Tuple) -> Tuple:
        if not isinstance(other, Tuple):
            return NotImplemented
        kind = _ADD_KINDS.get((self._kind, other._kind))
        if kind is None:
            raise KindMismatchError(
                f"Cannot add a {other._kind.value} to a {self._kind.value}"
            )
        return Tuple.from_array(self._data + other._data, kind)

    def __sub__(self, other: Tuple) -> Tuple:
        if not isinstance(other, Tuple):
            return NotImplemented
        kind = _SUB_KINDS.get((self._kind, other._kind))
        if kind is None:
            raise KindMismatchError(
                f"Cannot subtract a {other._kind.value} from a {self._kind.value}"
            )
        return Tuple.from_array(self._data - other._data, kind)

    def __mul__(self, other: Union[Tuple, float]) -> Tuple:
        if isinstance(other, Tuple):
            return self.hadamard(other)
        return Tuple.from_array(self._data * float(other), self._kind)

    def __rmul__(self, other: float) -> Tuple:
        return Tuple.from_array(float(other) * self._data, self._kind)

    def __truediv__(self, other: float) -> Tuple:
        if self._kind is COLOR:
            raise KindMismatchError("Cannot divide a color")
        return Tuple.from_array(self._data / float(other), self._kind)

    def dot(self, other: Tuple) -> float:
        """Compute the dot product with a vector (a point may be one side)."""
        if (self._kind, other._kind) not in _DOT_KINDS:
            raise KindMismatchError(
                f"Cannot take the dot product of a {self._kind.value} "
                f"and a {other._kind.value}"
            )
        return float(np.dot(self._data, other._data))

    def cross(self, other: Tuple) -> Tuple:
        """Compute the cross product of two vectors."""
        if self._kind is not VECTOR or other._kind is not VECTOR:
            raise KindMismatchError("Can only take the cross product of two vectors")
        return Tuple.from_array(np.cross(self._data, other._data), VECTOR)

    def hadamard(self, other: Tuple) -> Tuple:
        """Component-wise product of two tuples of the same kind.

        The practical use is blending two colors, e.g. a surface color with
        a light's intensity.
        """
        if self._kind is not other._kind:
            raise KindMismatchError(
                f"Cannot take the Hadamard product of a {self._kind.value} "
                f"and a {other._kind.value}"
            )
        return Tuple.from_array(self._data * other._data, self._kind)

    def magnitude(self) -> float:
        """Return the length of a vector.

        Points report a magnitude of 0.0. Colors have no magnitude.
        """
        if self._kind is VECTOR:
            return math.sqrt(float(np.dot(self._data, self._data)))
        if self._kind is POINT:
            return 0.0
        raise KindMismatchError("Cannot take the magnitude of a color")

    def normalize(self) -> Tuple:
        """Return a unit vector in the same direction."""
        if self._kind is not VECTOR:
            raise KindMismatchError(f"Cannot normalize a {self._kind.value}")
        length = self.magnitude()
        if length == 0:
            raise ZeroMagnitudeError("Cannot normalize a zero-length vector")
        return Tuple.from_array(self._data / length, VECTOR)

    def reflect(self, normal: Tuple) -> Tuple:
        """Reflect this vector around the given normal."""
        if self._kind is not VECTOR or normal._kind is not VECTOR:
            raise KindMismatchError("Can only reflect a vector around a vector")
        return self - normal * (2 * self.dot(normal))

    def to_array(self) -> np.ndarray:
        """Return the (x, y, z) components as a new numpy array."""
        return self._data.copy()

    def homogeneous(self) -> np.ndarray:
        """Return (x, y, z, w) for a point or vector."""
        return np.append(self._data, self.w)


def point(x: float, y: float, z: float) -> Tuple:
    """Create a point."""
    return Tuple(x, y, z, POINT)


def vector(x: float, y: float, z: float) -> Tuple:
    """Create a direction vector."""
    return Tuple(x, y, z, VECTOR)


def color(r: float, g: float, b: float) -> Tuple:
    """Create an RGB color."""
    return Tuple(r, g, b, COLOR)


BLACK = color(0.0, 0.0, 0.0)
WHITE = color(1.0, 1.0, 1.0)
ORIGIN = point(0.0, 0.0, 0.0)
