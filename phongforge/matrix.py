"""
Square matrices and affine transforms.

Matrices are 2x2, 3x3 or 4x4. The 4x4 ones describe transforms of points
and vectors in homogeneous coordinates; the smaller ones only appear while
expanding cofactors for the determinant and the inverse.

Transforms compose by multiplication and the rightmost one is applied first:

    m = translation(10, 5, 7) * scaling(5, 5, 5) * rotation_x(math.pi / 2)

rotates, then scales, then translates. The chaining helpers read in
application order instead:

    m = identity().rotate_x(math.pi / 2).scale(5, 5, 5).translate(10, 5, 7)
"""

from __future__ import annotations
from enum import Enum
from typing import Sequence, Union
import math
import numpy as np

from .common import TracerError, approx_equal
from .tuples import Tuple, KindMismatchError


SUPPORTED_SIZES = (2, 3, 4)


class SingularMatrixError(TracerError):
    """The matrix has no inverse."""
    pass


class DimensionMismatchError(TracerError):
    """A matrix has an unsupported size, or operand sizes disagree."""
    pass


class Axis(Enum):
    """Rotation axes."""
    X = 'x'
    Y = 'y'
    Z = 'z'


class Matrix:
    """An immutable square matrix of floats, stored row-major."""

    __slots__ = ('_data',)

    def __init__(self, rows: Sequence[Sequence[float]]):
        """Create a matrix from a sequence of rows.

        Args:
            rows: Equal-length rows; 2, 3 or 4 of them

        Raises:
            DimensionMismatchError: If the rows are ragged or the size is
                not supported
        """
        try:
            data = np.array(rows, dtype=np.float64)
        except ValueError as e:
            raise DimensionMismatchError(f"Matrix rows must have equal length: {e}") from e
        if data.ndim != 2 or data.shape[0] != data.shape[1]:
            raise DimensionMismatchError(f"Matrix must be square, got shape {data.shape}")
        if data.shape[0] not in SUPPORTED_SIZES:
            raise DimensionMismatchError(
                f"Matrix size must be one of {SUPPORTED_SIZES}, got {data.shape[0]}"
            )
        data.flags.writeable = False
        self._data = data

    @property
    def size(self) -> int:
        return self._data.shape[0]

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = index
        return float(self._data[row, col])

    def __repr__(self) -> str:
        rows = ", ".join(
            "[" + ", ".join(f"{v:.5f}" for v in row) + "]" for row in self._data
        )
        return f"Matrix([{rows}])"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.size != other.size:
            return False
        return all(
            approx_equal(a, b)
            for a, b in zip(self._data.flat, other._data.flat)
        )

    __hash__ = None

    def __mul__(self, other: Union[Matrix, Tuple]) -> Union[Matrix, Tuple]:
        if isinstance(other, Matrix):
            return self._multiply(other)
        if isinstance(other, Tuple):
            return self._multiply_tuple(other)
        return NotImplemented

    __matmul__ = __mul__

    def _multiply(self, other: Matrix) -> Matrix:
        if self.size != other.size:
            raise DimensionMismatchError(
                f"Cannot multiply a {self.size}x{self.size} matrix by a "
                f"{other.size}x{other.size} matrix"
            )
        return Matrix(self._data @ other._data)

    def _multiply_tuple(self, t: Tuple) -> Tuple:
        if self.size != 4:
            raise DimensionMismatchError(
                f"Only a 4x4 matrix can transform a tuple, got {self.size}x{self.size}"
            )
        if t.is_color():
            raise KindMismatchError("Cannot transform a color")
        # The computed w is dropped; the result keeps the input's kind
        return Tuple.from_array(self._data @ t.homogeneous(), t.kind)

    def to_array(self) -> np.ndarray:
        """Return a writable copy of the underlying data."""
        return self._data.copy()

    def transpose(self) -> Matrix:
        return Matrix(self._data.T)

    def determinant(self) -> float:
        """Compute the determinant by cofactor expansion along the first row."""
        if self.size == 2:
            d = self._data
            return float(d[0, 0] * d[1, 1] - d[0, 1] * d[1, 0])
        return sum(
            float(self._data[0, col]) * self.cofactor(0, col)
            for col in range(self.size)
        )

    def submatrix(self, row: int, col: int) -> Matrix:
        """Return a copy with the given row and column removed."""
        if self.size == 2:
            raise DimensionMismatchError("A 2x2 matrix has no submatrix")
        data = np.delete(np.delete(self._data, row, axis=0), col, axis=1)
        return Matrix(data)

    def minor(self, row: int, col: int) -> float:
        return self.submatrix(row, col).determinant()

    def cofactor(self, row: int, col: int) -> float:
        minor = self.minor(row, col)
        return minor if (row + col) % 2 == 0 else -minor

    def invertible(self) -> bool:
        return not approx_equal(self.determinant(), 0.0)

    def inverse(self) -> Matrix:
        """Return the inverse matrix.

        Raises:
            SingularMatrixError: If the determinant is (approximately) zero
        """
        det = self.determinant()
        if approx_equal(det, 0.0):
            raise SingularMatrixError(f"Matrix is not invertible: {self!r}")

        n = self.size
        inv = np.empty((n, n), dtype=np.float64)
        for row in range(n):
            for col in range(n):
                # Transposed assignment: the inverse is the adjugate over det
                inv[col, row] = self.cofactor(row, col) / det
        return Matrix(inv)

    # Chaining helpers: each applies its transform after this one

    def translate(self, x: float, y: float, z: float) -> Matrix:
        return translation(x, y, z) * self

    def scale(self, x: float, y: float, z: float) -> Matrix:
        return scaling(x, y, z) * self

    def rotate(self, angle: float, axis: Union[Axis, str]) -> Matrix:
        return rotation(angle, axis) * self

    def rotate_x(self, angle: float) -> Matrix:
        return rotation_x(angle) * self

    def rotate_y(self, angle: float) -> Matrix:
        return rotation_y(angle) * self

    def rotate_z(self, angle: float) -> Matrix:
        return rotation_z(angle) * self

    def shear(self, xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix:
        return shearing(xy, xz, yx, yz, zx, zy) * self


def identity(size: int = 4) -> Matrix:
    """Return the identity matrix of the given size."""
    if size not in SUPPORTED_SIZES:
        raise DimensionMismatchError(f"Matrix size must be one of {SUPPORTED_SIZES}, got {size}")
    return Matrix(np.eye(size, dtype=np.float64))


def translation(x: float, y: float, z: float) -> Matrix:
    """Move points by (x, y, z). Vectors are unaffected."""
    m = np.eye(4, dtype=np.float64)
    m[0, 3] = x
    m[1, 3] = y
    m[2, 3] = z
    return Matrix(m)


def scaling(x: float, y: float, z: float) -> Matrix:
    """Scale along each axis. Negative values reflect."""
    m = np.eye(4, dtype=np.float64)
    m[0, 0] = x
    m[1, 1] = y
    m[2, 2] = z
    return Matrix(m)


def rotation_x(angle: float) -> Matrix:
    """Rotate by angle radians around the x axis (left-handed)."""
    c, s = math.cos(angle), math.sin(angle)
    return Matrix([
        [1, 0, 0, 0],
        [0, c, -s, 0],
        [0, s, c, 0],
        [0, 0, 0, 1],
    ])


def rotation_y(angle: float) -> Matrix:
    """Rotate by angle radians around the y axis (left-handed)."""
    c, s = math.cos(angle), math.sin(angle)
    return Matrix([
        [c, 0, s, 0],
        [0, 1, 0, 0],
        [-s, 0, c, 0],
        [0, 0, 0, 1],
    ])


def rotation_z(angle: float) -> Matrix:
    """Rotate by angle radians around the z axis (left-handed)."""
    c, s = math.cos(angle), math.sin(angle)
    return Matrix([
        [c, -s, 0, 0],
        [s, c, 0, 0],
        [0, 0, 1, 0],
        [0, 0, 0, 1],
    ])


_ROTATIONS = {
    Axis.X: rotation_x,
    Axis.Y: rotation_y,
    Axis.Z: rotation_z,
}


def rotation(angle: float, axis: Union[Axis, str]) -> Matrix:
    """Rotate by angle radians around one of the coordinate axes.

    Args:
        angle: Rotation angle in radians
        axis: An Axis, or one of 'x', 'y', 'z'
    """
    if isinstance(axis, str):
        try:
            axis = Axis(axis.lower())
        except ValueError:
            raise ValueError(f"Unknown rotation axis: {axis}") from None
    return _ROTATIONS[axis](angle)


def shearing(xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix:
    """Shear each component in proportion to the other two.

    xy moves x in proportion to y, xz moves x in proportion to z, and so on.
    """
    return Matrix([
        [1, xy, xz, 0],
        [yx, 1, yz, 0],
        [zx, zy, 1, 0],
        [0, 0, 0, 1],
    ])
