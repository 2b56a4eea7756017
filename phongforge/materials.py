"""
Surface materials for the Phong reflection model.

A material holds the surface color and the weights of the three Phong
terms. Scene setup is free to edit a material before rendering.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .common import approx_equal
from .tuples import Tuple, color, KindMismatchError


def _white() -> Tuple:
    return color(1.0, 1.0, 1.0)


@dataclass(eq=False)
class Material:
    """Phong surface parameters.

    Attributes:
        color: Surface color
        ambient: Fraction of the light's color reflected regardless of geometry
        diffuse: Weight of the Lambertian term
        specular: Weight of the highlight
        shininess: Highlight exponent; larger values give smaller, tighter highlights
    """
    color: Tuple = field(default_factory=_white)
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0

    def __setattr__(self, name: str, value) -> None:
        # Checked on every assignment, including the one made by __init__
        if name == "color" and not (isinstance(value, Tuple) and value.is_color()):
            raise KindMismatchError(f"Material color must be a color, got {value!r}")
        super().__setattr__(name, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Material):
            return NotImplemented
        return (
            self.color == other.color
            and approx_equal(self.ambient, other.ambient)
            and approx_equal(self.diffuse, other.diffuse)
            and approx_equal(self.specular, other.specular)
            and approx_equal(self.shininess, other.shininess)
        )

    __hash__ = None
