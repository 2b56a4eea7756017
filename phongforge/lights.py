"""
Point light and the Phong reflection model.

The lighting function combines three terms:
- Ambient: a constant fraction of the surface color
- Diffuse: proportional to the cosine between the light and the normal
- Specular: a highlight that peaks when the eye looks along the reflected light
"""

from __future__ import annotations
from dataclasses import dataclass

from .tuples import Tuple, BLACK, KindMismatchError
from .materials import Material


@dataclass(eq=False)
class PointLight:
    """A light source with no size, emitting equally in all directions.

    Attributes:
        intensity: Color and brightness of the light
        position: Position of the light
    """
    intensity: Tuple
    position: Tuple

    def __post_init__(self):
        if not self.intensity.is_color():
            raise KindMismatchError(f"Light intensity must be a color, got {self.intensity!r}")
        if not self.position.is_point():
            raise KindMismatchError(f"Light position must be a point, got {self.position!r}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PointLight):
            return NotImplemented
        return self.intensity == other.intensity and self.position == other.position

    __hash__ = None


def lighting(
    material: Material,
    light: PointLight,
    point: Tuple,
    eyev: Tuple,
    normalv: Tuple
) -> Tuple:
    """Shade a surface point with the Phong reflection model.

    Args:
        material: Material at the point
        light: The light source
        point: The point being shaded
        eyev: Unit vector from the point towards the eye
        normalv: Unit surface normal at the point

    Returns:
        The color of the point (not clamped)
    """
    # Combine the surface color with the light's color/intensity
    effective_color = material.color.hadamard(light.intensity)
    lightv = (light.position - point).normalize()
    ambient = effective_color * material.ambient

    # Cosine of the angle between light and normal; negative means the
    # light is on the other side of the surface
    light_dot_normal = lightv.dot(normalv)
    if light_dot_normal < 0:
        return ambient

    diffuse = effective_color * material.diffuse * light_dot_normal

    # Cosine of the angle between the reflection and the eye; negative
    # means the light reflects away from the eye
    reflectv = (-lightv).reflect(normalv)
    reflect_dot_eye = reflectv.dot(eyev)
    if reflect_dot_eye <= 0:
        specular = BLACK
    else:
        factor = reflect_dot_eye ** material.shininess
        specular = light.intensity * material.specular * factor

    return ambient + diffuse + specular
