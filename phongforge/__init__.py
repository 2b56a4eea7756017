"""
PhongForge - A Python Ray Tracing Kernel

A small, exact ray tracing core with:
- Points, vectors and colors as kind-checked tuples
- 4x4 affine transforms with cofactor-expansion inverse
- Ray-sphere intersection in object space
- Transform-correct surface normals
- Phong lighting with a single point light
- PPM and Pillow image output
"""

__version__ = "0.1.0"
__author__ = "PhongForge Team"

from .common import EPSILON, TracerError, approx_equal
from .tuples import (
    Tuple, Kind, KindMismatchError, ZeroMagnitudeError,
    point, vector, color, BLACK, WHITE, ORIGIN
)
from .matrix import (
    Matrix, Axis, SingularMatrixError, DimensionMismatchError,
    identity, translation, scaling, rotation, rotation_x, rotation_y, rotation_z, shearing
)
from .ray import Ray
from .shapes import Shape, Sphere
from .intersections import Intersection, intersections, hit
from .materials import Material
from .lights import PointLight, lighting
from .canvas import Canvas
from .world import World, Computations, default_world
from .renderer import Renderer, RenderSettings
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene
from .projectile import Projectile, Environment, tick, simulate
