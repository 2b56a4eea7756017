"""
Projectile demo: a point launched through an environment with gravity and
wind, plotted onto a canvas one tick at a time.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from .tuples import Tuple, point, vector, KindMismatchError
from .canvas import Canvas

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Projectile:
    position: Tuple
    velocity: Tuple

    def __post_init__(self):
        if not self.position.is_point() or not self.velocity.is_vector():
            raise KindMismatchError("A projectile needs a point position and a vector velocity")


@dataclass(frozen=True)
class Environment:
    gravity: Tuple
    wind: Tuple


def tick(env: Environment, proj: Projectile) -> Projectile:
    """Advance the projectile by one time step."""
    position = proj.position + proj.velocity
    velocity = proj.velocity + env.gravity + env.wind
    return Projectile(position, velocity)


def simulate(env: Environment, proj: Projectile, canvas: Canvas, plot_color: Tuple,
             max_ticks: int = 100000) -> int:
    """Tick until the projectile falls to the ground, plotting its path.

    Canvas row 0 is the top, so y is flipped. Positions outside the canvas
    are skipped.

    Returns:
        The number of ticks taken
    """
    ticks = 0
    while proj.position.y > 0 and ticks < max_ticks:
        proj = tick(env, proj)
        ticks += 1
        x = int(round(proj.position.x))
        y = canvas.height - int(round(proj.position.y))
        if 0 <= x < canvas.width and 0 <= y < canvas.height:
            canvas.write_pixel(x, y, plot_color)
        logger.debug("tick %d: position %s", ticks, proj.position)
    return ticks


def default_launch() -> tuple[Environment, Projectile]:
    """The launch used by the demo: fast, shallow arc with light headwind."""
    proj = Projectile(point(0.0, 1.0, 0.0), vector(1.0, 1.8, 0.0).normalize() * 11.25)
    env = Environment(gravity=vector(0.0, -0.1, 0.0), wind=vector(-0.01, 0.0, 0.0))
    return env, proj
