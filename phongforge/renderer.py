"""
Renderer module.

Casts one ray per pixel from an eye point through a square wall placed
behind the scene, and shades each ray with the Phong model:

    eye ---> [ scene ] ---> wall at z = wall_z

Rows are traced one after another on the calling thread.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional
import logging
import time

from .tuples import Tuple, color, point
from .ray import Ray
from .canvas import Canvas
from .world import World

logger = logging.getLogger(__name__)


@dataclass
class RenderSettings:
    """Configuration for the renderer.

    Attributes:
        canvas_width: Image width in pixels
        canvas_height: Image height in pixels
        wall_z: z coordinate of the backdrop wall
        wall_size: Side length of the square wall in world units
        eye: Ray origin
        background: Color of pixels whose ray hits nothing
    """
    canvas_width: int = 100
    canvas_height: int = 100
    wall_z: float = 10.0
    wall_size: float = 7.0
    eye: Tuple = None
    background: Tuple = None

    def __post_init__(self):
        if self.eye is None:
            self.eye = point(0.0, 0.0, -5.0)
        if self.background is None:
            self.background = color(0.0, 0.0, 0.0)
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ValueError(
                f"Canvas size must be positive, got {self.canvas_width}x{self.canvas_height}"
            )
        if self.wall_size <= 0:
            raise ValueError(f"Wall size must be positive, got {self.wall_size}")

    @property
    def pixel_size(self) -> float:
        """Wall units covered by one pixel (along the larger canvas side)."""
        return self.wall_size / max(self.canvas_width, self.canvas_height)


class Renderer:
    """Single-ray-per-pixel Phong renderer."""

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def ray_for_pixel(self, x: int, y: int) -> Ray:
        """Build the ray from the eye through the center of pixel (x, y).

        Row 0 is the top of the image, so y is flipped against world y.
        """
        s = self.settings
        half_width = s.pixel_size * s.canvas_width / 2
        half_height = s.pixel_size * s.canvas_height / 2
        world_x = -half_width + s.pixel_size * (x + 0.5)
        world_y = half_height - s.pixel_size * (y + 0.5)
        target = point(world_x, world_y, s.wall_z)
        return Ray(s.eye, (target - s.eye).normalize())

    def render(self, world: World) -> Canvas:
        """Render the world into a new canvas."""
        s = self.settings
        canvas = Canvas(s.canvas_width, s.canvas_height)
        logger.info(
            "Rendering %dx%d with %d objects",
            s.canvas_width, s.canvas_height, len(world)
        )
        start = time.time()

        for y in range(s.canvas_height):
            for x in range(s.canvas_width):
                canvas.write_pixel(x, y, world.color_at(self.ray_for_pixel(x, y), s.background))

            if self._progress_callback:
                self._progress_callback((y + 1) / s.canvas_height)

        logger.info("Render finished in %.2fs", time.time() - start)
        return canvas
