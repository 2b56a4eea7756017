"""
Pixel canvas and image output.

Pixels are stored as linear RGB floats in a numpy array of shape
(height, width, 3). Output is either plain PPM (P3) text or any format
Pillow can write.
"""

from __future__ import annotations
from pathlib import Path
from typing import Union
import numpy as np

from .tuples import Tuple, COLOR, KindMismatchError

PPM_MAX_LINE = 70
PPM_MAX_VALUE = 255


class Canvas:
    """A rectangular grid of colors, initially black."""

    def __init__(self, width: int, height: int):
        """Create a canvas.

        Args:
            width: Number of columns
            height: Number of rows
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._pixels = np.zeros((height, width, 3), dtype=np.float64)

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) is outside the {self.width}x{self.height} canvas"
            )

    def write_pixel(self, x: int, y: int, c: Tuple) -> None:
        """Set the color of the pixel at column x, row y."""
        self._check_bounds(x, y)
        if not c.is_color():
            raise KindMismatchError(f"Can only write colors to a canvas, got {c!r}")
        self._pixels[y, x] = c.to_array()

    def pixel_at(self, x: int, y: int) -> Tuple:
        """Return the color of the pixel at column x, row y."""
        self._check_bounds(x, y)
        return Tuple.from_array(self._pixels[y, x], COLOR)

    def to_array(self) -> np.ndarray:
        """Return a copy of the pixel data, shape (height, width, 3)."""
        return self._pixels.copy()

    def to_bytes_array(self) -> np.ndarray:
        """Scale to [0, 255], round and clamp, as uint8."""
        scaled = np.floor(self._pixels * PPM_MAX_VALUE + 0.5)
        return np.clip(scaled, 0, PPM_MAX_VALUE).astype(np.uint8)

    def to_ppm(self) -> str:
        """Serialize as plain PPM (P3).

        Each canvas row starts on a new line and no line is longer than
        70 characters.
        """
        lines = ["P3", f"{self.width} {self.height}", str(PPM_MAX_VALUE)]
        data = self.to_bytes_array()

        for row in data:
            line = ""
            for value in row.flat:
                token = str(int(value))
                if not line:
                    line = token
                elif len(line) + 1 + len(token) > PPM_MAX_LINE:
                    lines.append(line)
                    line = token
                else:
                    line += " " + token
            lines.append(line)

        return "\n".join(lines) + "\n"

    def to_image(self):
        """Convert to an 8-bit RGB Pillow image."""
        from PIL import Image as PILImage
        return PILImage.fromarray(self.to_bytes_array(), 'RGB')

    def save(self, filename: Union[str, Path]) -> None:
        """Save the canvas.

        Args:
            filename: Output path. A .ppm extension writes P3 text; any other
                extension is handed to Pillow.
        """
        path = Path(filename)
        if path.parent and not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)

        if path.suffix.lower() == '.ppm':
            path.write_text(self.to_ppm())
        else:
            self.to_image().save(path)

    def __repr__(self) -> str:
        return f"Canvas({self.width}x{self.height})"
