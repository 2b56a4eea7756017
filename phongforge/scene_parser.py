"""
Scene description language parser.

Supports a YAML-based scene description format (JSON works too) with:
- Render settings
- Materials library
- Objects (spheres with transforms and materials)
- A single point light

Example scene file:
```yaml
render:
  width: 200
  height: 200
  wall_z: 10
  wall_size: 7
  eye: [0, 0, -5]

materials:
  magenta:
    color: [1, 0.2, 1]
    shininess: 100

objects:
  - type: sphere
    material: magenta
    transform:
      - scale: [1, 0.5, 1]
      - rotate_z: 0.6283
      - translate: [0, 0.5, 0]

light:
  position: [-10, 10, -10]
  intensity: [1, 1, 1]
```

Transforms are applied in the order they are listed.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Optional, Union
import dataclasses
import json
import logging

from .common import TracerError
from .tuples import Tuple, point, color
from .matrix import Matrix, identity, translation, scaling, rotation_x, rotation_y, rotation_z, shearing
from .materials import Material
from .lights import PointLight
from .shapes import Sphere
from .world import World
from .renderer import RenderSettings

logger = logging.getLogger(__name__)


class SceneParseError(TracerError):
    """Error during scene parsing."""
    pass


def _to_float(value: Any, what: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise SceneParseError(f"{what} must be a number, got {value!r}") from e


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, Material] = {}
        self.world: World = World()
        self.settings: Optional[RenderSettings] = None

    def parse_file(self, filepath: Union[str, Path]) -> tuple[World, RenderSettings]:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (world, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        content = path.read_text()
        logger.info("Loading scene %s", path)

        if path.suffix == '.json':
            try:
                data = json.loads(content)
            except json.JSONDecodeError as e:
                raise SceneParseError(f"Invalid JSON in {filepath}: {e}") from e
        else:
            data = self._load_yaml(content, filepath)

        if not isinstance(data, dict):
            raise SceneParseError(f"Scene file must contain a mapping: {filepath}")
        return self.parse_dict(data)

    @staticmethod
    def _load_yaml(content: str, filepath: Any) -> Any:
        try:
            import yaml
        except ImportError:
            raise SceneParseError("PyYAML not installed. Install with: pip install pyyaml")
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise SceneParseError(f"Invalid YAML in {filepath}: {e}") from e

    def parse_dict(self, data: Dict[str, Any]) -> tuple[World, RenderSettings]:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (world, settings)
        """
        # Parse materials first (objects reference them)
        if 'materials' in data:
            self._parse_materials(data['materials'])

        if 'objects' in data:
            self._parse_objects(data['objects'])

        if 'light' in data:
            self.world.light = self._parse_light(data['light'])

        if 'render' in data:
            self._parse_settings(data['render'])
        else:
            self.settings = RenderSettings()

        logger.debug(
            "Parsed scene: %d materials, %d objects, light=%s",
            len(self.materials), len(self.world), self.world.light is not None
        )
        return self.world, self.settings

    def _parse_triple(self, data: Any, what: str) -> tuple[float, float, float]:
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"{what} must have 3 components, got {len(data)}")
            return (
                _to_float(data[0], f"{what} x"),
                _to_float(data[1], f"{what} y"),
                _to_float(data[2], f"{what} z")
            )
        elif isinstance(data, dict):
            return (
                _to_float(data.get('x', 0), f"{what} x"),
                _to_float(data.get('y', 0), f"{what} y"),
                _to_float(data.get('z', 0), f"{what} z")
            )
        raise SceneParseError(f"Cannot parse {what} from: {data}")

    def _parse_point(self, data: Any) -> Tuple:
        return point(*self._parse_triple(data, "Point"))

    def _parse_color(self, data: Any) -> Tuple:
        """Parse a Color from various formats."""
        if isinstance(data, dict):
            return color(
                _to_float(data.get('r', 0), "Color r"),
                _to_float(data.get('g', 0), "Color g"),
                _to_float(data.get('b', 0), "Color b")
            )
        elif isinstance(data, str):
            # Handle hex colors
            if data.startswith('#'):
                hex_color = data[1:]
                if len(hex_color) == 6:
                    try:
                        r = int(hex_color[0:2], 16) / 255.0
                        g = int(hex_color[2:4], 16) / 255.0
                        b = int(hex_color[4:6], 16) / 255.0
                    except ValueError as e:
                        raise SceneParseError(f"Cannot parse color from string: {data}") from e
                    return color(r, g, b)
            raise SceneParseError(f"Cannot parse color from string: {data}")
        return color(*self._parse_triple(data, "Color"))

    def _parse_material(self, mat_data: Dict[str, Any]) -> Material:
        defaults = Material()
        mat_color = defaults.color
        if 'color' in mat_data:
            mat_color = self._parse_color(mat_data['color'])
        return Material(
            color=mat_color,
            ambient=_to_float(mat_data.get('ambient', defaults.ambient), "Material ambient"),
            diffuse=_to_float(mat_data.get('diffuse', defaults.diffuse), "Material diffuse"),
            specular=_to_float(mat_data.get('specular', defaults.specular), "Material specular"),
            shininess=_to_float(mat_data.get('shininess', defaults.shininess), "Material shininess")
        )

    def _parse_materials(self, materials_data: Dict[str, Any]) -> None:
        """Parse materials section."""
        if not isinstance(materials_data, dict):
            raise SceneParseError("'materials' must be a mapping of name to material")
        for name, mat_data in materials_data.items():
            if not isinstance(mat_data, dict):
                raise SceneParseError(f"Invalid material definition for {name}: {mat_data}")
            self.materials[name] = self._parse_material(mat_data)

    def _get_material(self, mat_ref: Any) -> Material:
        """Get a material by name or inline definition.

        Named materials are copied, so every sphere owns its material.
        """
        if mat_ref is None:
            return Material()
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return dataclasses.replace(self.materials[mat_ref])
        elif isinstance(mat_ref, dict):
            return self._parse_material(mat_ref)
        raise SceneParseError(f"Invalid material reference: {mat_ref}")

    def _parse_transform(self, steps: Any) -> Matrix:
        """Compose a list of transform steps, first listed applied first."""
        if steps is None:
            return identity()
        if not isinstance(steps, list):
            raise SceneParseError(f"'transform' must be a list of steps, got {steps}")

        m = identity()
        for step in steps:
            if not isinstance(step, dict) or len(step) != 1:
                raise SceneParseError(f"Transform step must have exactly one key: {step}")
            (op, args), = step.items()
            op = str(op).lower()

            if op == 'translate':
                m = translation(*self._parse_triple(args, "translate")) * m
            elif op == 'scale':
                if isinstance(args, (int, float)):
                    args = [args, args, args]
                m = scaling(*self._parse_triple(args, "scale")) * m
            elif op == 'rotate_x':
                m = rotation_x(_to_float(args, "rotate_x")) * m
            elif op == 'rotate_y':
                m = rotation_y(_to_float(args, "rotate_y")) * m
            elif op == 'rotate_z':
                m = rotation_z(_to_float(args, "rotate_z")) * m
            elif op == 'shear':
                if not isinstance(args, (list, tuple)) or len(args) != 6:
                    raise SceneParseError(f"shear needs 6 components, got {args}")
                m = shearing(*(_to_float(a, "shear") for a in args)) * m
            else:
                raise SceneParseError(f"Unknown transform: {op}")
        return m

    def _parse_objects(self, objects_data: list) -> None:
        """Parse objects section."""
        if not isinstance(objects_data, list):
            raise SceneParseError("'objects' must be a list")
        for obj_data in objects_data:
            if not isinstance(obj_data, dict):
                raise SceneParseError(f"Invalid object definition: {obj_data}")
            obj_type = str(obj_data.get('type', 'sphere')).lower()
            material = self._get_material(obj_data.get('material'))
            transform = self._parse_transform(obj_data.get('transform'))

            if obj_type == 'sphere':
                self.world.add(Sphere(transform, material))
            else:
                raise SceneParseError(f"Unknown object type: {obj_type}")

    def _parse_light(self, light_data: Dict[str, Any]) -> PointLight:
        """Parse the light section."""
        if not isinstance(light_data, dict):
            raise SceneParseError(f"'light' must be a mapping, got {light_data}")
        light_type = str(light_data.get('type', 'point')).lower()
        if light_type != 'point':
            raise SceneParseError(f"Unknown light type: {light_type}")
        position = self._parse_point(light_data.get('position', [-10, 10, -10]))
        intensity = self._parse_color(light_data.get('intensity', [1, 1, 1]))
        return PointLight(intensity, position)

    def _parse_settings(self, settings_data: Dict[str, Any]) -> None:
        """Parse render settings section."""
        eye = None
        if 'eye' in settings_data:
            eye = self._parse_point(settings_data['eye'])
        background = None
        if 'background' in settings_data:
            background = self._parse_color(settings_data['background'])
        try:
            self.settings = RenderSettings(
                canvas_width=int(settings_data.get('width', 100)),
                canvas_height=int(settings_data.get('height', 100)),
                wall_z=float(settings_data.get('wall_z', 10.0)),
                wall_size=float(settings_data.get('wall_size', 7.0)),
                eye=eye,
                background=background
            )
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Invalid render settings: {e}") from e


def load_scene(filepath: Union[str, Path]) -> tuple[World, RenderSettings]:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (world, settings)
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> tuple[World, RenderSettings]:
    """Convenience function to parse a scene from a dictionary.

    Args:
        data: Scene description dictionary

    Returns:
        Tuple of (world, settings)
    """
    parser = SceneParser()
    return parser.parse_dict(data)
