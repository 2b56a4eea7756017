#!/usr/bin/env python3
"""
PhongForge - A Python Ray Tracing Kernel

Main entry point for rendering scenes.
"""

import argparse
import dataclasses
import logging
import math
import sys
import time
from pathlib import Path

from phongforge.common import TracerError
from phongforge.tuples import color, point
from phongforge.matrix import identity
from phongforge.shapes import Sphere
from phongforge.materials import Material
from phongforge.lights import PointLight
from phongforge.canvas import Canvas
from phongforge.world import World, default_world
from phongforge.renderer import Renderer, RenderSettings
from phongforge.scene_parser import load_scene
from phongforge.projectile import default_launch, simulate


def create_sphere_scene() -> World:
    """A single squashed, tilted magenta sphere lit from the upper left."""
    transform = identity().rotate_z(math.pi / 5).scale(1, 0.5, 1)
    sphere = Sphere(transform, Material(color=color(1, 0.2, 1)))
    light = PointLight(color(1, 1, 1), point(-10, 10, -10))
    return World([sphere], light)


def run_projectile(output: str) -> int:
    """Plot the projectile demo and save it."""
    canvas = Canvas(900, 550)
    env, proj = default_launch()
    ticks = simulate(env, proj, canvas, color(1, 0, 0))
    print(f"Projectile landed after {ticks} ticks")
    print(f"\nSaving to: {output}")
    canvas.save(output)
    return 0


def positive_int(value: str) -> int:
    """argparse type for image dimensions."""
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if n <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {n}")
    return n


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='PhongForge - A Python Ray Tracing Kernel',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --demo sphere --output render.png
  python main.py --scene scene.yaml --output render.ppm
  python main.py --demo projectile --output projectile.ppm
        '''
    )

    parser.add_argument('--width', type=positive_int, default=None, help='Image width (default: 100)')
    parser.add_argument('--height', type=positive_int, default=None, help='Image height (default: 100)')
    parser.add_argument('--output', type=str, default='output/render.ppm', help='Output filename')
    parser.add_argument('--scene', type=str, default=None, help='YAML or JSON scene file')
    parser.add_argument('--demo', type=str, default='sphere', choices=['sphere', 'world', 'projectile'],
                        help='Built-in scene when no --scene is given (default: sphere)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s'
    )

    # Print header
    print("=" * 60)
    print("PhongForge Ray Tracer")
    print("=" * 60)

    try:
        if args.scene is None and args.demo == 'projectile':
            return run_projectile(args.output)

        if args.scene:
            print(f"\nLoading scene: {args.scene}")
            world, settings = load_scene(args.scene)
        else:
            print(f"\nCreating scene: {args.demo}")
            world = default_world() if args.demo == 'world' else create_sphere_scene()
            settings = RenderSettings()

        if args.width is not None:
            settings = dataclasses.replace(settings, canvas_width=args.width)
        if args.height is not None:
            settings = dataclasses.replace(settings, canvas_height=args.height)

        print(f"\nRender Settings:")
        print(f"  Resolution: {settings.canvas_width}x{settings.canvas_height}")
        print(f"  Wall: {settings.wall_size} at z={settings.wall_z}")
        print(f"  Objects in scene: {len(world)}")

        renderer = Renderer(settings)

        # Progress tracking
        last_progress = [0]

        def progress_callback(progress: float):
            pct = int(progress * 100)
            if pct > last_progress[0]:
                last_progress[0] = pct
                bar_len = 40
                filled = int(bar_len * progress)
                bar = '█' * filled + '░' * (bar_len - filled)
                print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

        renderer.set_progress_callback(progress_callback)

        print("\nRendering...")
        start_time = time.time()

        canvas = renderer.render(world)

        elapsed = time.time() - start_time
        print(f"\nRender completed in {elapsed:.2f} seconds")
        if elapsed > 0:
            print(f"  Rays per second: {(settings.canvas_width * settings.canvas_height) / elapsed:.0f}")

        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        print(f"\nSaving to: {args.output}")
        canvas.save(output_path)
    except TracerError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
