#!/usr/bin/env python3
"""Render the demo lighting scene.

This script builds the demo scene (area lamp, hemi light and a handful of
occluders), renders one frame with soft shadows and the ambient dark mask,
and saves it as a PNG.

Usage:
    python -m examples.render_scene [options]

Options:
    --width WIDTH       Image width in pixels (default: 480)
    --height HEIGHT     Image height in pixels (default: 320)
    --samples SAMPLES   Shadow samples of the area lamp (default: 16)
    --diffuse DIFFUSE   Light passing through objects, 0..1 (default: 0)
    --output OUTPUT     Output file path (default: lighting.png)
    --config CONFIG     Load the scene from a JSON file instead
    --quiet             Suppress progress output

Example:
    python -m examples.render_scene --samples 32 --output soft.png
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the demo lighting scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=480,
        help="Image width in pixels (default: 480)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=320,
        help="Image height in pixels (default: 320)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=16,
        help="Shadow samples of the area lamp (default: 16)",
    )
    parser.add_argument(
        "--diffuse",
        type=float,
        default=0.0,
        help="Light passing through objects, 0..1 (default: 0)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="lighting.png",
        help="Output file path (default: lighting.png)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Load the scene from a JSON file instead of the demo scene",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_scene(
    width: int = 480,
    height: int = 320,
    samples: int = 16,
    diffuse: float = 0.0,
    output_path: str = "lighting.png",
    config_path: str | None = None,
    quiet: bool = False,
) -> Path:
    """Render the demo scene (or a scene loaded from JSON) and save it.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        samples: Shadow samples of the demo's area lamp.
        diffuse: Fraction of light passing through objects.
        output_path: Output file path (PNG).
        config_path: Optional JSON scene file (SceneManager.to_dict format).
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.lightcast.preview.export import save_png
    from src.lightcast.scene.demo import DemoParams, create_demo_scene
    from src.lightcast.scene.manager import SceneManager

    if config_path is not None:
        if not quiet:
            print(f"Loading scene from {config_path}...")
        scene = SceneManager()
        scene.from_dict(json.loads(Path(config_path).read_text()))
    else:
        if not quiet:
            print(f"Creating demo scene ({width}x{height}, {samples} samples)...")
        scene = create_demo_scene(DemoParams(lamp_samples=samples, diffuse=diffuse))

    start_time = time.time()
    frame = scene.render(width, height)
    elapsed = time.time() - start_time

    output_file = Path(output_path)
    save_png(frame, str(output_file))

    if not quiet:
        print(f"Rendered {len(scene.lights)} lights, {len(scene.shapes)} shapes in {elapsed:.2f}s")
        print(f"Saved to: {output_file.absolute()}")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Use GPU if available, fall back to CPU
    try:
        ti.init(arch=ti.gpu)
        if not args.quiet:
            print("Using GPU backend")
    except Exception:
        ti.init(arch=ti.cpu)
        if not args.quiet:
            print("Using CPU backend")

    try:
        render_scene(
            width=args.width,
            height=args.height,
            samples=args.samples,
            diffuse=args.diffuse,
            output_path=args.output,
            config_path=args.config,
            quiet=args.quiet,
        )
        return 0
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
