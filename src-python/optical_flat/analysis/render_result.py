"""
Copyright 2026 optical-flat authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

===============================================================================
Render Result Layer
===============================================================================
Saves SVG strings from SVGRenderer to files, optionally converts them to PNG
via cairosvg, and returns JSON-serializable descriptors.
===============================================================================
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# Module-level render counter for auto-generating unique filenames
_render_counter: int = 0


def reset_render_counter() -> None:
    """Reset the render counter to 0."""
    global _render_counter
    _render_counter = 0


def _svg_to_png(
    svg_string: str,
    png_path: str,
    width: int,
    height: int,
) -> bool:
    """
    Convert an SVG string to PNG using cairosvg (optional dependency).

    Returns:
        True if conversion succeeded, False if cairosvg is not installed
        or its native library cannot be loaded.
    """
    try:
        import cairosvg
        cairosvg.svg2png(
            bytestring=svg_string.encode('utf-8'),
            write_to=png_path,
            output_width=width,
            output_height=height,
        )
        return True
    except (ImportError, OSError) as e:
        logger.debug(f"PNG conversion skipped: {e}")
        return False


def save_render(
    svg_string: str,
    render_dir: str,
    prefix: str,
    width: int,
    height: int,
    description: str,
    shift_summary: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Save an SVG string to file, optionally convert to PNG, return descriptor.

    Filenames are ``{prefix}_{counter:03d}.svg`` (and ``.png`` if cairosvg
    is available).

    Args:
        svg_string: The SVG content from SVGRenderer.to_string().
        render_dir: Directory path where files will be saved.
        prefix: Filename prefix (e.g. 'flat').
        width: SVG/PNG width in pixels.
        height: SVG/PNG height in pixels.
        description: Human-readable description of what the render shows.
        shift_summary: Optional dict with the inputs and the shift
            (e.g. ray_path_to_dict output).

    Returns:
        JSON-serializable descriptor dict with file paths and metadata.
    """
    global _render_counter
    _render_counter += 1

    render_path = Path(render_dir)
    render_path.mkdir(parents=True, exist_ok=True)

    base_name = f"{prefix}_{_render_counter:03d}"
    svg_path = render_path / f"{base_name}.svg"
    png_path = render_path / f"{base_name}.png"

    svg_path.write_text(svg_string, encoding='utf-8')
    png_ok = _svg_to_png(svg_string, str(png_path), int(width), int(height))
    logger.info(f"Saved render {svg_path}" + (f" and {png_path}" if png_ok else ""))

    return {
        'svg_path': str(svg_path),
        'png_path': str(png_path) if png_ok else None,
        'png_available': png_ok,
        'width': width,
        'height': height,
        'description': description,
        'shift_summary': shift_summary,
    }
