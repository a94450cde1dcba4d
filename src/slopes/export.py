"""
Plotter Export
==============

Write generated drawings to files a plotter toolchain can consume.

Formats:
    - svg: One <polyline> per path inside a single stroked group, sized in
      page units with a matching viewBox
    - json: The Drawing document (see models.output)

This module only serialises. It makes no decisions about what is drawn.
"""

import logging
from pathlib import Path
from typing import Union

import svgwrite

from slopes.models.output import Drawing


logger = logging.getLogger(__name__)


EXPORT_FORMATS = ("svg", "json")


def drawing_to_svg(
    drawing: Drawing,
    stroke_width: float = 1.0,
    stroke_color: str = "black",
) -> str:
    """
    Render a drawing as an SVG document.

    Args:
        drawing: Generated drawing
        stroke_width: Stroke width in page units
        stroke_color: Any SVG colour

    Returns:
        SVG document as a string
    """
    dwg = svgwrite.Drawing(size=(drawing.width, drawing.height))
    dwg.viewbox(0, 0, drawing.width, drawing.height)

    group = dwg.g(
        fill="none",
        stroke=stroke_color,
        stroke_width=stroke_width,
        stroke_linecap="round",
        stroke_linejoin="round",
    )
    for points in drawing.polylines:
        group.add(dwg.polyline(points=[(round(x, 3), round(y, 3)) for x, y in points]))
    dwg.add(group)

    return dwg.tostring()


def drawing_to_json(drawing: Drawing) -> str:
    """Serialise a drawing as JSON."""
    return drawing.model_dump_json()


def write_drawing(
    drawing: Drawing,
    path: Union[str, Path],
    fmt: str = "svg",
    stroke_width: float = 1.0,
    stroke_color: str = "black",
) -> Path:
    """
    Write a drawing to disk.

    Args:
        drawing: Generated drawing
        path: Destination file
        fmt: "svg" or "json"
        stroke_width: SVG stroke width
        stroke_color: SVG stroke colour

    Returns:
        The written path

    Raises:
        ValueError: If fmt is not a supported format
    """
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unknown export format: {fmt} (expected one of {EXPORT_FORMATS})")

    file_path = Path(path)

    if fmt == "svg":
        content = drawing_to_svg(drawing, stroke_width=stroke_width, stroke_color=stroke_color)
    else:
        content = drawing_to_json(drawing)

    file_path.write_text(content)

    logger.info(
        f"Wrote {fmt} drawing to: {file_path} ({len(drawing.polylines)} polylines)"
    )
    return file_path
