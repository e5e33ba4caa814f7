"""SVG export and import for drawings.

Turtle coordinates have +y pointing up while SVG has +y pointing down, so y
is negated in both directions.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import List, Tuple, Union

from svgpathtools import Line, Path as SVGPathObject, svg2paths2

from .geometry import DEFAULT_COLOR, Drawing, Segment, XY


def _to_complex(pt: XY) -> complex:
    return complex(pt[0], -pt[1])


def _from_complex(z: complex) -> XY:
    return (float(z.real), -float(z.imag))


def drawing_paths(drawing: Drawing) -> List[Tuple[SVGPathObject, str]]:
    """Convert each chained polyline of ``drawing`` into an svgpathtools path."""
    out: List[Tuple[SVGPathObject, str]] = []
    for poly in drawing.polylines():
        lines = [Line(_to_complex(a), _to_complex(b)) for a, b in zip(poly.pts, poly.pts[1:])]
        out.append((SVGPathObject(*lines), poly.color))
    return out


def drawing_to_svg(drawing: Drawing, *, stroke_width: float = 1.0, padding: float = 5.0) -> str:
    paths = drawing_paths(drawing)
    bbox = drawing.bounding_box()
    if bbox is None:
        xmin, ymin, width, height = 0.0, 0.0, 1.0, 1.0
    else:
        (x0, y0), (x1, y1) = bbox
        xmin = x0 - padding
        ymin = -y1 - padding
        width = (x1 - x0) + 2 * padding
        height = (y1 - y0) + 2 * padding
    viewbox = f"{xmin:g} {ymin:g} {width:g} {height:g}"
    body = []
    for path, color in paths:
        body.append(
            f'<path d="{path.d()}" stroke="{color}" stroke-width="{stroke_width:g}" fill="none" />'
        )
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="{viewbox}" '
        f'width="{width:g}" height="{height:g}">' + "".join(body) + "</svg>"
    )


def write_svg(drawing: Drawing, path: Union[str, Path], **kwargs) -> Path:
    path = Path(path)
    path.write_text(drawing_to_svg(drawing, **kwargs), encoding="utf-8")
    return path


def sample_path(path: SVGPathObject, tolerance: float = 0.5) -> List[XY]:
    """Convert an svgpathtools Path into a list of turtle coordinates.

    Straight segments keep their exact endpoints; curves are sampled every
    ``tolerance`` units along their length.
    """

    points: List[XY] = []
    for seg in path:
        if isinstance(seg, Line):
            pts = [seg.start, seg.end]
        else:
            length = max(seg.length(), tolerance)
            steps = max(int(length / max(tolerance, 1e-3)), 1)
            pts = [seg.point(i / steps) for i in range(steps + 1)]
        for z in pts:
            xy = _from_complex(z)
            if not points or points[-1] != xy:
                points.append(xy)
    return points


def drawing_from_svg(
    source: Union[str, Path, bytes], *, tolerance: float = 0.5
) -> Drawing:
    """Load an SVG file (path or raw bytes) into a :class:`Drawing`."""

    if isinstance(source, bytes):
        paths, attributes, _ = svg2paths2(io.BytesIO(source))
    else:
        paths, attributes, _ = svg2paths2(str(source))
    drawing = Drawing()
    for path_obj, attr in zip(paths, attributes):
        color = attr.get("stroke") or DEFAULT_COLOR
        if color == "none":
            color = DEFAULT_COLOR
        pts = sample_path(path_obj, tolerance)
        for a, b in zip(pts, pts[1:]):
            drawing.add(Segment(start=a, end=b, color=color))
    return drawing


__all__ = ["drawing_paths", "drawing_to_svg", "write_svg", "sample_path", "drawing_from_svg"]
