"""Tessellation engine for the Geometry2D family.

Pure functions: no I/O, no DEF/USE, no logging. Every output point is a
3-tuple with z == 0; order is meaningful (winding / connectivity).

Conventions
- Angles are radians, measured from +X towards +Y (counter-clockwise).
- A "full circle" request is start == end (0/0 by convention) or a span
  wider than 2*pi; the loop is closed (last point == first point).
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from svgelements import Point

from x3g.core.version import DEFAULT_ARC_SEGMENTS
from x3g.utils.errors import X3gStructureError, X3gValidationError

Vertex = tuple[float, float, float]

TWO_PI = 2.0 * math.pi
# X3D files usually carry 6.283185 / 1.570796; accept the rounding.
ANGLE_EPS = 1e-5

_ORIGIN = Point(0.0, 0.0)


def is_full_circle(start_angle: float, end_angle: float) -> bool:
    """True when the sweep describes a complete circle (no closure lines)."""
    return start_angle == end_angle or abs(end_angle - start_angle) >= TWO_PI - ANGLE_EPS


def arc_span(start_angle: float, end_angle: float) -> float:
    if is_full_circle(start_angle, end_angle):
        return TWO_PI
    return abs(end_angle - start_angle)


def sample_arc(
    start_angle: float,
    end_angle: float,
    radius: float,
    segments: int = DEFAULT_ARC_SEGMENTS,
) -> list[Vertex]:
    """Return ``segments + 1`` points walking from ``start_angle`` on a circle
    of ``radius`` centred at the origin.

    start == end yields a closed loop instead of a zero-length arc.
    """
    if segments < 1:
        raise X3gValidationError(f"sample_arc: segments debe ser >= 1 (recibido {segments})")
    for name, angle in (("startAngle", start_angle), ("endAngle", end_angle)):
        if not (-TWO_PI - ANGLE_EPS <= angle <= TWO_PI + ANGLE_EPS):
            raise X3gValidationError(f"sample_arc: {name} fuera de [-2pi, 2pi]: {angle!r}")
    if not radius > 0.0:
        raise X3gValidationError(f"sample_arc: radius debe ser > 0 (recibido {radius!r})")

    span = arc_span(start_angle, end_angle)
    step = span / float(segments)

    out: list[Vertex] = []
    for i in range(segments + 1):
        p = Point.polar(_ORIGIN, start_angle + i * step, radius)
        out.append((float(p.x), float(p.y), 0.0))

    if span == TWO_PI:
        # Cierre exacto (evita el error de redondeo de cos/sin en 2*pi).
        out[-1] = out[0]
    return out


def points_to_line_list(points: Sequence[Vertex]) -> list[Vertex]:
    """Turn an ordered point set into a closed line list.

    One 2-vertex segment per point: p[i] -> p[i+1], and the last one wraps
    back to p[0]. Primitive arity of the result is 2.
    """
    n = len(points)
    if n < 2:
        raise X3gStructureError(f"Puntos insuficientes para lista de líneas: {n} (mínimo 2)")

    out: list[Vertex] = []
    for i in range(n):
        out.append(points[i])
        out.append(points[(i + 1) % n])
    return out


def build_annular_quad_strip(inner: Sequence[Vertex], outer: Sequence[Vertex]) -> list[Vertex]:
    """Quads between two concentric point loops (primitive arity 4).

    Quad i is (inner[i], outer[i], outer[i+1], inner[i+1]), wrapping at the
    end, counter-clockwise. Loops already closed by sample_arc (last point ==
    first point) lose the duplicate first, so the wrap quad is never degenerate.
    """
    inner = _open_loop(inner)
    outer = _open_loop(outer)
    if len(inner) < 2 or len(outer) < 2:
        raise X3gStructureError(
            f"Puntos insuficientes para lista de quads (inner={len(inner)}, outer={len(outer)})"
        )
    if len(inner) != len(outer):
        raise X3gStructureError(
            f"Listas de distinto tamaño para lista de quads (inner={len(inner)}, outer={len(outer)})"
        )

    n = len(inner)
    out: list[Vertex] = []
    for i in range(n):
        j = (i + 1) % n
        out.extend((inner[i], outer[i], outer[j], inner[j]))
    return out


def _open_loop(points: Sequence[Vertex]) -> Sequence[Vertex]:
    if len(points) > 1 and points[-1] == points[0]:
        return points[:-1]
    return points


def lift_points(points: Iterable[Sequence[float]]) -> list[Vertex]:
    """2-D points -> 3-D points on the z=0 plane, order preserved."""
    return [(float(p[0]), float(p[1]), 0.0) for p in points]


def rectangle_corners(size_x: float, size_y: float) -> list[Vertex]:
    """Corners of an origin-centred rectangle: (+x,-y), (+x,+y), (-x,+y), (-x,-y)."""
    x = size_x / 2.0
    y = size_y / 2.0
    return [(x, -y, 0.0), (x, y, 0.0), (-x, y, 0.0), (-x, -y, 0.0)]
