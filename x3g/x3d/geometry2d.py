# File: x3g/x3d/geometry2d.py
# Project: X3D Geometria2D (X3G)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-19
# Purpose: Lectores de la familia Geometry2D (Arc2D ... TriangleSet2D).
# Notes:
# - Un solo procedimiento (read_geometry2d) + un builder por tipo.
# - USE: se devuelve el elemento existente, sin decodificar nada más.
# - Validación antes de registrar/colgar: un error no deja elementos a medias.
from __future__ import annotations

import math
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Callable

from x3g.core.document import X3dDocument
from x3g.core.models import GeometryElement, GeometryKind, Vertex
from x3g.core.settings import ImportSettings
from x3g.geom.tessellation import (
    ANGLE_EPS,
    TWO_PI,
    build_annular_quad_strip,
    is_full_circle,
    lift_points,
    points_to_line_list,
    rectangle_corners,
    sample_arc,
)
from x3g.utils.errors import X3gAttributeValueError, X3gError, X3gStructureError
from x3g.utils.log import get_logger
from x3g.x3d.attributes import (
    check_define_or_use,
    get_bool_attribute,
    get_float_attribute,
    get_point_list_attribute,
    get_string_attribute,
    get_vec2_attribute,
    unquote_token,
)
from x3g.x3d.metadata import attach_metadata_children, has_metadata_children

log = get_logger(__name__)

HALF_PI = math.pi / 2.0

CLOSURE_PIE = "PIE"
CLOSURE_CHORD = "CHORD"
CLOSURE_TYPES = (CLOSURE_PIE, CLOSURE_CHORD)


@dataclass(frozen=True)
class BuiltGeometry:
    vertices: list[Vertex]
    primitive_arity: int
    solid: bool = False


Builder = Callable[[ET.Element, ImportSettings], BuiltGeometry]


# ----------------------------
# Procedimiento común
# ----------------------------

def read_geometry2d(doc: X3dDocument, node: ET.Element, kind: GeometryKind) -> GeometryElement:
    """Lee un tag Geometry2D y devuelve el elemento (nuevo o reusado por USE)."""
    tag = kind.value
    define, use = check_define_or_use(node)
    if use:
        el = doc.registry.resolve(use, kind)
        log.debug("<%s USE=%r> reusa elemento existente", tag, use)
        return el  # type: ignore[return-value]

    try:
        built = BUILDERS[kind](node, doc.settings)
    except X3gStructureError as e:
        raise X3gStructureError(f"<{tag}>: {e}") from e
    _check_arity(tag, built)

    el = GeometryElement(
        kind=kind,
        parent=doc.current_container(),
        vertices=built.vertices,
        primitive_arity=built.primitive_arity,
        solid=built.solid,
    )
    mark = doc.registry.mark()
    doc.registry.define(define, el)

    # Metadata: se lee dentro del elemento y después se cuelga igual del contenedor.
    if has_metadata_children(node):
        try:
            attach_metadata_children(doc, node, el, tag)
        except X3gError:
            doc.registry.rollback(mark)
            raise
    doc.attach(el)
    doc.registry.track(el)

    log.debug(
        "<%s%s> %d vértices, aridad %d, solid=%s",
        tag,
        f" DEF={define!r}" if define else "",
        len(el.vertices),
        el.primitive_arity,
        el.solid,
    )
    return el


def _check_arity(tag: str, built: BuiltGeometry) -> None:
    n = len(built.vertices)
    arity = built.primitive_arity
    if arity == n:
        return
    if arity in (1, 2, 3, 4) and n % arity == 0:
        return
    raise X3gStructureError(f"<{tag}>: {n} vértices no son compatibles con aridad {arity}")


# ----------------------------
# Helpers de atributos
# ----------------------------

def _read_angle(node: ET.Element, tag: str, name: str, default: float) -> float:
    v = get_float_attribute(node, name, default)
    if not (-TWO_PI - ANGLE_EPS <= v <= TWO_PI + ANGLE_EPS):
        raise X3gAttributeValueError(tag, name, f"fuera de [-2pi, 2pi]: {v!r}")
    return v


def _read_radius(node: ET.Element, tag: str, name: str, default: float) -> float:
    v = get_float_attribute(node, name, default)
    if not v > 0.0:
        raise X3gAttributeValueError(tag, name, f"debe ser > 0: {v!r}")
    return v


# ----------------------------
# Builders
# ----------------------------

def _build_arc2d(node: ET.Element, settings: ImportSettings) -> BuiltGeometry:
    tag = GeometryKind.ARC2D.value
    end = _read_angle(node, tag, "endAngle", HALF_PI)
    radius = _read_radius(node, tag, "radius", 1.0)
    start = _read_angle(node, tag, "startAngle", 0.0)

    arc = sample_arc(start, end, radius, settings.arc_segments)
    return BuiltGeometry(points_to_line_list(arc), 2)


def _build_arc_close2d(node: ET.Element, settings: ImportSettings) -> BuiltGeometry:
    tag = GeometryKind.ARC_CLOSE2D.value
    closure = get_string_attribute(node, "closureType", CLOSURE_PIE)
    end = _read_angle(node, tag, "endAngle", HALF_PI)
    radius = _read_radius(node, tag, "radius", 1.0)
    solid = get_bool_attribute(node, "solid", False)
    start = _read_angle(node, tag, "startAngle", 0.0)

    vertices = sample_arc(start, end, radius, settings.arc_segments)

    # Círculo completo: closureType se ignora.
    if not is_full_circle(start, end):
        closure = _normalize_closure(closure, tag, settings)
        if closure == CLOSURE_PIE:
            vertices.append((0.0, 0.0, 0.0))
        vertices.append(vertices[0])

    return BuiltGeometry(vertices, len(vertices), solid)


def _normalize_closure(raw: str, tag: str, settings: ImportSettings) -> str:
    if raw in CLOSURE_TYPES:
        return raw
    if settings.accept_quoted_tokens:
        token = unquote_token(raw)
        if token != raw and token in CLOSURE_TYPES:
            log.debug("<%s>: closureType entre comillas %r aceptado como %r", tag, raw, token)
            return token
    raise X3gAttributeValueError(tag, "closureType", f"se esperaba PIE o CHORD: {raw!r}")


def _build_circle2d(node: ET.Element, settings: ImportSettings) -> BuiltGeometry:
    radius = _read_radius(node, GeometryKind.CIRCLE2D.value, "radius", 1.0)
    circle = sample_arc(0.0, 0.0, radius, settings.arc_segments)
    return BuiltGeometry(points_to_line_list(circle), 2)


def _build_disk2d(node: ET.Element, settings: ImportSettings) -> BuiltGeometry:
    tag = GeometryKind.DISK2D.value
    inner_radius = get_float_attribute(node, "innerRadius", 0.0)
    outer_radius = _read_radius(node, tag, "outerRadius", 1.0)
    solid = get_bool_attribute(node, "solid", False)

    if inner_radius > outer_radius:
        raise X3gAttributeValueError(
            tag, "innerRadius", f"innerRadius={inner_radius!r} > outerRadius={outer_radius!r}"
        )
    if inner_radius < 0.0:
        raise X3gAttributeValueError(tag, "innerRadius", f"debe ser >= 0: {inner_radius!r}")

    outer = sample_arc(0.0, 0.0, outer_radius, settings.arc_segments)
    if inner_radius == 0.0:
        # Disco lleno: el contorno exterior es un único polígono.
        return BuiltGeometry(outer, len(outer), solid)
    if inner_radius == outer_radius:
        # Anillo de ancho cero: solo el contorno.
        return BuiltGeometry(points_to_line_list(outer), 2, solid)

    inner = sample_arc(0.0, 0.0, inner_radius, settings.arc_segments)
    return BuiltGeometry(build_annular_quad_strip(inner, outer), 4, solid)


def _build_polyline2d(node: ET.Element, settings: ImportSettings) -> BuiltGeometry:
    points = lift_points(get_point_list_attribute(node, "lineSegments"))
    if not points:
        return BuiltGeometry([], 2)
    return BuiltGeometry(points_to_line_list(points), 2)


def _build_polypoint2d(node: ET.Element, settings: ImportSettings) -> BuiltGeometry:
    return BuiltGeometry(lift_points(get_point_list_attribute(node, "point")), 1)


def _build_rectangle2d(node: ET.Element, settings: ImportSettings) -> BuiltGeometry:
    size_x, size_y = get_vec2_attribute(node, "size", (2.0, 2.0))
    solid = get_bool_attribute(node, "solid", False)
    return BuiltGeometry(rectangle_corners(size_x, size_y), 4, solid)


def _build_triangle_set2d(node: ET.Element, settings: ImportSettings) -> BuiltGeometry:
    tag = GeometryKind.TRIANGLE_SET2D.value
    points = get_point_list_attribute(node, "vertices")
    solid = get_bool_attribute(node, "solid", False)
    if len(points) % 3:
        raise X3gAttributeValueError(
            tag, "vertices", f"{len(points)} puntos no alcanzan para triángulos completos"
        )
    return BuiltGeometry(lift_points(points), 3, solid)


BUILDERS: dict[GeometryKind, Builder] = {
    GeometryKind.ARC2D: _build_arc2d,
    GeometryKind.ARC_CLOSE2D: _build_arc_close2d,
    GeometryKind.CIRCLE2D: _build_circle2d,
    GeometryKind.DISK2D: _build_disk2d,
    GeometryKind.POLYLINE2D: _build_polyline2d,
    GeometryKind.POLYPOINT2D: _build_polypoint2d,
    GeometryKind.RECTANGLE2D: _build_rectangle2d,
    GeometryKind.TRIANGLE_SET2D: _build_triangle_set2d,
}


# ----------------------------
# Entradas por tipo (una por tag)
# ----------------------------

def read_arc2d(doc: X3dDocument, node: ET.Element) -> GeometryElement:
    return read_geometry2d(doc, node, GeometryKind.ARC2D)


def read_arc_close2d(doc: X3dDocument, node: ET.Element) -> GeometryElement:
    return read_geometry2d(doc, node, GeometryKind.ARC_CLOSE2D)


def read_circle2d(doc: X3dDocument, node: ET.Element) -> GeometryElement:
    return read_geometry2d(doc, node, GeometryKind.CIRCLE2D)


def read_disk2d(doc: X3dDocument, node: ET.Element) -> GeometryElement:
    return read_geometry2d(doc, node, GeometryKind.DISK2D)


def read_polyline2d(doc: X3dDocument, node: ET.Element) -> GeometryElement:
    return read_geometry2d(doc, node, GeometryKind.POLYLINE2D)


def read_polypoint2d(doc: X3dDocument, node: ET.Element) -> GeometryElement:
    return read_geometry2d(doc, node, GeometryKind.POLYPOINT2D)


def read_rectangle2d(doc: X3dDocument, node: ET.Element) -> GeometryElement:
    return read_geometry2d(doc, node, GeometryKind.RECTANGLE2D)


def read_triangle_set2d(doc: X3dDocument, node: ET.Element) -> GeometryElement:
    return read_geometry2d(doc, node, GeometryKind.TRIANGLE_SET2D)
