# File: x3g/x3d/importer.py
# Project: X3D Geometria2D (X3G)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-19
# Purpose: Carga de archivos .x3d (XML) y recorrido del árbol hacia los lectores Geometry2D.
# Notes:
# - Los grupos (Group/Transform/Shape/...) se modelan como contenedores planos: sin transform.
# - Tags no soportados se saltean, pero su subárbol se sigue recorriendo.
from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Callable, Optional

from x3g.core.document import X3dDocument
from x3g.core.models import GeometryElement, GeometryKind, GroupElement, NodeKind
from x3g.core.settings import ImportSettings
from x3g.utils.errors import X3gIOError, X3gValidationError
from x3g.utils.log import get_logger
from x3g.x3d import geometry2d
from x3g.x3d.attributes import check_define_or_use, tag_name
from x3g.x3d.metadata import read_metadata_node

log = get_logger(__name__)

Reader = Callable[[X3dDocument, ET.Element], GeometryElement]

GEOMETRY_READERS: dict[str, Reader] = {
    GeometryKind.ARC2D.value: geometry2d.read_arc2d,
    GeometryKind.ARC_CLOSE2D.value: geometry2d.read_arc_close2d,
    GeometryKind.CIRCLE2D.value: geometry2d.read_circle2d,
    GeometryKind.DISK2D.value: geometry2d.read_disk2d,
    GeometryKind.POLYLINE2D.value: geometry2d.read_polyline2d,
    GeometryKind.POLYPOINT2D.value: geometry2d.read_polypoint2d,
    GeometryKind.RECTANGLE2D.value: geometry2d.read_rectangle2d,
    GeometryKind.TRIANGLE_SET2D.value: geometry2d.read_triangle_set2d,
}

# Nodos de agrupamiento: se abren como contenedor (sin semántica de transform).
GROUPING_TAGS = frozenset(
    (
        "Scene",
        "Group",
        "StaticGroup",
        "Transform",
        "Shape",
        "Switch",
        "Collision",
        "Anchor",
        "Billboard",
        "LOD",
    )
)

# Nodos que no aportan nada al grafo y no se recorren.
SKIPPED_TAGS = frozenset(("head", "meta", "component", "unit", "ProtoDeclare", "ExternProtoDeclare"))


def load_x3d(path: str | Path, settings: Optional[ImportSettings] = None) -> X3dDocument:
    """Lee un .x3d y devuelve el documento con el grafo ya construido."""
    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        # fallback común en Windows
        raw = p.read_text(encoding="utf-8-sig", errors="replace")
    except OSError as e:
        raise X3gIOError(f"No se pudo leer X3D: {p}") from e

    doc = parse_x3d_string(raw, settings, source=p)
    return doc


def parse_x3d_string(
    text: str,
    settings: Optional[ImportSettings] = None,
    *,
    source: Optional[Path] = None,
) -> X3dDocument:
    where = str(source) if source else "<string>"
    try:
        root = ET.fromstring(text.lstrip("\ufeff"))
    except ET.ParseError as e:
        raise X3gValidationError(f"X3D inválido (XML malformado): {where}") from e

    if tag_name(root) != "X3D":
        raise X3gValidationError(f"Archivo no parece X3D (root={root.tag!r}): {where}")

    doc = X3dDocument(settings=settings or ImportSettings())
    doc.source_path = source
    X3dImporter(doc).walk_children(root)

    log.info(
        "X3D importado: %s -> %d elementos (%d geometrías 2D, %d DEF)",
        where,
        len(doc.elements),
        len(doc.geometry()),
        len(doc.registry),
    )
    return doc


class X3dImporter:
    """Recorrido depth-first: despacha cada tag al lector correspondiente."""

    def __init__(self, doc: X3dDocument) -> None:
        self.doc = doc

    def walk_children(self, node: ET.Element) -> None:
        for child in node:
            self.read_node(child)

    def read_node(self, node: ET.Element) -> None:
        if not isinstance(node.tag, str):
            # comentarios / processing instructions
            return
        name = tag_name(node)

        reader = GEOMETRY_READERS.get(name)
        if reader is not None:
            reader(self.doc, node)
            return

        if name in GROUPING_TAGS:
            self._read_group(node, name)
            return

        if read_metadata_node(self.doc, node):
            return

        if name in SKIPPED_TAGS:
            return

        log.debug("Tag no soportado <%s> (se recorre su contenido)", name)
        self.walk_children(node)

    def _read_group(self, node: ET.Element, name: str) -> None:
        define, use = check_define_or_use(node)
        if use:
            # Un grupo reusado no agrega nada nuevo: sus hijos ya están en el grafo.
            self.doc.registry.resolve(use, NodeKind.GROUP, name)
            return

        group = GroupElement(kind=NodeKind.GROUP, parent=self.doc.current_container(), tag=name)
        self.doc.registry.define(define, group)
        self.doc.attach(group)
        self.doc.registry.track(group)
        log.debug("<%s> abre grupo%s", name, f" DEF={define!r}" if define else "")

        with self.doc.open_container(group):
            self.walk_children(node)
