# File: x3g/core/serialization.py
# Project: X3D Geometria2D (X3G)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-19
# Purpose: Dump JSON legible de la geometría importada.
# Notes: Solo salida (debug / pipeline); no hay carga de vuelta.
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from x3g.core.document import X3dDocument
from x3g.core.models import GeometryElement, MetadataElement, NodeElement
from x3g.core.version import APP_NAME, APP_VERSION
from x3g.utils.errors import X3gIOError


def geometry_to_dict(doc: X3dDocument) -> dict[str, Any]:
    """Documento -> dict JSON-friendly (geometrías en orden de lectura)."""
    return {
        "generator": f"{APP_NAME} {APP_VERSION}",
        "source": str(doc.source_path) if doc.source_path else None,
        "arc_segments": int(doc.settings.arc_segments),
        "geometry": [element_to_dict(g) for g in doc.geometry()],
    }


def element_to_dict(el: GeometryElement) -> dict[str, Any]:
    return {
        "kind": el.kind_name,
        "id": el.identifier,
        "parent": _parent_label(el.parent),
        "primitive_arity": int(el.primitive_arity),
        "solid": bool(el.solid),
        "vertices": [[float(x), float(y), float(z)] for x, y, z in el.vertices],
        "metadata": [_metadata_to_dict(m) for m in el.metadata],
    }


def _metadata_to_dict(md: MetadataElement) -> dict[str, Any]:
    d: dict[str, Any] = {"tag": md.tag, "name": md.name, "values": list(md.values)}
    if md.reference:
        d["reference"] = md.reference
    nested = [c for c in md.children if isinstance(c, MetadataElement)]
    if nested:
        d["children"] = [_metadata_to_dict(c) for c in nested]
    return d


def _parent_label(parent: NodeElement | None) -> str | None:
    if parent is None:
        return None
    if parent.identifier:
        return f"{parent.kind_name}:{parent.identifier}"
    return parent.kind_name


def save_geometry_json(doc: X3dDocument, path: str | Path) -> Path:
    """Guarda el dump JSON. Escribe de forma atómica (tmp + replace)."""
    p = Path(path)
    if p.suffix.lower() != ".json":
        p = p.with_suffix(".json")

    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        txt = json.dumps(geometry_to_dict(doc), ensure_ascii=False, indent=2)
        tmp = p.with_suffix(p.suffix + ".tmp")
        tmp.write_text(txt, encoding="utf-8")
        tmp.replace(p)
        return p
    except OSError as e:
        raise X3gIOError("No se pudo guardar JSON: {}".format(p)) from e
