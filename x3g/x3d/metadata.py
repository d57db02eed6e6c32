# File: x3g/x3d/metadata.py
# Project: X3D Geometria2D (X3G)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-19
# Purpose: Hijos Metadata* de un nodo (MetadataString/Float/Double/Integer/Boolean/Set).
# Notes: Solo se cuelgan como children del elemento; no tienen semántica geométrica.
from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import Any, Callable

from x3g.core.document import X3dDocument
from x3g.core.models import MetadataElement, NodeKind
from x3g.utils.errors import X3gAttributeValueError, X3gError
from x3g.utils.log import get_logger
from x3g.x3d.attributes import check_define_or_use, get_string_attribute, tag_name

log = get_logger(__name__)

_MFSTRING_RE = re.compile(r'"((?:[^"\\]|\\.)*)"')
_SEP_RE = re.compile(r"[\s,]+")


def _parse_mfstring(raw: str) -> list[str]:
    found = _MFSTRING_RE.findall(raw)
    if found:
        return [s.replace('\\"', '"').replace("\\\\", "\\") for s in found]
    s = raw.strip()
    return [s] if s else []


def _parse_numbers(raw: str, conv: Callable[[str], Any]) -> list[Any]:
    return [conv(p) for p in _SEP_RE.split(raw.strip()) if p]


def _parse_bool(s: str) -> bool:
    v = s.strip().lower()
    if v == "true":
        return True
    if v == "false":
        return False
    raise ValueError(s)


_VALUE_PARSERS: dict[str, Callable[[str], list[Any]]] = {
    "MetadataString": _parse_mfstring,
    "MetadataFloat": lambda raw: _parse_numbers(raw, float),
    "MetadataDouble": lambda raw: _parse_numbers(raw, float),
    "MetadataInteger": lambda raw: _parse_numbers(raw, int),
    "MetadataBoolean": lambda raw: _parse_numbers(raw, _parse_bool),
}

METADATA_TAGS = frozenset((*_VALUE_PARSERS, "MetadataSet"))


def has_metadata_children(node: ET.Element) -> bool:
    """True si el tag trae contenido anidado (se delega a la lectura de metadata)."""
    return len(node) > 0


def attach_metadata_children(doc: X3dDocument, node: ET.Element, element: Any, diag_name: str) -> None:
    """Lee los hijos de `node` como metadata de `element`.

    `diag_name` es el nombre del tag dueño, solo para mensajes/logs.
    Hijos que no son Metadata* se saltean con WARN.
    """
    with doc.open_container(element):
        for child in node:
            if not read_metadata_node(doc, child):
                log.warning("<%s>: hijo no soportado <%s> (se ignora)", diag_name, tag_name(child))


def read_metadata_node(doc: X3dDocument, node: ET.Element) -> bool:
    """Lee un nodo Metadata* en el contenedor actual. False si no es metadata."""
    tag = tag_name(node)
    if tag not in METADATA_TAGS:
        return False

    define, use = check_define_or_use(node)
    if use:
        # Referencia: se valida que exista y sea del mismo tag, pero no se duplica.
        doc.registry.resolve(use, NodeKind.METADATA, tag)
        return True

    values: list[Any] = []
    raw = node.attrib.get("value")
    if raw is not None and tag in _VALUE_PARSERS:
        try:
            values = _VALUE_PARSERS[tag](raw)
        except ValueError as e:
            raise X3gAttributeValueError(tag, "value", str(e)) from e

    md = MetadataElement(
        kind=NodeKind.METADATA,
        tag=tag,
        name=get_string_attribute(node, "name"),
        reference=get_string_attribute(node, "reference"),
        values=values,
    )

    mark = doc.registry.mark()
    doc.registry.define(define, md)
    if tag == "MetadataSet":
        try:
            attach_metadata_children(doc, node, md, tag)
        except X3gError:
            doc.registry.rollback(mark)
            raise

    doc.attach(md)
    doc.registry.track(md)
    return True
