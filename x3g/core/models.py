# File: x3g/core/models.py
# Project: X3D Geometria2D (X3G)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-19
# Purpose: Modelos del grafo de nodos (contenedores, geometría 2D, metadata).
# Notes: Un elemento pertenece a un solo padre; registry/lista plana no son dueños.
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

Vertex = tuple[float, float, float]


class GeometryKind(str, Enum):
    """Tipos de la familia Geometry2D (el valor es el nombre del tag X3D)."""

    ARC2D = "Arc2D"
    ARC_CLOSE2D = "ArcClose2D"
    CIRCLE2D = "Circle2D"
    DISK2D = "Disk2D"
    POLYLINE2D = "Polyline2D"
    POLYPOINT2D = "Polypoint2D"
    RECTANGLE2D = "Rectangle2D"
    TRIANGLE_SET2D = "TriangleSet2D"


class NodeKind(str, Enum):
    """Tipos de nodo que no son geometría."""

    ROOT = "Root"
    GROUP = "Group"
    METADATA = "Metadata"


@dataclass(eq=False)
class NodeElement:
    """Nodo base del grafo.

    `parent` es una referencia no-dueña; `children` sí es dueño.
    La igualdad es por identidad (un USE devuelve *el mismo* objeto).
    """

    kind: Any
    identifier: Optional[str] = None
    parent: Optional["NodeElement"] = field(default=None, repr=False)
    children: list["NodeElement"] = field(default_factory=list, repr=False)

    @property
    def kind_name(self) -> str:
        return str(getattr(self.kind, "value", self.kind))

    def add_child(self, child: "NodeElement") -> None:
        self.children.append(child)


@dataclass(eq=False)
class GeometryElement(NodeElement):
    """Primitiva Geometry2D ya teselada.

    - vertices: puntos (x, y, 0) en orden significativo.
    - primitive_arity: 1 puntos, 2 lista de líneas, 3 triángulos, 4 quads,
      o len(vertices) para un único polígono relleno.
    """

    vertices: list[Vertex] = field(default_factory=list)
    primitive_arity: int = 1
    solid: bool = False

    def primitive_count(self) -> int:
        if self.primitive_arity <= 0:
            return 0
        return len(self.vertices) // self.primitive_arity

    @property
    def metadata(self) -> list["MetadataElement"]:
        return [c for c in self.children if isinstance(c, MetadataElement)]


@dataclass(eq=False)
class MetadataElement(NodeElement):
    """Metadata* de X3D (MetadataString, MetadataFloat, ..., MetadataSet)."""

    tag: str = ""
    name: str = ""
    reference: str = ""
    values: list[Any] = field(default_factory=list)


@dataclass(eq=False)
class GroupElement(NodeElement):
    """Contenedor plano (Group, Transform, Shape, ...). `tag` es el nombre del tag X3D leído."""

    tag: str = "Group"
