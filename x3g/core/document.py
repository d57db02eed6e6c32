# File: x3g/core/document.py
# Project: X3D Geometria2D (X3G)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-19
# Purpose: Documento importado: raíz del grafo, registro DEF/USE y contenedor actual.
# Notes: Un solo pase secuencial; no es thread-safe (no hace falta).
from __future__ import annotations

import contextlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional

from x3g.core.models import GeometryElement, NodeElement, NodeKind
from x3g.core.registry import ReferenceRegistry
from x3g.core.settings import ImportSettings


@dataclass
class X3dDocument:
    settings: ImportSettings = field(default_factory=ImportSettings)
    root: NodeElement = field(default_factory=lambda: NodeElement(kind=NodeKind.ROOT))
    registry: ReferenceRegistry = field(default_factory=ReferenceRegistry)

    # Runtime
    source_path: Optional[Path] = None
    _stack: list[NodeElement] = field(default_factory=list, repr=False)

    # ----------------------------
    # Contenedor actual
    # ----------------------------
    def current_container(self) -> NodeElement:
        return self._stack[-1] if self._stack else self.root

    @contextlib.contextmanager
    def open_container(self, element: NodeElement) -> Iterator[NodeElement]:
        """Hace de `element` el contenedor actual mientras dure el bloque."""
        self._stack.append(element)
        try:
            yield element
        finally:
            self._stack.pop()

    def attach(self, element: NodeElement) -> None:
        """Cuelga `element` del contenedor actual (transfiere ownership)."""
        parent = self.current_container()
        element.parent = parent
        parent.add_child(element)

    # ----------------------------
    # Consultas
    # ----------------------------
    @property
    def elements(self) -> list[NodeElement]:
        """Lista plana (no-dueña) de todo elemento construido, en orden de lectura."""
        return self.registry.elements

    def geometry(self) -> list[GeometryElement]:
        return [e for e in self.registry.elements if isinstance(e, GeometryElement)]

    def find(self, identifier: str) -> NodeElement | None:
        return self.registry.lookup(identifier)
