# File: x3g/core/registry.py
# Project: X3D Geometria2D (X3G)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-19
# Purpose: Registro DEF/USE + lista plana de elementos del documento.
# Notes: No es dueño de nada; el grafo (root/children) define el ciclo de vida.
from __future__ import annotations

from typing import Optional

from x3g.core.models import NodeElement
from x3g.utils.errors import (
    X3gDuplicateDefinitionError,
    X3gKindMismatchError,
    X3gMissingReferenceError,
)
from x3g.utils.log import get_logger

log = get_logger(__name__)


class ReferenceRegistry:
    """Mapa DEF -> elemento, y lista plana de todo elemento construido.

    - define(): registra un DEF nuevo. Un DEF repetido es error.
    - resolve(): busca un USE y verifica el tipo esperado.
    - track(): agrega un elemento nuevo a la lista plana (para búsquedas).
    """

    def __init__(self) -> None:
        self._by_id: dict[str, NodeElement] = {}
        self.elements: list[NodeElement] = []

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._by_id

    def __len__(self) -> int:
        return len(self._by_id)

    def define(self, identifier: Optional[str], element: NodeElement) -> None:
        # Sin DEF no se registra nada.
        if not identifier:
            return
        if identifier in self._by_id:
            raise X3gDuplicateDefinitionError(
                f"DEF duplicado: {identifier!r} (ya definido como <{self._by_id[identifier].kind_name}>)",
                identifier=identifier,
            )
        element.identifier = identifier
        self._by_id[identifier] = element
        log.debug("DEF %r -> <%s>", identifier, element.kind_name)

    def lookup(self, identifier: str) -> NodeElement | None:
        return self._by_id.get(identifier)

    def resolve(
        self,
        identifier: str,
        expected_kind: object,
        expected_tag: Optional[str] = None,
    ) -> NodeElement:
        """Devuelve el elemento existente (mismo objeto, sin copiar ni re-parentar).

        `expected_tag` afina el chequeo para tipos que comparten kind
        (MetadataString vs MetadataFloat, Group vs Transform).
        """
        el = self._by_id.get(identifier)
        if el is None:
            raise X3gMissingReferenceError(
                f"USE sin DEF previo: {identifier!r}", identifier=identifier
            )
        if el.kind != expected_kind:
            expected = str(getattr(expected_kind, "value", expected_kind))
            raise X3gKindMismatchError(
                f"USE {identifier!r}: se esperaba <{expected}> pero es <{el.kind_name}>",
                identifier=identifier,
            )
        if expected_tag is not None and getattr(el, "tag", None) != expected_tag:
            raise X3gKindMismatchError(
                f"USE {identifier!r}: se esperaba <{expected_tag}> pero es <{getattr(el, 'tag', el.kind_name)}>",
                identifier=identifier,
            )
        return el

    def track(self, element: NodeElement) -> None:
        self.elements.append(element)

    def mark(self) -> tuple[int, int]:
        """Punto de retorno para rollback(): (elementos, DEFs) registrados hasta ahora."""
        return len(self.elements), len(self._by_id)

    def rollback(self, mark: tuple[int, int]) -> None:
        """Descarta lo registrado/trackeado después de `mark` (lectura abortada)."""
        n_elements, n_ids = mark
        for identifier in list(self._by_id)[n_ids:]:
            del self._by_id[identifier]
            log.debug("DEF %r descartado (lectura abortada)", identifier)
        del self.elements[n_elements:]
