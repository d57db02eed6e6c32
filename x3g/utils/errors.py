# File: x3g/utils/errors.py
# Project: X3D Geometria2D (X3G)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-19
# Purpose: Errores tipados del importador.
# Notes: Todos abortan el import completo; no hay reintentos.
from __future__ import annotations


class X3gError(Exception):
    """Error base del proyecto."""


class X3gValidationError(X3gError):
    """Error de validación (documento/estructura/valores)."""


class X3gIOError(X3gError):
    """Error de E/S (lectura/escritura)."""


class X3gReferenceError(X3gValidationError):
    """Error de referencia DEF/USE."""

    def __init__(self, message: str, *, identifier: str | None = None) -> None:
        super().__init__(message)
        self.identifier = identifier


class X3gMissingReferenceError(X3gReferenceError):
    """USE apunta a un DEF que no existe (o que todavía no se leyó)."""


class X3gKindMismatchError(X3gReferenceError):
    """USE apunta a un elemento de otro tipo."""


class X3gDuplicateDefinitionError(X3gReferenceError):
    """DEF repetido dentro del mismo documento."""


class X3gAttributeValueError(X3gValidationError):
    """Valor de atributo inválido (o input mal formado) en un tag."""

    def __init__(self, tag: str, attribute: str, detail: str | None = None) -> None:
        msg = f"<{tag}>: valor inválido en atributo {attribute!r}"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)
        self.tag = tag
        self.attribute = attribute


class X3gStructureError(X3gValidationError):
    """Puntos insuficientes o listas incompatibles para construir primitivas."""
