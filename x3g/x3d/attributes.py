# File: x3g/x3d/attributes.py
# Project: X3D Geometria2D (X3G)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-19
# Purpose: Lectura tipada de atributos X3D (SFFloat, SFBool, SFString, SFVec2f, MFVec2f).
# Notes: Atributo ausente -> default del caller. Valor mal formado -> X3gAttributeValueError.
from __future__ import annotations

import math
import re
import xml.etree.ElementTree as ET
from typing import Optional, Sequence

from x3g.utils.errors import X3gAttributeValueError, X3gValidationError

Vec2 = tuple[float, float]

# X3D (encoding XML) separa números con espacios y/o comas.
_SEP_RE = re.compile(r"[\s,]+")


def tag_name(node: ET.Element) -> str:
    tag = node.tag if isinstance(node.tag, str) else ""
    if "}" in tag:
        return tag.split("}", 1)[1]
    return tag


def _split_numbers(raw: str) -> list[str]:
    return [p for p in _SEP_RE.split(raw.strip()) if p]


def _as_float(node: ET.Element, name: str, raw: str) -> float:
    try:
        v = float(raw)
    except ValueError as e:
        raise X3gAttributeValueError(tag_name(node), name, f"float: {raw!r}") from e
    # float() acepta nan/inf; X3D no.
    if not math.isfinite(v):
        raise X3gAttributeValueError(tag_name(node), name, f"valor no finito: {raw!r}")
    return v


def get_string_attribute(node: ET.Element, name: str, default: str = "") -> str:
    raw = node.attrib.get(name)
    if raw is None:
        return default
    return raw.strip()


def get_float_attribute(node: ET.Element, name: str, default: float) -> float:
    raw = node.attrib.get(name)
    if raw is None:
        return float(default)
    parts = _split_numbers(raw)
    if len(parts) != 1:
        raise X3gAttributeValueError(tag_name(node), name, f"se esperaba un SFFloat: {raw!r}")
    return _as_float(node, name, parts[0])


def get_bool_attribute(node: ET.Element, name: str, default: bool) -> bool:
    raw = node.attrib.get(name)
    if raw is None:
        return bool(default)
    s = raw.strip().lower()
    if s == "true":
        return True
    if s == "false":
        return False
    raise X3gAttributeValueError(tag_name(node), name, f"se esperaba true/false: {raw!r}")


def get_vec2_attribute(node: ET.Element, name: str, default: Vec2) -> Vec2:
    raw = node.attrib.get(name)
    if raw is None:
        return (float(default[0]), float(default[1]))
    parts = _split_numbers(raw)
    if len(parts) != 2:
        raise X3gAttributeValueError(tag_name(node), name, f"se esperaba un SFVec2f: {raw!r}")
    return (_as_float(node, name, parts[0]), _as_float(node, name, parts[1]))


def get_point_list_attribute(
    node: ET.Element,
    name: str,
    default: Optional[Sequence[Vec2]] = None,
) -> list[Vec2]:
    """MFVec2f -> lista de (x, y). La cantidad de números debe ser par."""
    raw = node.attrib.get(name)
    if raw is None:
        return [(float(x), float(y)) for x, y in (default or ())]
    parts = _split_numbers(raw)
    if len(parts) % 2:
        raise X3gAttributeValueError(
            tag_name(node), name, f"MFVec2f con cantidad impar de valores ({len(parts)})"
        )
    nums = [_as_float(node, name, p) for p in parts]
    return [(nums[i], nums[i + 1]) for i in range(0, len(nums), 2)]


def check_define_or_use(node: ET.Element) -> tuple[Optional[str], Optional[str]]:
    """Devuelve (DEF, USE). Vacíos -> None. DEF y USE juntos es error."""
    define = get_string_attribute(node, "DEF") or None
    use = get_string_attribute(node, "USE") or None
    if define and use:
        raise X3gValidationError(
            f"<{tag_name(node)}>: DEF={define!r} y USE={use!r} no pueden ir juntos"
        )
    return define, use


def unquote_token(value: str) -> str:
    """'"PIE"' -> 'PIE'. Tokens sin comillas se devuelven igual."""
    s = value.strip()
    if len(s) >= 2 and s[0] == s[-1] == '"':
        return s[1:-1].strip()
    return s
