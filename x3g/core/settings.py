# File: x3g/core/settings.py
# Project: X3D Geometria2D (X3G)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-19
# Purpose: Settings del import (JSON repo-local + overrides por variables de entorno).
# Notes: Tolerante a errores: un valor inválido se ignora (WARN) y queda el default.
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping

from x3g.core.version import DEFAULT_ARC_SEGMENTS, MAX_ARC_SEGMENTS, MIN_ARC_SEGMENTS
from x3g.utils.log import get_logger

log = get_logger(__name__)


# ------------------------------
# Project settings (repo-local)
# ------------------------------
# Archivo esperado: x3g_settings.json en el CWD o en un padre.
PROJECT_SETTINGS_FILENAME = "x3g_settings.json"

ENV_ARC_SEGMENTS = "X3G_ARC_SEGMENTS"
ENV_ACCEPT_QUOTED_TOKENS = "X3G_ACCEPT_QUOTED_TOKENS"

_TRUE_STRINGS = ("1", "true", "yes", "on")
_FALSE_STRINGS = ("0", "false", "no", "off")


def find_project_settings_path(start: Path | None = None) -> Path | None:
    """Busca x3g_settings.json subiendo desde start (o CWD)."""
    start = (start or Path.cwd()).resolve()
    for p in (start, *start.parents):
        candidate = p / PROJECT_SETTINGS_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_project_settings(start: Path | None = None, *, logger: logging.Logger | None = None) -> Dict[str, Any]:
    """Carga el JSON de project settings. Devuelve {} si no existe o es inválido."""
    _log = logger or log
    p = find_project_settings_path(start)
    if not p:
        return {}
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        _log.warning("No se pudo leer %s: %s", p, e)
        return {}
    if not isinstance(data, dict):
        _log.warning("Settings ignorados (%s): la raíz no es objeto JSON", p)
        return {}
    return data


def _deep_get(d: Dict[str, Any], path: str, default: Any = None) -> Any:
    cur: Any = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


@dataclass(frozen=True)
class ImportSettings:
    """Parámetros del import.

    - arc_segments: densidad de teselado de arcos/círculos (segmentos por arco).
    - accept_quoted_tokens: acepta tokens SFString entre comillas
      (ej. closureType='"PIE"') además del token pelado.
    """

    arc_segments: int = DEFAULT_ARC_SEGMENTS
    accept_quoted_tokens: bool = True

    @classmethod
    def load(
        cls,
        start: Path | None = None,
        *,
        environ: Mapping[str, str] | None = None,
        logger: logging.Logger | None = None,
    ) -> "ImportSettings":
        """Defaults -> x3g_settings.json -> variables de entorno (gana la última)."""
        _log = logger or log
        env = os.environ if environ is None else environ
        data = load_project_settings(start, logger=_log)

        out = cls()
        applied: Dict[str, Any] = {}

        seg = _coerce_segments(_deep_get(data, "tessellation.arc_segments"), _log)
        if seg is not None:
            out = replace(out, arc_segments=seg)
            applied["tessellation.arc_segments"] = seg

        quoted = _coerce_bool(_deep_get(data, "parser.accept_quoted_tokens"))
        if quoted is not None:
            out = replace(out, accept_quoted_tokens=quoted)
            applied["parser.accept_quoted_tokens"] = quoted

        raw_seg = env.get(ENV_ARC_SEGMENTS)
        if raw_seg:
            seg = _coerce_segments(raw_seg, _log)
            if seg is not None:
                out = replace(out, arc_segments=seg)
                applied[ENV_ARC_SEGMENTS] = seg

        raw_quoted = env.get(ENV_ACCEPT_QUOTED_TOKENS)
        if raw_quoted:
            quoted = _coerce_bool(raw_quoted)
            if quoted is None:
                _log.warning("%s inválido: %r (se ignora)", ENV_ACCEPT_QUOTED_TOKENS, raw_quoted)
            else:
                out = replace(out, accept_quoted_tokens=quoted)
                applied[ENV_ACCEPT_QUOTED_TOKENS] = quoted

        if applied:
            _log.info("Settings aplicados: %s", applied)
        return out


def _coerce_segments(v: Any, logger: logging.Logger) -> int | None:
    if v is None or isinstance(v, bool):
        return None
    try:
        n = int(str(v).strip())
    except ValueError:
        logger.warning("arc_segments inválido: %r (se ignora)", v)
        return None
    if n < MIN_ARC_SEGMENTS:
        return MIN_ARC_SEGMENTS
    if n > MAX_ARC_SEGMENTS:
        return MAX_ARC_SEGMENTS
    return n


def _coerce_bool(v: Any) -> bool | None:
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        s = v.strip().lower()
        if s in _TRUE_STRINGS:
            return True
        if s in _FALSE_STRINGS:
            return False
    return None
