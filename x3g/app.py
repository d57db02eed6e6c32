# File: x3g/app.py
# Project: X3D Geometria2D (X3G)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-19
# Purpose: Entry-point CLI: importa un .x3d, muestra resumen y opcionalmente guarda JSON.
# Notes: Exit codes: 0 ok, 2 documento inválido, 3 error de E/S.
from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from typing import Optional, Sequence

from x3g.core.serialization import save_geometry_json
from x3g.core.settings import ImportSettings
from x3g.core.version import APP_SHORT, APP_VERSION, MAX_ARC_SEGMENTS, MIN_ARC_SEGMENTS
from x3g.utils.errors import X3gIOError, X3gValidationError
from x3g.utils.log import get_logger, setup_logging
from x3g.x3d.importer import load_x3d

log = get_logger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="x3g",
        description="Importa la familia Geometry2D de un archivo X3D y lista las primitivas.",
    )
    ap.add_argument("path", help="archivo .x3d")
    ap.add_argument("--json", dest="json_out", default=None, help="guardar dump JSON en este path")
    ap.add_argument(
        "--segments",
        type=int,
        default=None,
        help=f"segmentos por arco ({MIN_ARC_SEGMENTS}..{MAX_ARC_SEGMENTS}); pisa settings/env",
    )
    ap.add_argument("--log-dir", default=None, help="carpeta para x3g.log (default: solo consola)")
    ap.add_argument("--verbose", action="store_true")
    ap.add_argument("--version", action="version", version=f"{APP_SHORT} {APP_VERSION}")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(args.log_dir, level=logging.DEBUG if args.verbose else logging.INFO)

    settings = ImportSettings.load(logger=log)
    if args.segments is not None:
        seg = min(max(int(args.segments), MIN_ARC_SEGMENTS), MAX_ARC_SEGMENTS)
        settings = replace(settings, arc_segments=seg)

    try:
        doc = load_x3d(args.path, settings)
    except X3gValidationError as e:
        log.error("Import fallido: %s", e)
        return 2
    except X3gIOError as e:
        log.error("%s", e)
        return 3

    for g in doc.geometry():
        label = f" DEF={g.identifier}" if g.identifier else ""
        print(
            f"{g.kind_name}{label}: {len(g.vertices)} vértices, "
            f"aridad {g.primitive_arity}, {g.primitive_count()} primitivas, solid={str(g.solid).lower()}"
        )

    if args.json_out:
        try:
            out = save_geometry_json(doc, args.json_out)
        except X3gIOError as e:
            log.error("%s", e)
            return 3
        log.info("JSON guardado: %s", out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
