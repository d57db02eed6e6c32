# File: x3g/utils/log.py
# Project: X3D Geometria2D (X3G)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-19
# Purpose: Logging del paquete: logger "x3g" con consola + archivo opcional.
# Notes:
# - Todos los módulos piden su logger con get_logger(__name__).
# - Solo se configura el logger del paquete; el root queda para quien nos use como librería.
from __future__ import annotations

import logging
import os
from pathlib import Path

PACKAGE_LOGGER = "x3g"
LOG_FILENAME = "x3g.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_LOGGER_CONFIGURED = False


def setup_logging(
    log_dir: str | os.PathLike | None = None,
    level: int = logging.INFO,
) -> logging.Logger:
    """Configura el logger del paquete (consola y, si hay `log_dir`, x3g.log).

    Idempotente: una segunda llamada solo ajusta el nivel.
    Si el archivo no se puede abrir, queda solo consola (WARN).
    """
    global _LOGGER_CONFIGURED
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    if _LOGGER_CONFIGURED:
        return logger

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    if log_dir is not None:
        d = Path(log_dir)
        try:
            d.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(d / LOG_FILENAME, encoding="utf-8")
        except OSError as e:
            logger.warning("No se pudo abrir %s en %s: %s", LOG_FILENAME, d, e)
        else:
            fh.setFormatter(fmt)
            logger.addHandler(fh)

    _LOGGER_CONFIGURED = True
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger hijo del paquete (`x3g.x3d.importer`, ...)."""
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
