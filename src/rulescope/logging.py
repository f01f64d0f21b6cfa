"""
======================== ÍNDICE / INDEX ========================
1. Descripción general / Overview
2. Componentes principales / Main components
3. Notas de mantenimiento / Maintenance notes

======================== ESPAÑOL ========================
Archivo: `src/rulescope/logging.py`.
Este módulo forma parte de Rulescope y está documentado para facilitar
la navegación, mantenimiento y auditoría técnica.

Componentes detectados:
  - setup_logging
  - bind_context

Notas:
- Mantener esta cabecera sincronizada con cambios estructurales del archivo.
- Priorizar claridad operativa y trazabilidad del comportamiento.

======================== ENGLISH ========================
File: `src/rulescope/logging.py`.
This module is part of Rulescope and is documented to improve
navigation, maintenance, and technical auditability.

Detected components:
  - setup_logging
  - bind_context

Notes:
- Keep this header in sync with structural changes in the file.
- Prioritize operational clarity and behavior traceability.
"""

from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, List, Optional

import structlog

# Archivo de log rotado a medianoche dentro de LOG_DIR.
# Log file rotated at midnight inside LOG_DIR.
LOG_FILENAME = "rulescope.log"
LOG_FORMATS = ("json", "console")


def _build_handlers(log_dir: Optional[Path]) -> List[logging.Handler]:
    """Consola siempre; archivo rotativo solo con `log_dir`.

    English: Console always; rotating file only when `log_dir` is given.
    """
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_dir is None:
        return handlers
    log_dir.mkdir(parents=True, exist_ok=True)
    handlers.append(
        TimedRotatingFileHandler(
            log_dir / LOG_FILENAME,
            when="midnight",
            backupCount=30,
            encoding="utf-8",
        )
    )
    return handlers


def setup_logging(
    log_level: str,
    log_dir: Optional[Path] = None,
    log_format: str = "json",
) -> structlog.BoundLogger:
    """Configura structlog sobre logging estándar.

    `json` emite una línea JSON por evento (para archivos y CI); `console`
    usa el renderizador legible de structlog para uso interactivo.

    English: Configure structlog on top of stdlib logging. `json` emits one
    JSON line per event; `console` uses structlog's human-readable renderer.
    """
    if log_format not in LOG_FORMATS:
        raise ValueError(f"unknown log format: {log_format}")
    level = logging.getLevelName(log_level.upper())

    logging.basicConfig(
        level=level,
        handlers=_build_handlers(log_dir),
        format="%(message)s",
        force=True,
    )

    renderer: Any = (
        structlog.processors.JSONRenderer()
        if log_format == "json"
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return structlog.get_logger("rulescope")


def bind_context(
    logger: structlog.BoundLogger,
    rules_dir: Optional[Path] = None,
    output_dir: Optional[Path] = None,
    source_path: Optional[str] = None,
    rule_id: Optional[str] = None,
) -> structlog.BoundLogger:
    """Adjunta el contexto de lote o de regla al logger.

    English: Bind batch or rule context to the logger.
    """
    context: dict[str, Any] = {}
    if rules_dir:
        context["rules_dir"] = str(rules_dir)
    if output_dir:
        context["output_dir"] = str(output_dir)
    if source_path:
        context["source_path"] = source_path
    if rule_id:
        context["rule_id"] = rule_id
    return logger.bind(**context)
