"""
======================== ÍNDICE / INDEX ========================
1. Descripción general / Overview
2. Componentes principales / Main components

======================== ESPAÑOL ========================
Archivo: `src/rulescope/core/catalog.py`.
Agrega reglas normalizadas en el catálogo ordenado.

Componentes detectados:
  - Catalog
  - build_catalog
  - find_duplicate_ids

======================== ENGLISH ========================
File: `src/rulescope/core/catalog.py`.
Aggregates normalized rules into the ordered catalog.

Detected components:
  - Catalog
  - build_catalog
  - find_duplicate_ids
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

import structlog

from rulescope.core.models import Rule
from rulescope.logging import bind_context

logger = structlog.get_logger(__name__)

Catalog = Tuple[Rule, ...]


def find_duplicate_ids(rules: Iterable[Rule]) -> Dict[str, List[str]]:
    """Mapa id -> rutas de origen para ids repetidos.

    English: Map id -> source paths for ids seen more than once.
    """
    seen: Dict[str, List[str]] = {}
    for rule in rules:
        seen.setdefault(rule.id, []).append(rule.source_path)
    return {rule_id: paths for rule_id, paths in seen.items() if len(paths) > 1}


def build_catalog(rules: Iterable[Rule]) -> Catalog:
    """Construye el catálogo respetando el orden de descubrimiento.

    No deduplica: ambas reglas con el mismo id permanecen y cada repetición
    se registra.

    English: Build the catalog in discovery order. No deduplication is
    done; each repeated id is logged.
    """
    catalog: Catalog = tuple(rules)
    first_seen: Dict[str, str] = {}
    for rule in catalog:
        if rule.id in first_seen:
            bind_context(logger, source_path=rule.source_path, rule_id=rule.id).warning(
                "duplicate_rule_id", first_source=first_seen[rule.id]
            )
        else:
            first_seen[rule.id] = rule.source_path
    logger.info("catalog_built", total_rules=len(catalog), unique_ids=len(first_seen))
    return catalog
