"""
======================== ÍNDICE / INDEX ========================
1. Descripción general / Overview
2. Componentes principales / Main components
3. Notas de mantenimiento / Maintenance notes

======================== ESPAÑOL ========================
Archivo: `src/rulescope/pipeline.py`.
Pipeline por lotes: descubrimiento -> normalización -> catálogo ->
índice de facetas -> artefactos.

Componentes detectados:
  - PipelineResult
  - normalize_files
  - build_artifacts
  - run_pipeline

Notas:
- Un registro malformado se descarta y el lote continúa.
- La raíz de reglas ausente es el único error fatal; no se escribe nada.

======================== ENGLISH ========================
File: `src/rulescope/pipeline.py`.
Batch pipeline: discovery -> normalization -> catalog -> facet index ->
artifacts.

Detected components:
  - PipelineResult
  - normalize_files
  - build_artifacts
  - run_pipeline

Notes:
- A malformed record is dropped and the batch continues.
- A missing rules root is the only fatal error; nothing is written.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import structlog

from rulescope.core.catalog import Catalog, build_catalog
from rulescope.core.facets import build_facet_index
from rulescope.core.models import FacetIndex, Rule
from rulescope.core.normalize import load_rule_file
from rulescope.errors import RuleNormalizationError, RulesRootNotFoundError
from rulescope.logging import bind_context
from rulescope.paths import iter_rule_files
from rulescope.storage import save_artifacts

logger = structlog.get_logger(__name__)


@dataclass
class PipelineResult:
    """Resultado de una ejecución del pipeline.

    English: Result of one pipeline run.
    """

    catalog: Catalog
    index: FacetIndex
    discovered: int
    failures: List[RuleNormalizationError] = field(default_factory=list)
    rules_path: Optional[Path] = None
    index_path: Optional[Path] = None


def normalize_files(
    paths: Iterable[Path], rules_root: Path
) -> Tuple[List[Rule], List[RuleNormalizationError]]:
    """Normaliza cada archivo; los fallos se registran y se omiten.

    English: Normalize each file; failures are logged and skipped.
    """
    rules: List[Rule] = []
    failures: List[RuleNormalizationError] = []
    for path in paths:
        try:
            rules.append(load_rule_file(path, rules_root))
        except RuleNormalizationError as exc:
            failures.append(exc)
            bind_context(logger, source_path=exc.source_path).error(
                "rule_parse_failed",
                reason=exc.reason,
                error=str(exc.cause) if exc.cause else None,
            )
    return rules, failures


def build_artifacts(rules_dir: Path) -> PipelineResult:
    """Construye catálogo e índice en memoria sin escribir nada.

    English: Build the catalog and index in memory without writing.
    """
    if not rules_dir.is_dir():
        logger.critical("rules_root_missing", rules_dir=str(rules_dir))
        raise RulesRootNotFoundError(rules_dir)

    paths = iter_rule_files(rules_dir)
    log = bind_context(logger, rules_dir=rules_dir)
    log.info("rules_discovered", count=len(paths))
    if not paths:
        log.warning("rules_empty")

    rules, failures = normalize_files(paths, rules_dir)
    log.info("rules_parsed", parsed=len(rules), failed=len(failures))

    catalog = build_catalog(rules)
    index = build_facet_index(catalog)
    return PipelineResult(catalog=catalog, index=index, discovered=len(paths), failures=failures)


def run_pipeline(rules_dir: Path, output_dir: Path) -> PipelineResult:
    """Ejecuta el lote completo y persiste ambos artefactos.

    Raises:
        RulesRootNotFoundError: Si `rules_dir` no existe.

    English: Run the full batch and persist both artifacts.
    """
    result = build_artifacts(rules_dir)
    result.rules_path, result.index_path = save_artifacts(result.catalog, result.index, output_dir)
    bind_context(logger, output_dir=output_dir).info(
        "pipeline_done",
        total_rules=result.index.total_rules,
        unique_values=result.index.summary(),
    )
    return result
