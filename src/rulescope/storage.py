"""Persistencia de los artefactos de catálogo e índice de facetas.

Persistence of the catalog and facet index artifacts.
"""

from __future__ import annotations

import json
import shutil
import tempfile
from pathlib import Path
from typing import Any, Tuple

import structlog

from rulescope.core.catalog import Catalog
from rulescope.core.models import FacetIndex, Rule
from rulescope.errors import ArtifactLoadError
from rulescope.paths import index_artifact_path, rules_artifact_path

logger = structlog.get_logger(__name__)


def write_atomic(path: Path, content: bytes) -> None:
    """Escritura atómica usando archivo temporal.

    English: Atomic write using a temporary file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(delete=False, dir=str(path.parent)) as tmp_file:
        tmp_file.write(content)
        temp_name = tmp_file.name
    shutil.move(temp_name, path)


def _dump_json(payload: Any) -> bytes:
    return json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")


def save_artifacts(catalog: Catalog, index: FacetIndex, output_dir: Path) -> Tuple[Path, Path]:
    """Escribe `rules.json` e `index.json`; campos ausentes se omiten.

    English: Write `rules.json` and `index.json`; absent fields are omitted.
    """
    rules_path = rules_artifact_path(output_dir)
    index_path = index_artifact_path(output_dir)
    write_atomic(rules_path, _dump_json([rule.to_dict() for rule in catalog]))
    write_atomic(index_path, _dump_json(index.to_dict()))
    logger.info(
        "artifacts_saved",
        rules_path=str(rules_path),
        index_path=str(index_path),
        total_rules=len(catalog),
    )
    return rules_path, index_path


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise ArtifactLoadError(path, "artifact not found")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ArtifactLoadError(path, f"unreadable artifact: {exc}") from exc


def load_catalog(path: Path) -> Catalog:
    """Carga el catálogo; null y omisión se tratan igual.

    English: Load the catalog; null and omission are treated alike.
    """
    payload = _read_json(path)
    if not isinstance(payload, list):
        raise ArtifactLoadError(path, "catalog artifact must be a list")
    try:
        return tuple(Rule.from_dict(entry) for entry in payload)
    except (TypeError, AttributeError) as exc:
        raise ArtifactLoadError(path, f"invalid rule entry: {exc}") from exc


def load_facet_index(path: Path) -> FacetIndex:
    payload = _read_json(path)
    if not isinstance(payload, dict):
        raise ArtifactLoadError(path, "index artifact must be an object")
    try:
        return FacetIndex.from_dict(payload)
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise ArtifactLoadError(path, f"invalid facet index: {exc}") from exc


def load_artifacts(data_dir: Path) -> Tuple[Catalog, FacetIndex]:
    """Carga ambos artefactos; falla si cualquiera falta o es inválido.

    English: Load both artifacts; fails if either is missing or invalid.
    """
    catalog = load_catalog(rules_artifact_path(data_dir))
    index = load_facet_index(index_artifact_path(data_dir))
    logger.info("artifacts_loaded", data_dir=str(data_dir), total_rules=len(catalog))
    return catalog, index
