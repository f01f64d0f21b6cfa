"""
======================== ÍNDICE / INDEX ========================
1. Descripción general / Overview
2. Componentes principales / Main components
3. Notas de mantenimiento / Maintenance notes

======================== ESPAÑOL ========================
Archivo: `src/rulescope/paths.py`.
Este módulo forma parte de Rulescope y está documentado para facilitar
la navegación, mantenimiento y auditoría técnica.

Componentes detectados:
  - is_rule_file
  - iter_rule_files
  - rules_artifact_path
  - index_artifact_path

Notas:
- Mantener esta cabecera sincronizada con cambios estructurales del archivo.

======================== ENGLISH ========================
File: `src/rulescope/paths.py`.
This module is part of Rulescope and is documented to improve
navigation, maintenance, and technical auditability.

Detected components:
  - is_rule_file
  - iter_rule_files
  - rules_artifact_path
  - index_artifact_path

Notes:
- Keep this header in sync with structural changes in the file.
"""

from __future__ import annotations

from pathlib import Path
from typing import List


# Extensiones de archivos de regla reconocidas.
# Recognized rule file extensions.
RULE_SUFFIXES = (".yml", ".yaml")

# Nombres de los artefactos dentro del directorio de salida.
# Artifact names inside the output directory.
RULES_ARTIFACT = "rules.json"
INDEX_ARTIFACT = "index.json"


def is_rule_file(path: Path) -> bool:
    return path.is_file() and path.name.endswith(RULE_SUFFIXES)


def iter_rule_files(rules_dir: Path) -> List[Path]:
    """Descubre recursivamente archivos YAML de regla.

    El orden es determinista: entradas de cada directorio ordenadas por
    nombre, recorrido en profundidad.

    English:
        Recursively discover YAML rule files. Order is deterministic:
        entries of each directory sorted by name, depth-first.

    Ejemplo / Example:
        rules/alerts/susp_login.yml
        rules/network/dns_tunnel.yaml
    """
    results: List[Path] = []
    for entry in sorted(rules_dir.iterdir(), key=lambda p: p.name):
        if entry.is_dir():
            results.extend(iter_rule_files(entry))
        elif is_rule_file(entry):
            results.append(entry)
    return results


def rules_artifact_path(output_dir: Path) -> Path:
    """Ruta del artefacto de catálogo. / Catalog artifact path."""
    return output_dir / RULES_ARTIFACT


def index_artifact_path(output_dir: Path) -> Path:
    """Ruta del artefacto de índice. / Facet index artifact path."""
    return output_dir / INDEX_ARTIFACT
