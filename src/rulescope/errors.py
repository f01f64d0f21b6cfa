"""
======================== ÍNDICE / INDEX ========================
1. Descripción general / Overview
2. Componentes principales / Main components
3. Notas de mantenimiento / Maintenance notes

======================== ESPAÑOL ========================
Archivo: `src/rulescope/errors.py`.
Jerarquía de excepciones de Rulescope. Solo `RulesRootNotFoundError` y
`ArtifactLoadError` escapan al llamador; los fallos por registro se
recuperan localmente en el pipeline.

Componentes detectados:
  - RulescopeError
  - RuleNormalizationError
  - RulesRootNotFoundError
  - ArtifactLoadError

======================== ENGLISH ========================
File: `src/rulescope/errors.py`.
Rulescope exception hierarchy. Only `RulesRootNotFoundError` and
`ArtifactLoadError` escape to the caller; per-record failures are
recovered locally by the pipeline.

Detected components:
  - RulescopeError
  - RuleNormalizationError
  - RulesRootNotFoundError
  - ArtifactLoadError
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class RulescopeError(Exception):
    """Error base de Rulescope.

    English: Base Rulescope error.
    """


class RuleNormalizationError(RulescopeError):
    """Un registro de regla no pudo leerse o normalizarse.

    English: A rule record could not be read or normalized.
    """

    def __init__(self, source_path: str, reason: str, cause: Optional[BaseException] = None) -> None:
        self.source_path = source_path
        self.reason = reason
        self.cause = cause
        super().__init__(f"{source_path}: {reason}")


class RulesRootNotFoundError(RulescopeError):
    """El directorio raíz de reglas no existe.

    English: The rules root directory does not exist.
    """

    def __init__(self, rules_dir: Path) -> None:
        self.rules_dir = rules_dir
        super().__init__(
            f"Directorio de reglas no encontrado (Rules directory not found): {rules_dir}"
        )


class ArtifactLoadError(RulescopeError):
    """Un artefacto (catálogo o índice) falta o es inválido.

    English: An artifact (catalog or index) is missing or invalid.
    """

    def __init__(self, path: Optional[Path], reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}" if path else reason)
