"""
======================== ÍNDICE / INDEX ========================
1. Descripción general / Overview
2. Componentes principales / Main components
3. Notas de mantenimiento / Maintenance notes

======================== ESPAÑOL ========================
Archivo: `src/rulescope/core/normalize.py`.
Convierte un documento YAML de regla en una `Rule` inmutable. Los campos
desconocidos se descartan; los ausentes quedan como None.

Componentes detectados:
  - RawRuleRecord
  - default_rule_id
  - relative_source_path
  - normalize_record
  - load_rule_file

Notas:
- Mantener esta cabecera sincronizada con cambios estructurales del archivo.

======================== ENGLISH ========================
File: `src/rulescope/core/normalize.py`.
Turns a YAML rule document into an immutable `Rule`. Unknown fields are
dropped; missing ones stay None.

Detected components:
  - RawRuleRecord
  - default_rule_id
  - relative_source_path
  - normalize_record
  - load_rule_file

Notes:
- Keep this header in sync with structural changes in the file.
"""

from __future__ import annotations

import datetime as dt
from pathlib import Path, PurePath
from typing import Any, List, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from rulescope.core.models import FILTER_FIELDS, Rule
from rulescope.errors import RuleNormalizationError

_SCALAR_TYPES = (str, int, float, bool)


def _scalar_to_text(value: Any) -> Any:
    """Convierte escalares YAML (números, fechas) a texto.

    English: Convert YAML scalars (numbers, dates) to text. Other shapes are
    returned untouched.
    """
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    if isinstance(value, _SCALAR_TYPES) and not isinstance(value, str):
        return str(value).lower() if isinstance(value, bool) else str(value)
    return value


def _is_scalar(value: Any) -> bool:
    return isinstance(value, _SCALAR_TYPES + (dt.date,))


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class RawRuleRecord(BaseModel):
    """/** Campos reconocidos de un registro crudo, todos opcionales.

    Ningún campo rechaza el registro por su forma: los valores de faceta
    pueden ser uno o varios, y los elementos inutilizables se descartan.

    / Recognized fields of a raw record, all optional. No field rejects the
    record for its shape: facet values may be one or many, and unusable
    elements are skipped. **/"""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    domain: Optional[Union[str, List[str]]] = None
    type: Optional[Union[str, List[str]]] = None
    language: Optional[Union[str, List[str]]] = None
    severity: Optional[Union[str, List[str]]] = None
    os: Optional[Union[str, List[str]]] = None
    use_cases: Optional[Union[str, List[str]]] = None
    tactics: Optional[Union[str, List[str]]] = None
    data_sources: Optional[Union[str, List[str]]] = None
    created: Optional[str] = None
    updated: Optional[str] = None
    query: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # A structured id cannot name a rule; the filename is used instead.
        if not _is_scalar(value):
            return None
        return _blank_to_none(_scalar_to_text(value))

    @field_validator("name", "description", "created", "updated", "query", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        """Texto vacío equivale a ausente; valores estructurados se guardan
        como su texto YAML.

        English: Empty text counts as absent; structured values are kept as
        their YAML text.
        """
        if value is None:
            return None
        if not _is_scalar(value):
            return yaml.safe_dump(value, sort_keys=False, default_flow_style=None).strip()
        return _blank_to_none(_scalar_to_text(value))

    @field_validator(*FILTER_FIELDS, mode="before")
    @classmethod
    def _coerce_facet(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [_scalar_to_text(item) for item in value if _is_scalar(item)]
        if not _is_scalar(value):
            return None
        return _blank_to_none(_scalar_to_text(value))


def default_rule_id(source_path: Union[str, PurePath]) -> str:
    """Nombre de archivo sin extensión. / Filename with its extension stripped."""
    return PurePath(source_path).stem


def relative_source_path(path: Path, rules_root: Optional[Path]) -> str:
    """Ruta POSIX relativa a la raíz de reglas (o el nombre si no aplica).

    English: POSIX path relative to the rules root (or the path itself when
    it is outside the root).
    """
    if rules_root is None:
        return path.as_posix()
    try:
        return path.relative_to(rules_root).as_posix()
    except ValueError:
        return path.as_posix()


def normalize_record(raw: Any, source_path: str) -> Rule:
    """Normaliza un registro crudo en una `Rule`.

    Args:
        raw: Documento YAML ya parseado.
        source_path: Ubicación de origen relativa a la raíz de reglas.

    Raises:
        RuleNormalizationError: Si el documento no es un mapa.

    English:
        Normalize a raw record into a `Rule`. The identifier always falls
        back to the source filename, so every mapping yields a rule; field
        shapes never reject it.
    """
    if not isinstance(raw, Mapping):
        kind = "empty document" if raw is None else type(raw).__name__
        raise RuleNormalizationError(source_path, f"expected a mapping, got {kind}")

    try:
        record = RawRuleRecord.model_validate(dict(raw))
    except ValidationError as exc:
        raise RuleNormalizationError(source_path, "invalid field shape", exc) from exc

    data = record.model_dump()
    for name in FILTER_FIELDS:
        if isinstance(data[name], list):
            data[name] = tuple(data[name])
    data["id"] = data["id"] or default_rule_id(source_path)
    if not data["id"]:
        raise RuleNormalizationError(source_path, "cannot derive a rule id")
    return Rule(source_path=source_path, **data)


def load_rule_file(path: Path, rules_root: Optional[Path] = None) -> Rule:
    """Lee, parsea y normaliza un archivo YAML de regla.

    English: Read, parse and normalize one YAML rule file.
    """
    source_path = relative_source_path(path, rules_root)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise RuleNormalizationError(source_path, "unreadable file", exc) from exc
    try:
        raw = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise RuleNormalizationError(source_path, "YAML syntax error", exc) from exc
    return normalize_record(raw, source_path)
