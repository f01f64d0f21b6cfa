"""
======================== ÍNDICE / INDEX ========================
1. Descripción general / Overview
2. Componentes principales / Main components
3. Notas de mantenimiento / Maintenance notes

======================== ESPAÑOL ========================
Archivo: `src/rulescope/core/models.py`.
Modelos inmutables del catálogo de reglas de detección.

Componentes detectados:
  - FILTER_FIELDS
  - FacetValue
  - Rule
  - FacetCount
  - FacetIndex

======================== ENGLISH ========================
File: `src/rulescope/core/models.py`.
Immutable models for the detection rule catalog.

Detected components:
  - FILTER_FIELDS
  - FacetValue
  - Rule
  - FacetCount
  - FacetIndex
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, Union

# Campos filtrables, en el orden en que se publican en el índice.
# Filterable fields, in the order they are published in the index.
FILTER_FIELDS: Tuple[str, ...] = (
    "domain",
    "type",
    "os",
    "use_cases",
    "tactics",
    "data_sources",
    "language",
    "severity",
)

FieldValue = Union[str, Tuple[str, ...]]


@dataclass(frozen=True)
class FacetValue:
    """Valor de campo filtrable: uno o varios.

    Attributes:
        values (Tuple[str, ...]): Valores en orden de aparición.
        multi (bool): True si el origen era una secuencia.

    English:
        Filterable field value: one or many. `multi` records whether the
        source was a sequence; matching and counting do not depend on it.
    """

    values: Tuple[str, ...]
    multi: bool

    @classmethod
    def of(cls, raw: Optional[FieldValue]) -> Optional["FacetValue"]:
        if raw is None:
            return None
        if isinstance(raw, tuple):
            return cls(values=raw, multi=True)
        return cls(values=(raw,), multi=False)

    def distinct(self) -> Iterator[str]:
        """Valores que aportan al índice; un escalar vacío no aporta.

        English: Values contributing to the index; an empty scalar
        contributes nothing.
        """
        if self.multi:
            return iter(self.values)
        return (value for value in self.values if value)

    def matches(self, value: str) -> bool:
        """Igualdad escalar o pertenencia a la secuencia. / Scalar equality or sequence containment."""
        return value in self.values

    def matches_any(self, selected: Any) -> bool:
        return any(value in selected for value in self.values)


@dataclass(frozen=True)
class Rule:
    """Regla de detección normalizada.

    Attributes:
        id (str): Identificador no vacío.
        source_path (str): Ruta relativa a la raíz de reglas.
        name, description (Optional[str]): Texto buscable.
        domain, type, language, severity: Facetas, normalmente escalares.
        os, use_cases, tactics, data_sources: Facetas, normalmente
            multivaluadas. Cualquier faceta puede ser uno o varios valores;
            se conserva la forma recibida.
        created, updated, query (Optional[str]): Solo visualización.

    English:
        Normalized detection rule. Created once from a raw record and never
        mutated.
    """

    id: str
    source_path: str
    name: Optional[str] = None
    description: Optional[str] = None
    domain: Optional[FieldValue] = None
    type: Optional[FieldValue] = None
    language: Optional[FieldValue] = None
    severity: Optional[FieldValue] = None
    os: Optional[FieldValue] = None
    use_cases: Optional[FieldValue] = None
    tactics: Optional[FieldValue] = None
    data_sources: Optional[FieldValue] = None
    created: Optional[str] = None
    updated: Optional[str] = None
    query: Optional[str] = None

    def facet(self, field_name: str) -> Optional[FacetValue]:
        """Devuelve el campo filtrable como `FacetValue`.

        English: Return the filterable field as a `FacetValue`.
        """
        if field_name not in FILTER_FIELDS:
            raise KeyError(f"not a filterable field: {field_name}")
        return FacetValue.of(getattr(self, field_name))

    def searchable_text(self) -> str:
        return " ".join(part for part in (self.name, self.description, self.id) if part)

    def to_dict(self) -> Dict[str, Any]:
        """Serializa omitiendo campos ausentes. / Serialize, omitting absent fields."""
        payload: Dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if value is None:
                continue
            payload[item.name] = list(value) if isinstance(value, tuple) else value
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Rule":
        """Reconstruye una regla desde el artefacto JSON (null == ausente).

        English: Rebuild a rule from the JSON artifact (null == absent).
        """
        known = {item.name for item in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in payload.items():
            if key not in known or value is None:
                continue
            values[key] = tuple(value) if isinstance(value, list) else value
        return cls(**values)


@dataclass(frozen=True)
class FacetCount:
    value: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "count": self.count}


@dataclass(frozen=True)
class FacetIndex:
    """Índice de facetas precalculado sobre el catálogo completo.

    Attributes:
        total_rules (int): Tamaño del catálogo.
        filters (Dict[str, Tuple[FacetCount, ...]]): Valores ordenados y
            conteos por campo.

    English:
        Facet index computed over the full catalog. Counts reflect global
        prevalence, not what remains under the active filters.
    """

    total_rules: int
    filters: Dict[str, Tuple[FacetCount, ...]]

    def values(self, field_name: str) -> Tuple[str, ...]:
        return tuple(entry.value for entry in self.filters.get(field_name, ()))

    def count(self, field_name: str, value: str) -> int:
        for entry in self.filters.get(field_name, ()):
            if entry.value == value:
                return entry.count
        return 0

    def summary(self) -> Dict[str, int]:
        """Número de valores únicos por campo. / Unique value count per field."""
        return {name: len(entries) for name, entries in self.filters.items()}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_rules": self.total_rules,
            "filters": {
                name: [entry.to_dict() for entry in entries]
                for name, entries in self.filters.items()
            },
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "FacetIndex":
        return cls(
            total_rules=int(payload["total_rules"]),
            filters={
                name: tuple(
                    FacetCount(value=entry["value"], count=int(entry["count"]))
                    for entry in entries
                )
                for name, entries in payload["filters"].items()
            },
        )
