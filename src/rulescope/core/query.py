"""
======================== ÍNDICE / INDEX ========================
1. Descripción general / Overview
2. Componentes principales / Main components
3. Notas de mantenimiento / Maintenance notes

======================== ESPAÑOL ========================
Archivo: `src/rulescope/core/query.py`.
Motor de consultas: búsqueda de texto + filtros por facetas
(conjunción entre campos, disyunción dentro de un campo), y la sesión de
consulta que mantiene el estado mutable.

Componentes detectados:
  - ActiveFilters
  - toggle_filter
  - matches_text
  - matches_filters
  - matches
  - filter_rules
  - QuerySession

Notas:
- Cada consulta recorre el catálogo completo; no hay estado incremental.

======================== ENGLISH ========================
File: `src/rulescope/core/query.py`.
Query engine: text search + facet filters (conjunction across fields,
disjunction within a field), and the query session holding mutable state.

Detected components:
  - ActiveFilters
  - toggle_filter
  - matches_text
  - matches_filters
  - matches
  - filter_rules
  - QuerySession

Notes:
- Every query scans the full catalog; there is no incremental state.
"""

from __future__ import annotations

from typing import AbstractSet, Dict, FrozenSet, Mapping, Optional, Tuple

import structlog

from rulescope.core.catalog import Catalog
from rulescope.core.models import FILTER_FIELDS, FacetIndex, Rule
from rulescope.errors import ArtifactLoadError

logger = structlog.get_logger(__name__)

ActiveFilters = Dict[str, FrozenSet[str]]


def toggle_filter(active: Mapping[str, AbstractSet[str]], field_name: str, value: str) -> ActiveFilters:
    """Añade o quita `value` de la selección de `field_name`.

    Devuelve un nuevo mapa; un campo sin valores seleccionados desaparece
    del mapa en lugar de quedar con un conjunto vacío.

    English: Add or remove `value` from the selection of `field_name`.
    Returns a new mapping; a field left with no selected values is removed
    instead of being kept with an empty set.
    """
    updated: ActiveFilters = {name: frozenset(values) for name, values in active.items() if values}
    current = updated.get(field_name, frozenset())
    selection = current - {value} if value in current else current | {value}
    if selection:
        updated[field_name] = selection
    else:
        updated.pop(field_name, None)
    return updated


def matches_text(rule: Rule, search_term: str) -> bool:
    """Subcadena sin distinguir mayúsculas sobre nombre, descripción e id.

    English: Case-insensitive substring over name, description and id. An
    empty term always matches.
    """
    if not search_term:
        return True
    return search_term.lower() in rule.searchable_text().lower()


def matches_filters(rule: Rule, active: Mapping[str, AbstractSet[str]]) -> bool:
    """Conjunción entre campos, disyunción dentro de cada campo.

    Un campo que no es filtrable no lo cumple ninguna regla.

    English: Conjunction across fields, disjunction within each field. No
    rule satisfies a field that is not filterable.
    """
    for field_name, selected in active.items():
        if not selected:
            continue
        if field_name not in FILTER_FIELDS:
            return False
        facet = rule.facet(field_name)
        if facet is None or not facet.matches_any(selected):
            return False
    return True


def matches(rule: Rule, active: Mapping[str, AbstractSet[str]], search_term: str = "") -> bool:
    """Predicado completo: texto (si hay término) y todas las facetas activas.

    English: Full predicate: text (when a term is given) and every active
    facet constraint.
    """
    return matches_text(rule, search_term) and matches_filters(rule, active)


def filter_rules(
    catalog: Catalog,
    active: Optional[Mapping[str, AbstractSet[str]]] = None,
    search_term: str = "",
) -> Tuple[Rule, ...]:
    """Subconjunto filtrado del catálogo, en el orden del catálogo.

    English: Filtered subset of the catalog, in catalog order.
    """
    active = active or {}
    return tuple(rule for rule in catalog if matches(rule, active, search_term))


class QuerySession:
    """Sesión de exploración sobre un catálogo y un índice ya cargados.

    El catálogo y el índice son de solo lectura; los filtros activos y el
    término de búsqueda son el único estado mutable.

    English:
        Exploration session over an already loaded catalog and index. The
        catalog and index are read-only; the active filters and the search
        term are the only mutable state.
    """

    def __init__(self, catalog: Optional[Catalog], index: Optional[FacetIndex]) -> None:
        if catalog is None or index is None:
            raise ArtifactLoadError(
                None,
                "catalog and facet index must both be loaded",
            )
        self.catalog: Catalog = tuple(catalog)
        self.index = index
        self.active_filters: ActiveFilters = {}
        self.search_term = ""

    def toggle_filter(self, field_name: str, value: str) -> None:
        if field_name not in FILTER_FIELDS:
            raise ValueError(f"not a filterable field: {field_name}")
        self.active_filters = toggle_filter(self.active_filters, field_name, value)
        logger.debug("filter_toggled", field=field_name, value=value, active=self.active_filter_count)

    def set_search_term(self, term: str) -> None:
        self.search_term = term

    def clear_all(self) -> None:
        """Limpia filtros y término de búsqueda. / Clear filters and search term."""
        self.active_filters = {}
        self.search_term = ""

    def is_active(self, field_name: str, value: str) -> bool:
        return value in self.active_filters.get(field_name, frozenset())

    @property
    def active_filter_count(self) -> int:
        return sum(len(values) for values in self.active_filters.values())

    @property
    def results(self) -> Tuple[Rule, ...]:
        return filter_rules(self.catalog, self.active_filters, self.search_term)

    def summary(self) -> str:
        """Texto "Showing X of Y rules" con el número de filtros aplicados.

        English: "Showing X of Y rules" text with the applied filter count.
        """
        text = f"Showing {len(self.results)} of {len(self.catalog)} rules"
        if self.active_filter_count:
            text += f" ({self.active_filter_count} filters applied)"
        return text
