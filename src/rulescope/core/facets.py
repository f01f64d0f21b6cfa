"""
======================== ÍNDICE / INDEX ========================
1. Descripción general / Overview
2. Componentes principales / Main components
3. Notas de mantenimiento / Maintenance notes

======================== ESPAÑOL ========================
Archivo: `src/rulescope/core/facets.py`.
Índice de facetas: valores distintos ordenados y conteos por campo,
calculado una vez sobre el catálogo completo.

Componentes detectados:
  - distinct_values
  - count_matching
  - build_facet_index
  - active_fields

Notas:
- Los conteos reflejan prevalencia global, no los resultados bajo los
  filtros activos.

======================== ENGLISH ========================
File: `src/rulescope/core/facets.py`.
Facet index: sorted distinct values and counts per field, computed once
over the full catalog.

Detected components:
  - distinct_values
  - count_matching
  - build_facet_index
  - active_fields

Notes:
- Counts reflect global prevalence, not results under the active filters.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Tuple

from rulescope.core.catalog import Catalog
from rulescope.core.models import FILTER_FIELDS, FacetCount, FacetIndex


def distinct_values(catalog: Catalog, field_name: str) -> List[str]:
    """Valores distintos de un campo, en orden de puntos de código.

    English: Distinct values of a field, in code-point order.
    """
    values = set()
    for rule in catalog:
        facet = rule.facet(field_name)
        if facet is not None:
            values.update(facet.distinct())
    return sorted(values)


def count_matching(catalog: Catalog, field_name: str, value: str) -> int:
    """Reglas cuyo campo es igual a, o contiene, `value`.

    English: Rules whose field equals, or contains, `value`.
    """
    total = 0
    for rule in catalog:
        facet = rule.facet(field_name)
        if facet is not None and facet.matches(value):
            total += 1
    return total


def build_facet_index(catalog: Catalog, fields: Sequence[str] = FILTER_FIELDS) -> FacetIndex:
    """Construye el índice de facetas. Función pura del catálogo.

    Cada regla cuenta una vez por valor; con campos multivaluados la suma
    de conteos puede superar el tamaño del catálogo.

    English: Build the facet index; a pure function of the catalog. Each
    rule counts once per value, so for multi-valued fields the count sum
    may exceed the catalog size.
    """
    filters: Dict[str, Tuple[FacetCount, ...]] = {}
    for field_name in fields:
        filters[field_name] = tuple(
            FacetCount(value=value, count=count_matching(catalog, field_name, value))
            for value in distinct_values(catalog, field_name)
        )
    return FacetIndex(total_rules=len(catalog), filters=filters)


def active_fields(index: FacetIndex) -> Iterable[Tuple[str, int]]:
    """Campos con al menos un valor y su número de valores únicos.

    English: Fields with at least one value and their unique value count.
    """
    return ((name, size) for name, size in index.summary().items() if size > 0)
