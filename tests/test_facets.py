"""
======================== ÍNDICE / INDEX ========================
1. Descripción general / Overview
2. Componentes principales / Main components

======================== ESPAÑOL ========================
Archivo: `tests/test_facets.py`.
Pruebas del catálogo y del índice de facetas.

======================== ENGLISH ========================
File: `tests/test_facets.py`.
Tests for the catalog and the facet index.
"""

from structlog.testing import capture_logs

from rulescope.core.catalog import build_catalog, find_duplicate_ids
from rulescope.core.facets import active_fields, build_facet_index, distinct_values
from rulescope.core.models import FILTER_FIELDS, Rule


def _rules():
    return [
        Rule(id="r1", source_path="a/r1.yml", domain="endpoint", severity="high",
             tactics=("persistence", "execution")),
        Rule(id="r2", source_path="a/r2.yml", domain="network", tactics=("execution",)),
        Rule(id="r3", source_path="b/r3.yml", domain="endpoint", severity="", os="linux"),
    ]


def test_catalog_preserves_discovery_order():
    rules = _rules()

    catalog = build_catalog(reversed(rules))

    assert [rule.id for rule in catalog] == ["r3", "r2", "r1"]


def test_catalog_keeps_and_logs_duplicate_ids():
    """Español: Ids repetidos permanecen y se registran.

    English: Repeated ids are kept and logged.
    """
    rules = [Rule(id="dup", source_path="a/dup.yml"), Rule(id="dup", source_path="b/dup.yml")]

    with capture_logs() as logs:
        catalog = build_catalog(rules)

    assert len(catalog) == 2
    duplicates = [entry for entry in logs if entry["event"] == "duplicate_rule_id"]
    assert len(duplicates) == 1
    assert duplicates[0]["source_path"] == "b/dup.yml"
    assert find_duplicate_ids(catalog) == {"dup": ["a/dup.yml", "b/dup.yml"]}


def test_tactics_example_counts():
    index = build_facet_index(build_catalog(_rules()[:2]))

    assert [entry.to_dict() for entry in index.filters["tactics"]] == [
        {"value": "execution", "count": 2},
        {"value": "persistence", "count": 1},
    ]


def test_every_filter_field_is_present():
    index = build_facet_index(build_catalog(_rules()))

    assert tuple(index.filters) == FILTER_FIELDS
    assert index.filters["use_cases"] == ()
    assert index.total_rules == 3


def test_empty_scalar_contributes_nothing():
    catalog = build_catalog(_rules())

    assert distinct_values(catalog, "severity") == ["high"]


def test_scalar_in_sequence_field_is_counted():
    index = build_facet_index(build_catalog(_rules()))

    assert index.count("os", "linux") == 1


def test_scalar_count_conservation():
    catalog = build_catalog(_rules())
    index = build_facet_index(catalog)

    present = sum(1 for rule in catalog if rule.domain)
    assert sum(entry.count for entry in index.filters["domain"]) == present


def test_index_is_independent_of_discovery_order():
    rules = _rules()

    forward = build_facet_index(build_catalog(rules))
    backward = build_facet_index(build_catalog(reversed(rules)))

    assert forward == backward


def test_values_are_sorted_by_code_point():
    rules = [
        Rule(id="a", source_path="a.yml", os=("windows", "Linux", "macos")),
    ]

    index = build_facet_index(build_catalog(rules))

    assert index.values("os") == ("Linux", "macos", "windows")


def test_empty_catalog_yields_empty_lists():
    index = build_facet_index(build_catalog([]))

    assert index.total_rules == 0
    assert all(entries == () for entries in index.filters.values())
    assert list(active_fields(index)) == []
