"""
======================== ÍNDICE / INDEX ========================
1. Descripción general / Overview
2. Componentes principales / Main components

======================== ESPAÑOL ========================
Archivo: `tests/test_normalize.py`.
Pruebas del normalizador de registros de regla.

======================== ENGLISH ========================
File: `tests/test_normalize.py`.
Tests for the rule record normalizer.
"""

import datetime as dt

import pytest

from rulescope.core.normalize import default_rule_id, load_rule_file, normalize_record
from rulescope.errors import RuleNormalizationError


def test_missing_id_defaults_to_filename_stem():
    """Español: Sin `id`, se usa el nombre de archivo sin extensión.

    English: Without `id`, the filename without extension is used.
    """
    rule = normalize_record({"name": "Login"}, "alerts/susp_login.yml")

    assert rule.id == "susp_login"
    assert rule.source_path == "alerts/susp_login.yml"


def test_explicit_id_wins():
    rule = normalize_record({"id": "R-1"}, "alerts/other.yaml")

    assert rule.id == "R-1"


def test_empty_id_falls_back_to_filename():
    rule = normalize_record({"id": "  "}, "x/fallback.yaml")

    assert rule.id == "fallback"


def test_numeric_id_is_coerced_to_text():
    rule = normalize_record({"id": 1234}, "x/y.yml")

    assert rule.id == "1234"


def test_missing_optional_fields_are_absent():
    """Español: Campos ausentes quedan como None, no cadena vacía.

    English: Missing fields stay None, not empty string.
    """
    rule = normalize_record({}, "a/b.yml")

    assert rule.name is None
    assert rule.description is None
    assert rule.tactics is None
    assert rule.query is None


def test_sequences_become_tuples_and_scalars_stay_scalars():
    rule = normalize_record(
        {"tactics": ["persistence", None, "execution"], "os": "windows"},
        "a/b.yml",
    )

    assert rule.tactics == ("persistence", "execution")
    assert rule.os == "windows"


def test_empty_sequence_is_kept_distinct_from_absent():
    rule = normalize_record({"use_cases": []}, "a/b.yml")

    assert rule.use_cases == ()
    assert rule.data_sources is None


def test_dates_are_rendered_as_iso_strings():
    rule = normalize_record(
        {"created": dt.date(2024, 1, 10), "updated": "2024-02-01"},
        "a/b.yml",
    )

    assert rule.created == "2024-01-10"
    assert rule.updated == "2024-02-01"


def test_unknown_fields_are_dropped():
    rule = normalize_record({"author": "someone", "name": "N"}, "a/b.yml")

    assert "author" not in rule.to_dict()


def test_structured_query_is_kept_as_yaml_text():
    rule = normalize_record({"query": {"selection": {"EventID": 4625}}}, "a/b.yml")

    assert "EventID: 4625" in rule.query


@pytest.mark.parametrize("raw", [None, ["a", "b"], "just text"])
def test_non_mapping_documents_are_rejected(raw):
    with pytest.raises(RuleNormalizationError) as excinfo:
        normalize_record(raw, "a/bad.yml")

    assert excinfo.value.source_path == "a/bad.yml"


def test_multi_valued_scalar_fields_are_kept():
    """Español: `type: [alert, hunt]` no descarta la regla.

    English: `type: [alert, hunt]` does not drop the rule.
    """
    rule = normalize_record({"type": ["alert", "hunt"], "severity": ["high"]}, "a/multi_type.yml")

    assert rule.type == ("alert", "hunt")
    assert rule.severity == ("high",)


def test_unusable_sequence_elements_are_skipped():
    rule = normalize_record(
        {"data_sources": [{"name": "sysmon"}, "dns"], "tactics": [["nested"]]},
        "a/obj_sources.yml",
    )

    assert rule.id == "obj_sources"
    assert rule.data_sources == ("dns",)
    assert rule.tactics == ()


def test_structured_facet_scalar_counts_as_absent():
    rule = normalize_record({"domain": {"primary": "endpoint"}}, "a/b.yml")

    assert rule.domain is None


def test_structured_text_fields_are_kept_as_text():
    rule = normalize_record(
        {"id": {"uuid": "x"}, "name": ["Login", "Brute force"], "description": {"en": "Logins"}},
        "a/structured.yml",
    )

    assert rule.id == "structured"
    assert rule.name == "[Login, Brute force]"
    assert rule.description == "{en: Logins}"


def test_load_rule_file_reports_relative_path(rules_dir):
    rule = load_rule_file(rules_dir / "alerts" / "susp_login.yml", rules_dir)

    assert rule.id == "susp_login"
    assert rule.source_path == "alerts/susp_login.yml"
    assert rule.tactics == ("persistence", "execution")
    assert rule.created == "2024-01-10"


def test_load_rule_file_wraps_yaml_errors(rules_dir):
    with pytest.raises(RuleNormalizationError) as excinfo:
        load_rule_file(rules_dir / "alerts" / "broken.yaml", rules_dir)

    assert excinfo.value.source_path == "alerts/broken.yaml"
    assert excinfo.value.cause is not None


def test_default_rule_id_strips_only_last_extension():
    assert default_rule_id("rules/win.proc.create.yml") == "win.proc.create"


def test_normalize_record_takes_path_already_relative_to_root():
    """Español: `normalize_record` recibe la ruta ya relativa; no conoce la raíz.

    English: `normalize_record` receives the already-relative path; it does
    not know the rules root.
    """
    rule = normalize_record(raw={"name": "N"}, source_path="alerts/nested/x.yml")

    assert rule.source_path == "alerts/nested/x.yml"
    assert rule.id == "x"
    with pytest.raises(TypeError):
        normalize_record({"name": "N"}, "x.yml", rules_root="alerts")
