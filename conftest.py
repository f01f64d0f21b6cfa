"""
======================== ÍNDICE / INDEX ========================
1. Descripción general / Overview
2. Componentes principales / Main components

======================== ESPAÑOL ========================
Archivo: `conftest.py`.
Fixtures compartidos de pytest para Rulescope.

Componentes detectados:
  - block_network
  - rules_dir

======================== ENGLISH ========================
File: `conftest.py`.
Shared pytest fixtures for Rulescope.

Detected components:
  - block_network
  - rules_dir
"""

from __future__ import annotations

from pathlib import Path
import socket
from typing import Any

import pytest


@pytest.fixture(autouse=True)
def block_network(monkeypatch: pytest.MonkeyPatch) -> None:
    """Impide conexiones de red reales en tests.

    English:
        Prevents real network connections in tests.
    """

    def guarded_connect(*args: Any, **kwargs: Any) -> None:
        raise RuntimeError("Network access is disabled during tests.")

    def guarded_create_connection(*args: Any, **kwargs: Any) -> None:
        raise RuntimeError("Network access is disabled during tests.")

    monkeypatch.setattr(socket.socket, "connect", guarded_connect, raising=True)
    monkeypatch.setattr(socket, "create_connection", guarded_create_connection, raising=True)


@pytest.fixture
def rules_dir(tmp_path: Path) -> Path:
    """Árbol de reglas YAML de ejemplo, con un archivo malformado.

    English:
        Sample YAML rules tree, including one malformed file.
    """
    root = tmp_path / "rules"
    (root / "alerts").mkdir(parents=True)
    (root / "network").mkdir()

    (root / "alerts" / "susp_login.yml").write_text(
        "name: Suspicious Login\n"
        "description: Multiple failed logins followed by success\n"
        "domain: endpoint\n"
        "type: alert\n"
        "severity: high\n"
        "os: [windows, macos]\n"
        "tactics: [persistence, execution]\n"
        "created: 2024-01-10\n"
        "author: someone\n",
        encoding="utf-8",
    )
    (root / "alerts" / "broken.yaml").write_text("name: [unclosed\n", encoding="utf-8")
    (root / "network" / "dns_tunnel.yaml").write_text(
        "id: NET-001\n"
        "name: DNS Tunneling\n"
        "domain: network\n"
        "type: hunt\n"
        "severity: medium\n"
        "tactics: [execution]\n"
        "data_sources: [dns]\n"
        "language: kql\n"
        "query: |\n"
        "  DnsEvents | where Name has 'tunnel'\n",
        encoding="utf-8",
    )
    (root / "README.md").write_text("not a rule\n", encoding="utf-8")
    return root
