# Config Module
# AUTO-DOC-INDEX
#
# ES: Índice rápido
#   1) Propósito del módulo
#   2) Componentes principales
#   3) Puntos de extensión
#
# EN: Quick index
#   1) Module purpose
#   2) Main components
#   3) Extension points

"""Configuración validada de Rulescope.

Validated Rulescope configuration.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rulescope.logging import LOG_FORMATS

_ENV_PATH = Path(".env")
_ENV_LOCAL_PATH = Path(".env.local")

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class RulescopeSettings(BaseSettings):
    """Variables de entorno y archivo .env para Rulescope.

    English: Environment variables and .env file for Rulescope.
    """

    model_config = SettingsConfigDict(
        env_prefix="RULESCOPE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    RULES_DIR: Path = Path("rules")
    OUTPUT_DIR: Path = Path("public/data")
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[Path] = None
    LOG_FORMAT: str = "json"

    @field_validator("LOG_LEVEL")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        """Normaliza el nivel de log y rechaza valores desconocidos.

        English: Normalize the log level and reject unknown values.
        """
        level = value.strip().upper()
        if level not in _VALID_LOG_LEVELS:
            raise ValueError(f"unknown log level: {value}")
        return level

    @field_validator("LOG_FORMAT")
    @classmethod
    def _validate_log_format(cls, value: str) -> str:
        fmt = value.strip().lower()
        if fmt not in LOG_FORMATS:
            raise ValueError(f"unknown log format: {value}")
        return fmt


def load_config(**overrides: object) -> RulescopeSettings:
    """/** Carga y valida configuración, fallando con detalle. / Load and validate configuration, failing with details. **/"""
    load_dotenv(_ENV_PATH, override=False)
    load_dotenv(_ENV_LOCAL_PATH, override=False)
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return RulescopeSettings(**values)
    except ValidationError as exc:
        raise ValueError(f"Invalid configuration: {exc}") from exc
