# -*- coding: utf-8 -*-
"""
warnet_ledger/shared/config/settings_prod.py

Overrides para entorno de PRODUCCIÓN.
Logging JSON, SSL obligatorio hacia PostgreSQL y sin create_all.

Autor: WarnetLedger
Fecha: 2026-10-02
"""

from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings


class ProdSettings(BaseAppSettings):
    python_env: str = "production"

    log_level: str = "INFO"
    log_format: str = "json"

    db_sslmode: str = "require"
    db_create_all: bool = False  # el esquema se gestiona con migraciones

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


__all__ = ["ProdSettings"]
# Fin del archivo warnet_ledger/shared/config/settings_prod.py
