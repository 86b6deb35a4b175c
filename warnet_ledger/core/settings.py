# -*- coding: utf-8 -*-
"""
warnet_ledger/core/settings.py

Fachada de configuración. Reexpone la carga de settings basada en
Pydantic v2 definida en `warnet_ledger.shared.config`.

Autor: WarnetLedger
Fecha: 2026-10-02
"""

from typing import cast

from warnet_ledger.shared.config.config_loader import get_settings as _get_settings
from warnet_ledger.shared.config.settings_base import BaseAppSettings


def get_settings() -> BaseAppSettings:
    """
    Devuelve la configuración global de la aplicación (según PYTHON_ENV).
    """
    settings = _get_settings()
    return cast(BaseAppSettings, settings)

# Fin del archivo warnet_ledger/core/settings.py
