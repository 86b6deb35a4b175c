# -*- coding: utf-8 -*-
"""
warnet_ledger/shared/config/__init__.py

Punto único de acceso a la configuración:
    from warnet_ledger.shared.config import get_settings

Autor: WarnetLedger
Fecha: 2026-10-02
"""

from .config_loader import get_settings
from .logging_config import setup_logging
from .settings_base import BaseAppSettings

__all__ = ["get_settings", "setup_logging", "BaseAppSettings"]
# Fin del archivo
