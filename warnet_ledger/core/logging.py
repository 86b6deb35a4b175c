# -*- coding: utf-8 -*-
"""
warnet_ledger/core/logging.py

Fachada del módulo `warnet_ledger.shared.config.logging_config` para
mantener un punto de entrada único bajo `warnet_ledger.core`.

Autor: WarnetLedger
Fecha: 2026-10-02
"""

from typing import Literal

from warnet_ledger.shared.config.logging_config import setup_logging as _setup_logging


def setup_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO",
    fmt: Literal["plain", "pretty", "json"] = "plain",
) -> None:
    _setup_logging(level=level, fmt=fmt)

# Fin del archivo warnet_ledger/core/logging.py
