# -*- coding: utf-8 -*-
"""
warnet_ledger/shared/middleware/__init__.py

Autor: WarnetLedger
Fecha: 2026-10-03
"""

from .exception_handler import (
    JSONExceptionMiddleware,
    get_request_id,
    ledger_error_handler,
    register_exception_handlers,
)

__all__ = [
    "JSONExceptionMiddleware",
    "get_request_id",
    "ledger_error_handler",
    "register_exception_handlers",
]
