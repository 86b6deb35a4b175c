# -*- coding: utf-8 -*-
"""
warnet_ledger/shared/utils/__init__.py

Autor: WarnetLedger
Fecha: 2026-10-03
"""

from .time_utils import now_utc, as_utc, minutes_between

__all__ = ["now_utc", "as_utc", "minutes_between"]
