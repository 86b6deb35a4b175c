# -*- coding: utf-8 -*-
"""
warnet_ledger/shared/utils/time_utils.py

Helpers de tiempo UTC.

Autor: WarnetLedger
Fecha: 2026-10-03
"""

import datetime as dt
from typing import Optional


def now_utc() -> dt.datetime:
    """
    Retorna timestamp actual UTC.

    Centralizado para facilitar testing: los servicios aceptan un `clock`
    inyectable cuyo default es esta función.
    """
    return dt.datetime.now(dt.timezone.utc)


def as_utc(value: Optional[dt.datetime]) -> Optional[dt.datetime]:
    """
    Normaliza un datetime a UTC aware.

    SQLite devuelve columnas DateTime(timezone=True) como naive; se
    interpretan como UTC porque siempre se escriben en UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


def minutes_between(start: dt.datetime, end: dt.datetime) -> float:
    """Minutos transcurridos de start a end (negativo si end < start)."""
    return (as_utc(end) - as_utc(start)).total_seconds() / 60.0


__all__ = ["now_utc", "as_utc", "minutes_between"]
# Fin del archivo warnet_ledger/shared/utils/time_utils.py
