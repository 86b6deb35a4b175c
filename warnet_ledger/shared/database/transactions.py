# -*- coding: utf-8 -*-
"""
warnet_ledger/shared/database/transactions.py

Helper transaccional compartido por las rutas.

Los servicios del ledger solo hacen flush(); la frontera HTTP decide
cuándo confirmar la unidad de trabajo completa.

Autor: WarnetLedger
Fecha: 2026-10-03
"""

from typing import Awaitable, Callable, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


async def commit_or_raise(db: AsyncSession, work: Callable[[], Awaitable[T]]) -> T:
    """
    Ejecuta work() dentro de un contexto transaccional.

    Aplica commit si work() tiene éxito.
    Aplica rollback y re-lanza si work() falla, de modo que ninguna
    fila del ledger quede sin su efecto en el saldo (ni viceversa).

    Args:
        db: Sesión SQLAlchemy async
        work: Corrutina sin argumentos a ejecutar

    Returns:
        Resultado de work()
    """
    try:
        result = await work()
        await db.commit()
        return result
    except Exception:
        await db.rollback()
        raise


__all__ = ["commit_or_raise"]
# Fin del archivo warnet_ledger/shared/database/transactions.py
