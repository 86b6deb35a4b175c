# -*- coding: utf-8 -*-
"""
warnet_ledger/shared/database/base.py

Base declarativa y convención de nombres para modelos ORM.

Este módulo proporciona:
- Base: clase base declarativa de SQLAlchemy
- NAMING_CONVENTION: convención de nombres para constraints
- BigIntPK: tipo de PK autoincremental portable
- str_enum: helper para mapear enums Python como VARCHAR + CHECK (portable PG/SQLite)

Autor: WarnetLedger
Fecha: 2026-10-02
"""

from __future__ import annotations

from enum import Enum
from typing import Type

from sqlalchemy import BigInteger, Enum as SQLEnum, Integer, MetaData
from sqlalchemy.orm import DeclarativeBase

# ===== NAMING CONVENTION =====
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


# ===== BASE DECLARATIVA =====
class Base(DeclarativeBase):
    """
    Base declarativa para todos los modelos ORM del ledger.
    Incluye convención de nombres para constraints.
    """
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


# BIGSERIAL en PostgreSQL; INTEGER en SQLite para que sea alias de rowid
BigIntPK = BigInteger().with_variant(Integer(), "sqlite")


def str_enum(enum_cls: Type[Enum], name: str | None = None) -> SQLEnum:
    """
    Devuelve un tipo Enum de SQLAlchemy que persiste el `.value` del enum.

    Se usa native_enum=False para que el mismo modelo funcione en
    PostgreSQL y en SQLite (tests) sin tipos ENUM creados por scripts.
    """
    return SQLEnum(
        enum_cls,
        name=name or enum_cls.__name__.lower(),
        native_enum=False,
        create_constraint=True,
        length=32,
        values_callable=lambda e: [x.value for x in e],
    )


__all__ = ["Base", "BigIntPK", "NAMING_CONVENTION", "str_enum"]

# Fin del archivo warnet_ledger/shared/database/base.py
