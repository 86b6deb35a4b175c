# -*- coding: utf-8 -*-
"""
warnet_ledger/shared/auth_context.py

Contexto de identidad autenticada para el ledger.

El ledger no emite ni valida tokens: consume (user_id, role) que un
gateway upstream inyecta en los headers X-User-Id y X-User-Role.
Los chequeos de capacidad se centralizan aquí (Role es un enum cerrado).

Autor: WarnetLedger
Fecha: 2026-10-03
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from fastapi import Header, HTTPException, status

from warnet_ledger.shared.errors import Forbidden

logger = logging.getLogger(__name__)


class Role(str, Enum):
    patron = "patron"
    member = "member"
    operator = "operator"


@dataclass(frozen=True)
class Identity:
    """Usuario autenticado que invoca una operación del núcleo."""
    user_id: int
    role: Role

    @property
    def is_operator(self) -> bool:
        return self.role is Role.operator

    @property
    def is_member(self) -> bool:
        return self.role is Role.member

    def owns(self, owner_id: int) -> bool:
        return self.user_id == owner_id


def require_operator(identity: Identity, action: str) -> None:
    """Lanza Forbidden si la identidad no tiene capacidad de operador."""
    if not identity.is_operator:
        logger.warning("Forbidden %s for user=%s role=%s", action, identity.user_id, identity.role.value)
        raise Forbidden(f"Operator role required to {action}")


def require_owner_or_operator(identity: Identity, owner_id: int, resource: str) -> None:
    if not (identity.owns(owner_id) or identity.is_operator):
        raise Forbidden(f"User {identity.user_id} cannot access {resource} of user {owner_id}")


async def get_current_identity(
    x_user_id: Optional[str] = Header(default=None, alias="X-User-Id"),
    x_user_role: Optional[str] = Header(default=None, alias="X-User-Role"),
) -> Identity:
    """
    Dependencia FastAPI: extrae la identidad de los headers.

    Raises:
        HTTPException 401: Si falta user_id o el role no es válido
    """
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing user_id in auth context",
        )
    try:
        user_id = int(x_user_id)
    except (TypeError, ValueError):
        logger.warning("Invalid user_id format: %s", x_user_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user_id format in auth context",
        )

    try:
        role = Role((x_user_role or Role.patron.value).strip().lower())
    except ValueError:
        logger.warning("Invalid role in auth context: %s", x_user_role)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid role in auth context",
        )

    return Identity(user_id=user_id, role=role)


__all__ = [
    "Role",
    "Identity",
    "require_operator",
    "require_owner_or_operator",
    "get_current_identity",
]
# Fin del archivo warnet_ledger/shared/auth_context.py
