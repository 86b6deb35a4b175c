# -*- coding: utf-8 -*-
"""
warnet_ledger/shared/errors.py

Excepciones de dominio del ledger.

Cada excepción lleva un error_code estable (para UI) y el status HTTP
que la frontera debe usar. El núcleo las lanza; nunca las silencia.

Autor: WarnetLedger
Fecha: 2026-10-03
"""

from http import HTTPStatus
from typing import Any, Optional


class LedgerError(Exception):
    """Base de todas las violaciones de dominio."""
    error_code = "LEDGER_ERROR"
    http_status = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.context = context
        super().__init__(message)

    def to_detail(self) -> dict:
        detail = {"error_code": self.error_code, "message": self.message}
        if self.context:
            detail["context"] = {k: _jsonable(v) for k, v in self.context.items()}
        return detail


class ValidationError(LedgerError):
    """Monto no positivo, campo requerido ausente, duración bajo el mínimo."""
    error_code = "VALIDATION_ERROR"
    http_status = HTTPStatus.UNPROCESSABLE_ENTITY


class NotFound(LedgerError):
    """Se lanza cuando no existe la reserva, transacción, wallet o sede."""
    error_code = "NOT_FOUND"
    http_status = HTTPStatus.NOT_FOUND

    def __init__(self, resource: str, identifier: Any):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}", resource=resource, id=identifier)


class Forbidden(LedgerError):
    error_code = "FORBIDDEN"
    http_status = HTTPStatus.FORBIDDEN


class Conflict(LedgerError):
    error_code = "CONFLICT"
    http_status = HTTPStatus.CONFLICT


class InvalidState(Conflict):
    """Se lanza cuando se intenta una transición de estado inválida."""
    error_code = "INVALID_STATE"

    def __init__(self, message: str, *, from_state: Optional[str] = None, to_state: Optional[str] = None):
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(message, from_state=from_state, to_state=to_state)


class InsufficientBalance(LedgerError):
    error_code = "INSUFFICIENT_BALANCE"
    http_status = HTTPStatus.PAYMENT_REQUIRED

    def __init__(self, owner_id: int, requested: int, available: Optional[int] = None):
        self.owner_id = owner_id
        self.requested = requested
        self.available = available
        super().__init__(
            "Insufficient balance",
            owner_id=owner_id,
            requested=requested,
            available=available,
        )


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


__all__ = [
    "LedgerError",
    "ValidationError",
    "NotFound",
    "Forbidden",
    "Conflict",
    "InvalidState",
    "InsufficientBalance",
]

# Fin del archivo warnet_ledger/shared/errors.py
