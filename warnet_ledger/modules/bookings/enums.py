# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/bookings/enums.py

Estados de reserva y de pago, y mapa de transiciones válidas.

Reglas de transición (status):
- pending   → active | cancelled
- active    → completed
- cancelled → (terminal)
- completed → (terminal)

El rechazo de pago por operador también lleva pending → cancelled.

Autor: WarnetLedger
Fecha: 2026-10-07
"""

from typing import Dict, Set
from enum import Enum


class BookingStatus(str, Enum):
    PENDING = "pending"      # Creada, aún sin sesión
    ACTIVE = "active"        # Sesión en curso
    COMPLETED = "completed"  # Terminal: sesión finalizada
    CANCELLED = "cancelled"  # Terminal: cancelada en ventana o pago rechazado


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    REJECTED = "rejected"


# Mapa de transiciones válidas: estado_origen → {estados_destino_permitidos}
VALID_STATUS_TRANSITIONS: Dict[BookingStatus, Set[BookingStatus]] = {
    BookingStatus.PENDING: {
        BookingStatus.ACTIVE,
        BookingStatus.CANCELLED,
    },
    BookingStatus.ACTIVE: {
        BookingStatus.COMPLETED,
    },
    BookingStatus.COMPLETED: set(),  # Estado terminal
    BookingStatus.CANCELLED: set(),  # Estado terminal
}

TERMINAL_STATUSES: Set[BookingStatus] = {BookingStatus.COMPLETED, BookingStatus.CANCELLED}


def is_valid_status_transition(from_status: BookingStatus, to_status: BookingStatus) -> bool:
    """
    Valida si una transición de estado es permitida.

    Returns:
        True si la transición es válida, False en caso contrario.
    """
    return to_status in VALID_STATUS_TRANSITIONS.get(from_status, set())


__all__ = [
    "BookingStatus",
    "PaymentStatus",
    "VALID_STATUS_TRANSITIONS",
    "TERMINAL_STATUSES",
    "is_valid_status_transition",
]
# Fin del archivo warnet_ledger/modules/bookings/enums.py
