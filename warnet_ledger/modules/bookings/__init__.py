# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/bookings/__init__.py

Reservas de estaciones: pago, ventana de cancelación y sesión activa.

Autor: WarnetLedger
Fecha: 2026-10-07
"""

from .enums import BookingStatus, PaymentStatus
from .models import Booking
from .repositories import BookingRepository
from .services import BookingService, remaining_minutes

__all__ = [
    "BookingStatus",
    "PaymentStatus",
    "Booking",
    "BookingRepository",
    "BookingService",
    "remaining_minutes",
]
