# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/operator/__init__.py

Panel del operador: miembros y estadísticas por sede.

Autor: WarnetLedger
Fecha: 2026-10-19
"""

from .aggregators import BookingSummary, VenueStatsAggregator
from .services import OperatorReportService, VenueStatistics

__all__ = ["BookingSummary", "VenueStatsAggregator", "OperatorReportService", "VenueStatistics"]
