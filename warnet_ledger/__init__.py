# -*- coding: utf-8 -*-
"""
warnet_ledger/__init__.py

Warnet Ledger: motor de ledger y sesiones para reservas de estaciones,
wallet monetario con aprobación de recargas y wallet de minutos por sede.

Autor: WarnetLedger
Fecha: 2026-10-02
"""

__version__ = "0.1.0"
