# -*- coding: utf-8 -*-
"""
warnet_ledger/core/__init__.py

Fachadas estables (settings, logging, db) sobre warnet_ledger.shared.

Autor: WarnetLedger
Fecha: 2026-10-02
"""
