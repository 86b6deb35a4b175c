# -*- coding: utf-8 -*-
"""
warnet_ledger/shared/__init__.py

Infraestructura compartida: configuración, base de datos, errores,
identidad y middleware.

Autor: WarnetLedger
Fecha: 2026-10-02
"""
