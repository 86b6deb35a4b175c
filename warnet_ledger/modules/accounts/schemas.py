# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/accounts/schemas.py

Esquemas Pydantic para sedes.

Autor: WarnetLedger
Fecha: 2026-10-04
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class VenueCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    regular_price_per_hour: int = Field(ge=0, description="Tarifa regular por hora (Rupiah).")
    member_price_per_hour: int = Field(ge=0, description="Tarifa de miembro por hora (Rupiah).")


class VenueResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    regular_price_per_hour: int
    member_price_per_hour: int


__all__ = ["VenueCreateRequest", "VenueResponse"]
# Fin del archivo warnet_ledger/modules/accounts/schemas.py
