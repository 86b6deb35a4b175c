# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/time_wallet/services.py

Servicio del wallet de minutos por sede.

Semántica de decaimiento perezoso:
- Mientras is_active, el saldo efectivo es remaining_minutes menos los
  minutos transcurridos desde last_updated.
- Cada activate/deactivate/sync/credit captura ese valor en la fila y
  reinicia last_updated; no existe un proceso que descuente en segundo plano.
- remaining_minutes nunca queda negativo.

Autor: WarnetLedger
Fecha: 2026-10-06
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from warnet_ledger.modules.accounts.repositories import VenueRepository
from warnet_ledger.shared.auth_context import Identity, require_owner_or_operator
from warnet_ledger.shared.errors import Conflict, Forbidden, NotFound, ValidationError
from warnet_ledger.shared.utils.time_utils import minutes_between, now_utc

from .models import TimeWallet
from .repositories import TimeWalletRepository

logger = logging.getLogger(__name__)


def effective_remaining(wallet: TimeWallet, now: datetime) -> float:
    """
    Minutos disponibles en `now` sin escribir nada.

    Un reloj que retrocede (now < last_updated) no suma minutos.
    """
    if not wallet.is_active:
        return max(0.0, wallet.remaining_minutes)
    elapsed = max(0.0, minutes_between(wallet.last_updated, now))
    return max(0.0, wallet.remaining_minutes - elapsed)


def _require_finite(value: float, field: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValidationError(f"{field} must be a finite number", field=field)
    return float(value)


def _require_minutes(value: float, field: str) -> float:
    value = _require_finite(value, field)
    if value <= 0:
        raise ValidationError(f"{field} must be positive", field=field, value=value)
    return value


class TimeWalletService:
    """
    Servicio para créditos, activación y sincronización de minutos.
    """

    def __init__(
        self,
        wallet_repo: Optional[TimeWalletRepository] = None,
        venue_repo: Optional[VenueRepository] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.wallet_repo = wallet_repo or TimeWalletRepository()
        self.venue_repo = venue_repo or VenueRepository()
        self.clock = clock or now_utc

    async def _get_owned_for_update(
        self,
        session: AsyncSession,
        wallet_id: int,
        requester: Identity,
    ) -> TimeWallet:
        """Obtiene un wallet para actualización con bloqueo pesimista."""
        wallet = await self.wallet_repo.get(session, wallet_id, for_update=True)
        if wallet is None:
            raise NotFound("time_wallet", wallet_id)
        if not requester.owns(wallet.owner_id):
            logger.warning(
                "Forbidden time wallet access: wallet=%s owner=%s requester=%s",
                wallet_id, wallet.owner_id, requester.user_id,
            )
            raise Forbidden(f"User {requester.user_id} does not own time wallet {wallet_id}")
        return wallet

    def _snapshot(self, wallet: TimeWallet, now: datetime) -> None:
        wallet.remaining_minutes = effective_remaining(wallet, now)
        wallet.last_updated = now

    async def credit_minutes(
        self,
        session: AsyncSession,
        owner_id: int,
        venue_id: int,
        minutes: float,
    ) -> TimeWallet:
        """
        Upsert por (owner, venue): crea inactivo con `minutes` o suma al existente.
        Si el wallet está activo, primero captura el consumo transcurrido.
        """
        minutes = _require_minutes(minutes, "minutes")
        if await self.venue_repo.get(session, venue_id) is None:
            raise NotFound("venue", venue_id)

        now = self.clock()
        wallet, created = await self.wallet_repo.get_or_create(
            session,
            owner_id,
            venue_id,
            initial_minutes=minutes,
            at=now,
        )
        if not created:
            self._snapshot(wallet, now)
            wallet.remaining_minutes += minutes
            await session.flush()

        logger.info(
            "TimeWallet credited: wallet=%s owner=%s venue=%s +%.2f -> %.2f",
            wallet.id, owner_id, venue_id, minutes, wallet.remaining_minutes,
        )
        return wallet

    async def debit_minutes(
        self,
        session: AsyncSession,
        owner_id: int,
        venue_id: int,
        minutes: float,
    ) -> float:
        """
        Retira hasta `minutes` del wallet de (owner, venue), sin bajar de 0.

        Se usa al cancelar una reserva de miembro para revertir el crédito
        que generó su pago. Si el saldo quedó en 0, el wallet se desactiva.

        Returns:
            Minutos efectivamente retirados (0.0 si no existe el wallet).
        """
        minutes = _require_minutes(minutes, "minutes")
        wallet = await self.wallet_repo.get_by_owner_venue(session, owner_id, venue_id, for_update=True)
        if wallet is None:
            logger.warning("TimeWallet debit skipped (no wallet): owner=%s venue=%s", owner_id, venue_id)
            return 0.0

        self._snapshot(wallet, self.clock())
        taken = min(minutes, wallet.remaining_minutes)
        wallet.remaining_minutes = max(0.0, wallet.remaining_minutes - taken)
        if wallet.remaining_minutes <= 0 and wallet.is_active:
            wallet.is_active = False
        await session.flush()

        logger.info(
            "TimeWallet debited: wallet=%s owner=%s venue=%s requested=%.2f taken=%.2f -> %.2f",
            wallet.id, owner_id, venue_id, minutes, taken, wallet.remaining_minutes,
        )
        return taken

    async def activate(
        self,
        session: AsyncSession,
        wallet_id: int,
        requester: Identity,
    ) -> TimeWallet:
        """
        Inicia el consumo de minutos.

        Raises:
            Conflict: el wallet no tiene minutos disponibles
        """
        wallet = await self._get_owned_for_update(session, wallet_id, requester)
        now = self.clock()
        self._snapshot(wallet, now)

        if wallet.remaining_minutes <= 0:
            logger.warning("TimeWallet activate rejected (empty): wallet=%s", wallet_id)
            raise Conflict("Time wallet has no remaining minutes", wallet_id=wallet_id)

        wallet.is_active = True
        await session.flush()
        logger.info("TimeWallet activated: wallet=%s remaining=%.2f", wallet_id, wallet.remaining_minutes)
        return wallet

    async def deactivate(
        self,
        session: AsyncSession,
        wallet_id: int,
        requester: Identity,
    ) -> TimeWallet:
        """Detiene el consumo, descontando el tiempo transcurrido si estaba activo."""
        wallet = await self._get_owned_for_update(session, wallet_id, requester)
        was_active = wallet.is_active
        self._snapshot(wallet, self.clock())
        wallet.is_active = False
        await session.flush()
        logger.info(
            "TimeWallet deactivated: wallet=%s was_active=%s remaining=%.2f",
            wallet_id, was_active, wallet.remaining_minutes,
        )
        return wallet

    async def sync_remaining(
        self,
        session: AsyncSession,
        wallet_id: int,
        requester: Identity,
        client_reported_minutes: float,
    ) -> TimeWallet:
        """
        Reconciliación advisory con el valor reportado por el cliente.

        El valor guardado queda en max(0, reportado), acotado por el saldo
        efectivo del servidor: el cliente puede reportar menos tiempo, nunca más.
        """
        reported = max(0.0, _require_finite(client_reported_minutes, "remaining_minutes"))
        wallet = await self._get_owned_for_update(session, wallet_id, requester)
        now = self.clock()
        server_value = effective_remaining(wallet, now)

        wallet.remaining_minutes = min(reported, server_value)
        wallet.last_updated = now
        if wallet.remaining_minutes <= 0 and wallet.is_active:
            wallet.is_active = False
        await session.flush()

        logger.info(
            "TimeWallet synced: wallet=%s reported=%.2f server=%.2f stored=%.2f",
            wallet_id, client_reported_minutes, server_value, wallet.remaining_minutes,
        )
        return wallet

    # ------------------------------------------------------------------
    # Consultas
    # ------------------------------------------------------------------

    async def has_wallet(self, session: AsyncSession, owner_id: int, venue_id: int) -> bool:
        return await self.wallet_repo.exists(session, owner_id, venue_id)

    async def get_time_wallet(
        self,
        session: AsyncSession,
        owner_id: int,
        venue_id: int,
        requester: Identity,
    ) -> TimeWallet:
        require_owner_or_operator(requester, owner_id, "time wallet")
        wallet = await self.wallet_repo.get_by_owner_venue(session, owner_id, venue_id)
        if wallet is None:
            raise NotFound("time_wallet", f"owner={owner_id} venue={venue_id}")
        return wallet

    async def list_time_wallets(
        self,
        session: AsyncSession,
        owner_id: int,
        requester: Identity,
    ) -> List[TimeWallet]:
        require_owner_or_operator(requester, owner_id, "time wallets")
        return await self.wallet_repo.list_by_owner(session, owner_id)


__all__ = ["TimeWalletService", "effective_remaining"]
# Fin del archivo warnet_ledger/modules/time_wallet/services.py
