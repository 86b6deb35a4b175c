# -*- coding: utf-8 -*-
"""
tests/shared/test_errors_and_identity.py

Taxonomía de errores de dominio y extracción de identidad por headers.

Autor: WarnetLedger
Fecha: 2026-10-09
"""

from http import HTTPStatus

import pytest
from fastapi import HTTPException

from warnet_ledger.shared.auth_context import (
    Identity,
    Role,
    get_current_identity,
    require_operator,
    require_owner_or_operator,
)
from warnet_ledger.shared.errors import (
    Conflict,
    Forbidden,
    InsufficientBalance,
    InvalidState,
    NotFound,
    ValidationError,
)


@pytest.mark.parametrize(
    "exc,status,code",
    [
        (ValidationError("bad"), HTTPStatus.UNPROCESSABLE_ENTITY, "VALIDATION_ERROR"),
        (NotFound("booking", 3), HTTPStatus.NOT_FOUND, "NOT_FOUND"),
        (Forbidden("no"), HTTPStatus.FORBIDDEN, "FORBIDDEN"),
        (Conflict("twice"), HTTPStatus.CONFLICT, "CONFLICT"),
        (InvalidState("x", from_state="active", to_state="cancelled"), HTTPStatus.CONFLICT, "INVALID_STATE"),
        (InsufficientBalance(1, 500, 100), HTTPStatus.PAYMENT_REQUIRED, "INSUFFICIENT_BALANCE"),
    ],
)
def test_error_status_and_code(exc, status, code):
    assert exc.http_status == status
    assert exc.to_detail()["error_code"] == code


def test_invalid_state_is_a_conflict():
    assert isinstance(InvalidState("x"), Conflict)


def test_detail_includes_context():
    detail = NotFound("booking", 3).to_detail()
    assert detail["message"] == "booking not found: 3"
    assert detail["context"] == {"resource": "booking", "id": 3}


def test_capability_checks():
    operator = Identity(user_id=1, role=Role.operator)
    patron = Identity(user_id=2, role=Role.patron)

    require_operator(operator, "approve")
    require_owner_or_operator(patron, 2, "booking")
    require_owner_or_operator(operator, 2, "booking")
    with pytest.raises(Forbidden):
        require_operator(patron, "approve")
    with pytest.raises(Forbidden):
        require_owner_or_operator(patron, 3, "booking")


@pytest.mark.anyio
async def test_identity_from_headers():
    identity = await get_current_identity(x_user_id="17", x_user_role=" Member ")
    assert identity == Identity(user_id=17, role=Role.member)

    default_role = await get_current_identity(x_user_id="18", x_user_role=None)
    assert default_role.role is Role.patron


@pytest.mark.anyio
@pytest.mark.parametrize("user_id,role", [(None, None), ("abc", None), ("5", "superuser")])
async def test_identity_rejects_bad_headers(user_id, role):
    with pytest.raises(HTTPException) as exc_info:
        await get_current_identity(x_user_id=user_id, x_user_role=role)
    assert exc_info.value.status_code == HTTPStatus.UNAUTHORIZED

# Fin del archivo tests/shared/test_errors_and_identity.py
