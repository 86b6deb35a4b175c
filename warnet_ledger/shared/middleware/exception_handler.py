# -*- coding: utf-8 -*-
"""
warnet_ledger/shared/middleware/exception_handler.py

Manejo de errores en la frontera HTTP.

- JSONExceptionMiddleware: captura excepciones no manejadas y responde JSON 500
  con error_code y request_id para trazabilidad.
- ledger_error_handler: mapea LedgerError a su status HTTP con detalle estable.

Autor: WarnetLedger
Fecha: 2026-10-03
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from warnet_ledger.shared.errors import LedgerError

logger = logging.getLogger(__name__)

REQUEST_ID_HEADERS = ["x-request-id", "x-correlation-id"]


def get_request_id(request: Request) -> str:
    """Extrae request_id de headers o genera uno nuevo."""
    for header in REQUEST_ID_HEADERS:
        value = request.headers.get(header)
        if value:
            return value
    return uuid.uuid4().hex[:16]


class JSONExceptionMiddleware(BaseHTTPMiddleware):
    """
    Middleware que captura excepciones no manejadas y devuelve JSON.

    Garantiza:
    - Content-Type: application/json (nunca text/plain)
    - error_code estable para UI
    - request_id para correlación de logs
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = get_request_id(request)
        request.state.request_id = request_id

        try:
            response = await call_next(request)
            return response
        except Exception as e:
            logger.exception(
                "unhandled_exception request_id=%s method=%s path=%s error=%r",
                request_id,
                request.method,
                request.url.path,
                e,
            )
            detail = {
                "error_code": "INTERNAL_SERVER_ERROR",
                "message": "Internal server error",
                "request_id": request_id,
            }
            return JSONResponse(
                status_code=500,
                content={"detail": detail},
                headers={"X-Request-ID": request_id},
            )


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    """Convierte una violación de dominio en respuesta JSON tipada."""
    status_code = int(exc.http_status)
    log = logger.warning if status_code < 500 else logger.error
    log(
        "ledger_error code=%s status=%s method=%s path=%s message=%s",
        exc.error_code,
        status_code,
        request.method,
        request.url.path,
        exc.message,
    )
    return JSONResponse(status_code=status_code, content={"detail": exc.to_detail()})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_middleware(JSONExceptionMiddleware)
    app.add_exception_handler(LedgerError, ledger_error_handler)


__all__ = [
    "JSONExceptionMiddleware",
    "get_request_id",
    "ledger_error_handler",
    "register_exception_handlers",
]
# Fin del archivo warnet_ledger/shared/middleware/exception_handler.py
