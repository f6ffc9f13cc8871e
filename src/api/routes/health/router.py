"""Endpoints de status e health check."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

if TYPE_CHECKING:
    from app.bootstrap.runtime import BridgeRuntime

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "tip-bridge"


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    mode: str
    timestamp: str
    rates_updated_at: str | None = None
    rates_stale: bool = True
    socket_connected: bool = False


def _get_runtime(request: Request) -> BridgeRuntime | None:
    return getattr(request.app.state, "runtime", None)


def describe_rates(runtime: BridgeRuntime | None) -> str:
    """Linha legível com a situação da tabela de câmbio."""
    if runtime is None:
        return "Rates: not initialized"
    table = runtime.rate_provider.snapshot
    if table.updated_at is None:
        return f"Rates: default table (base {table.base_currency})"
    return f"Rates: updated {table.updated_at.isoformat()} (base {table.base_currency})"


@router.get("/", response_class=PlainTextResponse)
async def status_page(request: Request) -> str:
    """Página de status em texto puro."""
    runtime = _get_runtime(request)
    mode = runtime.mode if runtime is not None else "unknown"
    return f"Tip bridge running. MODE={mode}\n{describe_rates(runtime)}\n"


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Liveness probe com estado de câmbio e socket."""
    runtime = _get_runtime(request)
    if runtime is None:
        return HealthResponse(
            status="starting",
            service=SERVICE_NAME,
            mode="unknown",
            timestamp=datetime.now(UTC).isoformat(),
        )

    table = runtime.rate_provider.snapshot
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        mode=runtime.mode,
        timestamp=datetime.now(UTC).isoformat(),
        rates_updated_at=table.updated_at.isoformat() if table.updated_at else None,
        rates_stale=runtime.rate_provider.is_stale(table),
        socket_connected=runtime.socket_connected,
    )
