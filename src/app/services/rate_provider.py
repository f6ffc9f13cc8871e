"""Provedor da tabela de câmbio com snapshot trocado atomicamente.

Leitores chamam `current_table()` e sempre recebem um RateTable completo e
imutável (o último bom ou o default de boot). `refresh()` só substitui a
referência após uma busca bem-sucedida; em falha a tabela anterior fica.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from typing import TYPE_CHECKING

from utils.errors import RateFetchError

if TYPE_CHECKING:
    from app.domain import RateTable
    from app.protocols import RateSourceProtocol

logger = logging.getLogger(__name__)


class RateProvider:
    """Dono do snapshot de câmbio e do refresh em background."""

    def __init__(
        self,
        source: RateSourceProtocol,
        default_table: RateTable,
        *,
        refresh_interval_seconds: float = 3600.0,
        stale_after_seconds: float = 7200.0,
        min_retry_seconds: float = 60.0,
    ) -> None:
        self._source = source
        self._table = default_table
        self._refresh_interval_seconds = refresh_interval_seconds
        self._stale_after_seconds = stale_after_seconds
        self._min_retry_seconds = min_retry_seconds
        self._last_attempt: float | None = None
        self._inflight: asyncio.Task[RateTable] | None = None
        self._loop_task: asyncio.Task[None] | None = None

    @property
    def base_currency(self) -> str:
        return self._table.base_currency

    @property
    def snapshot(self) -> RateTable:
        """Snapshot atual sem disparar refresh (uso em health/status)."""
        return self._table

    def current_table(self) -> RateTable:
        """Snapshot atual; nunca falha.

        Se a tabela estiver velha, agenda um refresh em background sem
        bloquear o chamador.
        """
        table = self._table
        if self.is_stale(table):
            self._schedule_refresh()
        return table

    def is_stale(self, table: RateTable | None = None) -> bool:
        """True se a tabela nunca foi atualizada ou passou do limite de idade."""
        age = (table or self._table).age_seconds()
        return age is None or age > self._stale_after_seconds

    async def refresh(self) -> RateTable:
        """Busca nova tabela e troca o snapshot.

        Raises:
            RateFetchError: Se a busca falhar (snapshot anterior mantido).
        """
        self._last_attempt = time.monotonic()
        table = await self._source.fetch_latest(self._table.base_currency)
        if table.base_currency != self._table.base_currency:
            raise RateFetchError(f"rates_base_mismatch: {table.base_currency}")
        self._table = table
        logger.info(
            "rates_refreshed",
            extra={
                "base_currency": table.base_currency,
                "currency_count": len(table.rates),
            },
        )
        return table

    async def refresh_safe(self) -> bool:
        """Refresh que registra a falha em vez de propagar."""
        try:
            await self.refresh()
        except RateFetchError as exc:
            logger.warning(
                "rates_refresh_failed",
                extra={
                    "error": str(exc),
                    "kept_updated_at": (
                        self._table.updated_at.isoformat() if self._table.updated_at else None
                    ),
                },
            )
            return False
        return True

    def start(self) -> None:
        """Inicia o loop periódico (refresh imediato + a cada intervalo)."""
        if self._loop_task is None or self._loop_task.done():
            self._loop_task = asyncio.create_task(self._run_refresh_loop())

    async def stop(self) -> None:
        """Cancela loop e refresh em andamento."""
        for task in (self._loop_task, self._inflight):
            if task is not None and not task.done():
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
        self._loop_task = None
        self._inflight = None

    async def _run_refresh_loop(self) -> None:
        while True:
            try:
                await self.refresh_safe()
            except Exception as exc:
                # O timer sobrevive a qualquer falha; a tabela anterior segue valendo
                logger.exception(
                    "rates_refresh_unexpected_error",
                    extra={"error_type": type(exc).__name__},
                )
            await asyncio.sleep(self._refresh_interval_seconds)

    def _schedule_refresh(self) -> None:
        if self._inflight is not None and not self._inflight.done():
            return
        if (
            self._last_attempt is not None
            and time.monotonic() - self._last_attempt < self._min_retry_seconds
        ):
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return
        self._inflight = asyncio.create_task(self._refresh_in_background())

    async def _refresh_in_background(self) -> RateTable:
        await self.refresh_safe()
        return self._table
