"""Dispatcher serial por origem.

Uma fila e um worker por transporte: cada evento é processado até o fim
(normalize -> dedupe -> convert -> deliver, com fallbacks) antes do próximo
da mesma origem começar. Ordem entre origens diferentes não é garantida.
Nenhum lock é mantido durante chamadas de rede.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from app.observability import correlation_scope, generate_correlation_id

if TYPE_CHECKING:
    from app.domain import TransportKind
    from app.use_cases.streamlabs import RelayDonationUseCase, RelayResult

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_MAXSIZE = 1000


@dataclass(slots=True)
class _Job:
    payload: Any
    correlation_id: str
    future: asyncio.Future[RelayResult] | None = None


class SerialDispatcher:
    """Fila FIFO com um único consumidor para uma origem."""

    def __init__(
        self,
        use_case: RelayDonationUseCase,
        transport: TransportKind,
        *,
        maxsize: int = DEFAULT_QUEUE_MAXSIZE,
    ) -> None:
        self._use_case = use_case
        self._transport = transport
        self._queue: asyncio.Queue[_Job] = asyncio.Queue(maxsize=maxsize)
        self._worker: asyncio.Task[None] | None = None

    @property
    def transport(self) -> TransportKind:
        return self._transport

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def start(self) -> None:
        """Inicia o worker (idempotente)."""
        if self._worker is None or self._worker.done():
            self._worker = asyncio.create_task(self._run())

    def submit_nowait(self, payload: Any, correlation_id: str | None = None) -> bool:
        """Enfileira sem aguardar resultado (socket).

        Returns:
            False se a fila estiver cheia (evento descartado).
        """
        self.start()
        job = _Job(payload=payload, correlation_id=correlation_id or generate_correlation_id())
        try:
            self._queue.put_nowait(job)
        except asyncio.QueueFull:
            logger.warning(
                "dispatcher_queue_full_dropped",
                extra={
                    "transport": self._transport.value,
                    "correlation_id": job.correlation_id,
                    "pending": self.pending,
                },
            )
            return False
        return True

    async def submit(self, payload: Any, correlation_id: str | None = None) -> RelayResult:
        """Enfileira e aguarda o processamento completo (webhook)."""
        self.start()
        future: asyncio.Future[RelayResult] = asyncio.get_running_loop().create_future()
        job = _Job(
            payload=payload,
            correlation_id=correlation_id or generate_correlation_id(),
            future=future,
        )
        await self._queue.put(job)
        return await future

    async def stop(self, timeout_seconds: float = 30.0) -> None:
        """Aguarda a fila esvaziar (com timeout) e encerra o worker.

        Eventos ainda pendentes após o timeout são descartados.
        """
        if self._worker is None:
            return
        try:
            await asyncio.wait_for(self._queue.join(), timeout=timeout_seconds)
        except TimeoutError:
            logger.warning(
                "dispatcher_shutdown_dropped",
                extra={"transport": self._transport.value, "pending": self.pending},
            )
        self._worker.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._worker
        self._worker = None
        self._fail_pending()

    async def _run(self) -> None:
        while True:
            job = await self._queue.get()
            try:
                await self._process(job)
            except asyncio.CancelledError:
                if job.future is not None and not job.future.done():
                    job.future.cancel()
                raise
            finally:
                self._queue.task_done()

    async def _process(self, job: _Job) -> None:
        with correlation_scope(job.correlation_id):
            try:
                result = await self._use_case.execute(
                    payload=job.payload,
                    transport=self._transport,
                    correlation_id=job.correlation_id,
                )
            except Exception as exc:
                logger.exception(
                    "dispatcher_processing_failed",
                    extra={
                        "transport": self._transport.value,
                        "error_type": type(exc).__name__,
                    },
                )
                if job.future is not None and not job.future.done():
                    job.future.set_exception(exc)
                return

        if job.future is not None and not job.future.done():
            job.future.set_result(result)

    def _fail_pending(self) -> None:
        while not self._queue.empty():
            job = self._queue.get_nowait()
            if job.future is not None and not job.future.done():
                job.future.cancel()
            self._queue.task_done()
