"""Listener do socket em tempo real do Streamlabs (socket.io).

Mantém uma conexão longa e repassa cada mensagem `event` ao callback de
submissão. Reconexões após queda ficam a cargo do próprio cliente socket.io;
aqui só repetimos a conexão inicial até o primeiro sucesso.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, Any

import socketio
from socketio.exceptions import ConnectionError as SocketConnectionError

from utils.errors import TransportError

if TYPE_CHECKING:
    from collections.abc import Callable

    from config.settings import StreamlabsSettings

logger = logging.getLogger(__name__)


class StreamlabsSocketListener:
    """Conexão socket.io com o Streamlabs."""

    def __init__(
        self,
        settings: StreamlabsSettings,
        on_event: Callable[[Any], object],
        client: socketio.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._on_event = on_event
        self._client = client or socketio.AsyncClient(
            reconnection=True,
            reconnection_delay=settings.reconnection_delay_seconds,
            reconnection_delay_max=settings.reconnection_delay_max_seconds,
            logger=False,
            engineio_logger=False,
        )
        self._client.on("connect", self._handle_connect)
        self._client.on("disconnect", self._handle_disconnect)
        self._client.on("connect_error", self._handle_connect_error)
        self._client.on("event", self._handle_event)
        self._connect_task: asyncio.Task[None] | None = None

    @property
    def connected(self) -> bool:
        return bool(self._client.connected)

    def start(self) -> None:
        """Inicia a conexão em background (não bloqueia o startup)."""
        if self._connect_task is None or self._connect_task.done():
            self._connect_task = asyncio.create_task(self._connect_until_ready())

    async def stop(self) -> None:
        """Cancela tentativas pendentes e desconecta."""
        if self._connect_task is not None and not self._connect_task.done():
            self._connect_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._connect_task
        if self._client.connected:
            await self._client.disconnect()

    async def connect_once(self) -> None:
        """Uma tentativa de conexão.

        Raises:
            TransportError: Se o servidor recusar ou estiver inacessível.
        """
        try:
            await self._client.connect(
                self._settings.connect_url,
                transports=["websocket"],
            )
        except SocketConnectionError as exc:
            raise TransportError(f"socket_connect_failed: {exc}") from exc

    async def _connect_until_ready(self) -> None:
        delay = self._settings.reconnection_delay_seconds
        logger.info("socket_connecting", extra={"url": self._settings.socket_url})
        while True:
            try:
                await self.connect_once()
                return
            except TransportError as exc:
                logger.error(
                    "socket_connect_error",
                    extra={"error": str(exc), "retry_in_seconds": delay},
                )
            await asyncio.sleep(delay)
            delay = min(delay * 2, self._settings.reconnection_delay_max_seconds)

    async def _handle_connect(self) -> None:
        logger.info("socket_connected")

    async def _handle_disconnect(self, *args: Any) -> None:
        logger.warning("socket_disconnected", extra={"reason": str(args[0]) if args else ""})

    async def _handle_connect_error(self, data: Any = None) -> None:
        logger.error("socket_connect_error", extra={"error": str(data)})

    async def _handle_event(self, data: Any) -> None:
        if not data:
            return
        self._on_event(data)
