"""Runtime da ponte: componentes vivos durante o ciclo de vida do app.

Criado no lifespan do FastAPI e guardado em `app.state.runtime`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from api.connectors.streamlabs import StreamlabsSocketListener
from app.bootstrap.dependencies import create_rate_provider, create_relay_use_case
from app.coordinators.streamlabs.inbound import SerialDispatcher
from app.domain import TransportKind
from config.settings import get_base_settings, get_streamlabs_settings

if TYPE_CHECKING:
    from app.services.rate_provider import RateProvider
    from app.use_cases.streamlabs import RelayDonationUseCase

logger = logging.getLogger(__name__)


@dataclass
class BridgeRuntime:
    """Agrupa provedor de câmbio, dispatchers e listener do socket."""

    mode: str
    rate_provider: RateProvider
    use_case: RelayDonationUseCase
    webhook_dispatcher: SerialDispatcher
    socket_dispatcher: SerialDispatcher
    socket_listener: StreamlabsSocketListener | None = None

    @property
    def socket_connected(self) -> bool:
        return self.socket_listener is not None and self.socket_listener.connected

    async def start(self) -> None:
        """Inicia refresh de câmbio, workers e (no modo socket) o listener."""
        self.rate_provider.start()
        self.webhook_dispatcher.start()
        self.socket_dispatcher.start()
        if self.socket_listener is not None:
            self.socket_listener.start()
        logger.info("bridge_started", extra={"mode": self.mode})

    async def stop(self, timeout_seconds: float = 30.0) -> None:
        """Para ingress primeiro, depois drena filas e encerra o refresh."""
        if self.socket_listener is not None:
            await self.socket_listener.stop()
        await self.socket_dispatcher.stop(timeout_seconds)
        await self.webhook_dispatcher.stop(timeout_seconds)
        await self.rate_provider.stop()
        logger.info("bridge_stopped", extra={"mode": self.mode})


def create_runtime() -> BridgeRuntime:
    """Monta o runtime a partir das settings (já validadas)."""
    base = get_base_settings()
    rate_provider = create_rate_provider()
    use_case = create_relay_use_case(rate_provider=rate_provider)
    socket_dispatcher = SerialDispatcher(use_case, TransportKind.SOCKET)

    socket_listener = None
    if base.is_socket_mode:
        socket_listener = StreamlabsSocketListener(
            get_streamlabs_settings(),
            on_event=socket_dispatcher.submit_nowait,
        )

    return BridgeRuntime(
        mode=base.mode,
        rate_provider=rate_provider,
        use_case=use_case,
        webhook_dispatcher=SerialDispatcher(use_case, TransportKind.WEBHOOK),
        socket_dispatcher=socket_dispatcher,
        socket_listener=socket_listener,
    )
