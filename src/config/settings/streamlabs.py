"""Settings da origem Streamlabs (socket de eventos em tempo real)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

STREAMLABS_SOCKET_URL: str = "https://sockets.streamlabs.com"


@dataclass(frozen=True)
class StreamlabsSettings:
    """Configurações do socket Streamlabs.

    Attributes:
        socket_token: Token do socket API (obrigatório em MODE=socket)
        socket_url: URL do servidor socket.io
        reconnection_delay_seconds: Atraso inicial de reconexão
        reconnection_delay_max_seconds: Atraso máximo de reconexão
    """

    socket_token: str = ""
    socket_url: str = STREAMLABS_SOCKET_URL
    reconnection_delay_seconds: float = 1.0
    reconnection_delay_max_seconds: float = 30.0

    @property
    def connect_url(self) -> str:
        """URL de conexão com o token na query string."""
        return f"{self.socket_url}?token={self.socket_token}"

    def validate(self, *, socket_mode: bool) -> list[str]:
        """Valida configurações; o token só é exigido no modo socket."""
        errors: list[str] = []

        if socket_mode and not self.socket_token:
            errors.append("MODE=socket requer SL_SOCKET_TOKEN configurado")

        if self.reconnection_delay_seconds <= 0:
            errors.append("SL_RECONNECTION_DELAY_SECONDS deve ser > 0")

        if self.reconnection_delay_max_seconds < self.reconnection_delay_seconds:
            errors.append(
                "SL_RECONNECTION_DELAY_MAX_SECONDS deve ser >= SL_RECONNECTION_DELAY_SECONDS"
            )

        return errors


def _load_streamlabs_from_env() -> StreamlabsSettings:
    """Carrega StreamlabsSettings de variáveis de ambiente."""
    return StreamlabsSettings(
        socket_token=os.getenv("SL_SOCKET_TOKEN", "").strip(),
        socket_url=os.getenv("SL_SOCKET_URL", STREAMLABS_SOCKET_URL),
        reconnection_delay_seconds=float(os.getenv("SL_RECONNECTION_DELAY_SECONDS", "1")),
        reconnection_delay_max_seconds=float(
            os.getenv("SL_RECONNECTION_DELAY_MAX_SECONDS", "30")
        ),
    )


@lru_cache(maxsize=1)
def get_streamlabs_settings() -> StreamlabsSettings:
    """Retorna instância cacheada de StreamlabsSettings."""
    return _load_streamlabs_from_env()
