"""Settings da API de gorjetas do StreamElements (destino).

Credenciais obrigatórias: sem JWT ou channel id o processo não sobe.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

STREAMELEMENTS_API_BASE_URL: str = "https://api.streamelements.com/kappa/v2"


@dataclass(frozen=True)
class StreamElementsSettings:
    """Configurações do destino StreamElements.

    Attributes:
        jwt: Token JWT do canal (Authorization: Bearer)
        channel_id: ID do canal/conta que recebe as gorjetas
        api_base_url: URL base da API kappa
        request_timeout_seconds: Timeout por tentativa de entrega
        max_retries: Retries HTTP por estágio (429/5xx/conexão)
    """

    jwt: str = ""
    channel_id: str = ""
    api_base_url: str = STREAMELEMENTS_API_BASE_URL
    request_timeout_seconds: float = 10.0
    max_retries: int = 0

    def get_tips_endpoint(self, channel_id: str | None = None) -> str:
        """Retorna URL de registro de gorjetas do canal.

        Raises:
            ValueError: Se channel_id não informado e não configurado.
        """
        cid = channel_id or self.channel_id
        if not cid:
            raise ValueError("channel_id é obrigatório")
        return f"{self.api_base_url.rstrip('/')}/tips/{cid}"

    def validate(self) -> list[str]:
        """Valida credenciais e limites de entrega."""
        errors: list[str] = []

        if not self.jwt:
            errors.append("SE_JWT não configurado")

        if not self.channel_id:
            errors.append("SE_CHANNEL_ID não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("SE_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("SE_MAX_RETRIES deve ser >= 0")

        return errors


def _load_streamelements_from_env() -> StreamElementsSettings:
    """Carrega StreamElementsSettings de variáveis de ambiente."""
    return StreamElementsSettings(
        jwt=os.getenv("SE_JWT", "").strip(),
        channel_id=os.getenv("SE_CHANNEL_ID", "").strip(),
        api_base_url=os.getenv("SE_API_BASE_URL", STREAMELEMENTS_API_BASE_URL),
        request_timeout_seconds=float(os.getenv("SE_REQUEST_TIMEOUT_SECONDS", "10")),
        max_retries=int(os.getenv("SE_MAX_RETRIES", "0")),
    )


@lru_cache(maxsize=1)
def get_streamelements_settings() -> StreamElementsSettings:
    """Retorna instância cacheada de StreamElementsSettings."""
    return _load_streamelements_from_env()
