"""Protocolos HTTP usados pelo app.

Evita dependência direta da camada api.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.domain import RateTable


class TipApiClientProtocol(Protocol):
    """Contrato mínimo para o cliente da API de gorjetas."""

    async def create_tip(
        self,
        endpoint: str,
        jwt: str,
        payload: dict[str, Any],
    ) -> dict[str, Any]: ...


class RateSourceProtocol(Protocol):
    """Contrato mínimo para a fonte remota de câmbio."""

    async def fetch_latest(self, base_currency: str) -> RateTable: ...
