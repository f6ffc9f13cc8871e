"""Protocolo de leitura da tabela de câmbio."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain import RateTable


class RateProviderProtocol(Protocol):
    """Leitores sempre recebem um snapshot completo (possivelmente velho)."""

    def current_table(self) -> RateTable: ...

    async def refresh(self) -> RateTable: ...
