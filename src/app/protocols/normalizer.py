"""Protocolo de normalização inbound."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.domain import DonationRecord, TransportKind


class DonationNormalizerProtocol(Protocol):
    """Contrato mínimo para normalização de evento bruto em registros canônicos."""

    def normalize(
        self,
        raw_event: Any,
        transport: TransportKind,
    ) -> list[DonationRecord]: ...
