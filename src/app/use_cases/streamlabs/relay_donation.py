"""Use case de relay: evento bruto -> gorjetas entregues.

Fluxo por registro: dedupe (síncrono, antes de qualquer IO) -> política de
moeda -> conversão -> entrega. A falha de um registro não interrompe os
demais do mesmo lote.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from app.observability import record_relay
from utils.errors import DeliveryError

if TYPE_CHECKING:
    from app.domain import DeliveryResult, DonationRecord, TransportKind
    from app.protocols import (
        DonationNormalizerProtocol,
        IdentityCacheProtocol,
        RateProviderProtocol,
    )
    from app.services.currency_converter import CurrencyConverter
    from app.services.forwarder import TipForwarder

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RelayResult:
    """Resultado do processamento de um evento inbound."""

    received: int = 0
    duplicates: int = 0
    skipped: int = 0
    delivered: int = 0
    failed: int = 0
    deliveries: list[DeliveryResult] = field(default_factory=list)
    errors: list[DeliveryError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def counters(self) -> dict[str, int]:
        return {
            "received": self.received,
            "duplicates": self.duplicates,
            "skipped": self.skipped,
            "delivered": self.delivered,
            "failed": self.failed,
        }


class RelayDonationUseCase:
    """Orquestra normalizer, dedupe, conversor e forwarder."""

    def __init__(
        self,
        *,
        normalizer: DonationNormalizerProtocol,
        identity_cache: IdentityCacheProtocol,
        rate_provider: RateProviderProtocol,
        converter: CurrencyConverter,
        forwarder: TipForwarder,
        base_currency: str,
        forward_only_base_currency: bool = False,
    ) -> None:
        self._normalizer = normalizer
        self._identity_cache = identity_cache
        self._rate_provider = rate_provider
        self._converter = converter
        self._forwarder = forwarder
        self._base_currency = base_currency.upper()
        self._forward_only_base_currency = forward_only_base_currency

    async def execute(
        self,
        *,
        payload: Any,
        transport: TransportKind,
        correlation_id: str = "",
    ) -> RelayResult:
        """Processa um evento bruto até o fim (incluindo fallbacks)."""
        result = RelayResult()
        records = self._normalizer.normalize(payload, transport)
        result.received = len(records)

        for record in records:
            await self._relay_record(record, result)

        record_relay(transport.value, result.counters(), correlation_id)
        return result

    async def _relay_record(self, record: DonationRecord, result: RelayResult) -> None:
        if not self._identity_cache.admit(record.identity):
            result.duplicates += 1
            logger.info(
                "donation_duplicate_skipped",
                extra={"identity": record.identity, "transport": record.transport.value},
            )
            return

        logger.info(
            "donation_received",
            extra={
                "identity": record.identity,
                "transport": record.transport.value,
                "amount": str(record.amount),
                "currency": record.currency,
            },
        )

        if self._forward_only_base_currency and record.currency != self._base_currency:
            result.skipped += 1
            logger.info(
                "donation_currency_skipped",
                extra={
                    "identity": record.identity,
                    "currency": record.currency,
                    "base_currency": self._base_currency,
                },
            )
            return

        converted = self._converter.convert_record(record, self._rate_provider.current_table())

        try:
            delivery = await self._forwarder.deliver(converted)
        except DeliveryError as exc:
            result.failed += 1
            result.errors.append(exc)
            logger.error(
                "donation_delivery_failed",
                extra={
                    "identity": record.identity,
                    "stage": exc.stage,
                    "status_code": exc.status_code,
                    "response_body": exc.body,
                },
            )
            return

        result.delivered += 1
        result.deliveries.append(delivery)
