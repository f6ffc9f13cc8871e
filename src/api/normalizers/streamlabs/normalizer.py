"""Normalizer Streamlabs — evento bruto -> registros canônicos.

Socket: `{type: "donation", message: <objeto | lista>}`; cada doação do lote
é normalizada de forma independente.
Webhook: corpo JSON achatado (aninhamento opcional em `data`/`donation`).

Eventos de outro tipo resultam em lista vazia (descartados).
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from app.domain import ANONYMOUS_DONOR, DonationRecord, TransportKind
from utils.errors import MalformedEventError

from .aliases import (
    AMOUNT_FIELD,
    CURRENCY_FIELD,
    DONOR_NAME_FIELD,
    IDENTITY_FIELD,
    MESSAGE_FIELD,
    SOCKET_DONATION_TYPE,
)
from .extractor import (
    coerce_amount,
    coerce_currency,
    coerce_text,
    first_present,
    flatten_webhook_body,
    has_any_alias,
)

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class StreamlabsNormalizer:
    """Converte eventos Streamlabs (socket ou webhook) em DonationRecord."""

    def __init__(
        self,
        default_currency: str,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._default_currency = default_currency.upper()
        self._clock = clock

    def normalize(self, raw_event: Any, transport: TransportKind) -> list[DonationRecord]:
        """Normaliza um evento bruto.

        Returns:
            Registros canônicos (lista vazia se o evento não é de doação).
        """
        if not isinstance(raw_event, dict):
            logger.info(
                "event_dropped",
                extra={"transport": transport.value, "reason": "not_object"},
            )
            return []

        if transport is TransportKind.SOCKET:
            entries = _socket_entries(raw_event)
        else:
            flat = flatten_webhook_body(raw_event)
            entries = [flat] if has_any_alias(flat) else []

        if not entries:
            logger.info(
                "event_dropped",
                extra={
                    "transport": transport.value,
                    "event_type": str(raw_event.get("type", "")),
                },
            )
            return []

        arrival_ms = int(self._clock() * 1000)
        records: list[DonationRecord] = []
        for index, entry in enumerate(entries):
            try:
                records.append(self.normalize_entry(entry, transport, arrival_ms, index))
            except MalformedEventError as exc:
                logger.warning(
                    "donation_entry_skipped",
                    extra={"transport": transport.value, "index": index, "error": str(exc)},
                )
        return records

    def normalize_entry(
        self,
        entry: Any,
        transport: TransportKind,
        arrival_ms: int,
        index: int = 0,
    ) -> DonationRecord:
        """Normaliza uma doação individual.

        Raises:
            MalformedEventError: Se a entrada não é um objeto.
        """
        if not isinstance(entry, dict):
            raise MalformedEventError(f"entry_not_object: {type(entry).__name__}")

        donor_name = coerce_text(first_present(entry, DONOR_NAME_FIELD)) or ANONYMOUS_DONOR
        amount = coerce_amount(first_present(entry, AMOUNT_FIELD))
        currency = coerce_currency(first_present(entry, CURRENCY_FIELD), self._default_currency)
        message = coerce_text(first_present(entry, MESSAGE_FIELD))

        explicit_id = first_present(entry, IDENTITY_FIELD)
        if explicit_id is not None:
            identity = str(explicit_id).strip()
        else:
            # Best-effort: sem id explícito, reentregas idênticas em outro ms passam
            identity = f"{donor_name}-{amount}-{currency}-{arrival_ms}-{index}"

        return DonationRecord(
            identity=identity,
            donor_name=donor_name,
            amount=amount,
            currency=currency,
            message=message,
            transport=transport,
        )


def _socket_entries(event: dict[str, Any]) -> list[Any]:
    """Extrai doações de um evento socket (objeto único ou lista)."""
    if event.get("type") != SOCKET_DONATION_TYPE:
        return []
    payload = event.get("message")
    if isinstance(payload, list):
        return payload
    if payload:
        return [payload]
    return []
