"""Builder do payload de gorjeta por estágio de entrega.

Cada estágio degrada o anterior:
- primary: nome sanitizado, valor arredondado, moeda, mensagem
- empty_message: idem, sem mensagem
- sanitized_name: sem mensagem e nome restrito
- probe: registro sintético mínimo (nome genérico, valor fixo)
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Final

from app.domain import ANONYMOUS_DONOR, DeliveryStage, round_cents

from .sanitizer import (
    restrict_donor_name,
    sanitize_donor_name,
    sanitize_message,
)

if TYPE_CHECKING:
    from app.domain import DonationRecord

PROBE_DONOR_NAME: Final = ANONYMOUS_DONOR
PROBE_AMOUNT: Final = Decimal("1.00")


class TipPayloadBuilder:
    """Constrói `{username, amount, currency, message}` para a API de gorjetas."""

    def build(self, record: DonationRecord, stage: DeliveryStage) -> dict[str, Any]:
        """Constrói payload do estágio.

        Args:
            record: Registro já convertido para a moeda de entrega
            stage: Estágio da cadeia de fallback

        Returns:
            Payload JSON da API
        """
        if stage is DeliveryStage.PROBE:
            return _payload(PROBE_DONOR_NAME, PROBE_AMOUNT, record.currency, "")

        if stage is DeliveryStage.SANITIZED_NAME:
            username = restrict_donor_name(record.donor_name)
        else:
            username = sanitize_donor_name(record.donor_name)

        message = sanitize_message(record.message) if stage is DeliveryStage.PRIMARY else ""
        return _payload(username, record.amount, record.currency, message)


def _payload(username: str, amount: Decimal, currency: str, message: str) -> dict[str, Any]:
    return {
        "username": username,
        "amount": float(round_cents(amount)),
        "currency": currency,
        "message": message,
    }
