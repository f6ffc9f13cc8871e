"""Conversão de moeda sobre um snapshot da tabela de câmbio.

Direção explícita em relação à moeda base da tabela (taxa = unidades da
moeda por 1 base):
- base -> estrangeira: multiplica pela taxa da estrangeira
- estrangeira -> base: divide pela taxa da estrangeira
- estrangeira -> estrangeira: passa pela base

O resultado de uma conversão real é arredondado para 2 casas (half-up);
a conversão identidade devolve o valor intacto.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain import round_cents
from utils.errors import ConversionLookupError

if TYPE_CHECKING:
    from decimal import Decimal

    from app.domain import DonationRecord, RateTable

logger = logging.getLogger(__name__)


def _rate(table: RateTable, currency: str) -> Decimal:
    rate = table.rate_for(currency)
    if rate is None or not rate.is_finite() or rate <= 0:
        raise ConversionLookupError(currency)
    return rate


def convert_amount(
    amount: Decimal,
    source_currency: str,
    target_currency: str,
    table: RateTable,
) -> Decimal:
    """Converte valor, levantando erro se faltar taxa.

    Raises:
        ConversionLookupError: Taxa ausente ou inválida.
    """
    source = source_currency.upper()
    target = target_currency.upper()
    if source == target:
        return amount

    base = table.base_currency
    if source == base:
        converted = amount * _rate(table, target)
    elif target == base:
        converted = amount / _rate(table, source)
    else:
        converted = amount / _rate(table, source) * _rate(table, target)
    return round_cents(converted)


def convert(
    amount: Decimal,
    source_currency: str,
    target_currency: str,
    table: RateTable,
) -> Decimal:
    """Converte valor com fail-open: sem taxa, devolve o valor original."""
    try:
        return convert_amount(amount, source_currency, target_currency, table)
    except ConversionLookupError as exc:
        logger.warning(
            "currency_rate_missing",
            extra={
                "source_currency": source_currency,
                "target_currency": target_currency,
                "missing_currency": exc.currency,
                "base_currency": table.base_currency,
            },
        )
        return amount


class CurrencyConverter:
    """Converte registros canônicos para a moeda de entrega."""

    def __init__(self, target_currency: str) -> None:
        self._target_currency = target_currency.upper()

    @property
    def target_currency(self) -> str:
        return self._target_currency

    def convert_record(self, record: DonationRecord, table: RateTable) -> DonationRecord:
        """Retorna novo registro na moeda alvo.

        Sem taxa disponível, o registro segue na moeda ORIGINAL (nunca é
        rotulado com a moeda alvo sem ter sido convertido).
        """
        try:
            amount = convert_amount(
                record.amount, record.currency, self._target_currency, table
            )
        except ConversionLookupError as exc:
            logger.warning(
                "currency_conversion_skipped",
                extra={
                    "identity": record.identity,
                    "source_currency": record.currency,
                    "target_currency": self._target_currency,
                    "missing_currency": exc.currency,
                },
            )
            return record
        if amount == record.amount and record.currency == self._target_currency:
            return record
        return record.with_amount(amount, self._target_currency)
