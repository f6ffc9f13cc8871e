"""Snapshot imutável da tabela de câmbio.

Taxas expressam unidades da moeda por 1 unidade da moeda base. A moeda base
está sempre presente com taxa 1, então a tabela nunca é vazia.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

ONE = Decimal(1)
CENTS = Decimal("0.01")


def round_cents(amount: Decimal) -> Decimal:
    """Arredonda para 2 casas decimais (half-up)."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True, slots=True)
class RateTable:
    """Tabela de câmbio ancorada em `base_currency`.

    Attributes:
        base_currency: Moeda âncora (taxa 1)
        rates: Mapa somente leitura moeda -> taxa relativa à base
        updated_at: Momento do último refresh bem-sucedido (None = default de boot)
    """

    base_currency: str
    rates: Mapping[str, Decimal]
    updated_at: datetime | None = None

    @classmethod
    def build(
        cls,
        base_currency: str,
        rates: Mapping[str, Decimal],
        updated_at: datetime | None = None,
    ) -> RateTable:
        """Cria tabela normalizando códigos e garantindo a base em 1."""
        base = base_currency.upper()
        normalized = {code.upper(): rate for code, rate in rates.items()}
        normalized[base] = ONE
        return cls(
            base_currency=base,
            rates=MappingProxyType(normalized),
            updated_at=updated_at,
        )

    @classmethod
    def fallback(
        cls,
        base_currency: str,
        target_currency: str,
        rate: Decimal,
    ) -> RateTable:
        """Tabela de boot com a taxa hardcoded base -> alvo."""
        return cls.build(base_currency, {target_currency: rate})

    def rate_for(self, currency: str) -> Decimal | None:
        """Retorna taxa da moeda ou None se ausente."""
        return self.rates.get(currency.upper())

    def age_seconds(self, now: datetime | None = None) -> float | None:
        """Idade da tabela; None se nunca foi atualizada remotamente."""
        if self.updated_at is None:
            return None
        current = now or datetime.now(UTC)
        return (current - self.updated_at).total_seconds()
