"""Settings de moeda e câmbio.

A tabela de câmbio é sempre ancorada em `base_currency` (taxa 1).
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import lru_cache

EXCHANGE_RATES_URL: str = "https://open.er-api.com/v6/latest"

# Taxa de fallback (unidades de TARGET_CURRENCY por 1 BASE_CURRENCY) usada
# quando a fonte remota está inacessível no boot. Default ~ THB -> USD.
DEFAULT_FALLBACK_RATE = Decimal("0.028")

_CURRENCY_CODE = re.compile(r"^[A-Z]{3}$")


@dataclass(frozen=True)
class CurrencySettings:
    """Configurações de moeda.

    Attributes:
        base_currency: Moeda âncora da tabela de câmbio
        target_currency: Moeda enviada à API de gorjetas
        forward_only_base_currency: Encaminha apenas doações na moeda base
        rates_url: Endpoint da fonte de câmbio (sem a moeda base)
        refresh_interval_seconds: Intervalo do refresh em background
        stale_after_seconds: Idade a partir da qual a tabela é considerada velha
        request_timeout_seconds: Timeout da busca de câmbio
        fallback_rate: Taxa base -> alvo usada antes do primeiro refresh
    """

    base_currency: str = "THB"
    target_currency: str = "THB"
    forward_only_base_currency: bool = True
    rates_url: str = EXCHANGE_RATES_URL
    refresh_interval_seconds: float = 3600.0
    stale_after_seconds: float = 7200.0
    request_timeout_seconds: float = 10.0
    fallback_rate: Decimal = DEFAULT_FALLBACK_RATE

    def validate(self) -> list[str]:
        """Valida códigos de moeda, intervalos e taxa de fallback."""
        errors: list[str] = []

        if not _CURRENCY_CODE.match(self.base_currency):
            errors.append(f"BASE_CURRENCY inválida: {self.base_currency}")

        if not _CURRENCY_CODE.match(self.target_currency):
            errors.append(f"TARGET_CURRENCY inválida: {self.target_currency}")

        if self.refresh_interval_seconds <= 0:
            errors.append("EXCHANGE_REFRESH_INTERVAL_SECONDS deve ser > 0")

        if self.stale_after_seconds <= 0:
            errors.append("EXCHANGE_STALE_AFTER_SECONDS deve ser > 0")

        if self.request_timeout_seconds <= 0:
            errors.append("EXCHANGE_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if not self.fallback_rate.is_finite() or self.fallback_rate <= 0:
            errors.append("EXCHANGE_FALLBACK_RATE deve ser um decimal > 0")

        return errors


def _parse_decimal(raw: str) -> Decimal:
    try:
        return Decimal(raw.strip())
    except InvalidOperation:
        return Decimal(0)


def _load_currency_from_env() -> CurrencySettings:
    """Carrega CurrencySettings de variáveis de ambiente."""
    return CurrencySettings(
        base_currency=os.getenv("BASE_CURRENCY", "THB").strip().upper(),
        target_currency=os.getenv("TARGET_CURRENCY", "THB").strip().upper(),
        forward_only_base_currency=(
            os.getenv("FORWARD_ONLY_BASE_CURRENCY", "true").lower() in ("true", "1", "yes")
        ),
        rates_url=os.getenv("EXCHANGE_RATES_URL", EXCHANGE_RATES_URL),
        refresh_interval_seconds=float(os.getenv("EXCHANGE_REFRESH_INTERVAL_SECONDS", "3600")),
        stale_after_seconds=float(os.getenv("EXCHANGE_STALE_AFTER_SECONDS", "7200")),
        request_timeout_seconds=float(os.getenv("EXCHANGE_REQUEST_TIMEOUT_SECONDS", "10")),
        fallback_rate=_parse_decimal(
            os.getenv("EXCHANGE_FALLBACK_RATE", str(DEFAULT_FALLBACK_RATE))
        ),
    )


@lru_cache(maxsize=1)
def get_currency_settings() -> CurrencySettings:
    """Retorna instância cacheada de CurrencySettings."""
    return _load_currency_from_env()
