"""Cliente da fonte de câmbio (`GET {url}/{BASE}`).

Formato aceito (open.er-api.com e compatíveis):
    {"result": "success", "base_code": "THB", "rates": {"USD": 0.028, ...}}

Qualquer resposta incompleta vira RateFetchError; nunca retorna tabela
parcial.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

from app.domain import RateTable
from app.infra.http import HttpClient, HttpClientConfig, HttpError
from utils.errors import RateFetchError

if TYPE_CHECKING:
    from config.settings import CurrencySettings

logger = logging.getLogger(__name__)


class ExchangeRateHttpClient(HttpClient):
    """Busca a tabela de câmbio mais recente ancorada na moeda base."""

    def __init__(self, rates_url: str, config: HttpClientConfig | None = None) -> None:
        super().__init__(config)
        self._rates_url = rates_url.rstrip("/")

    async def fetch_latest(self, base_currency: str) -> RateTable:
        """Busca e valida a tabela.

        Raises:
            RateFetchError: Falha de rede, status não-2xx ou corpo inválido.
        """
        base = base_currency.upper()
        url = f"{self._rates_url}/{base}"
        try:
            response = await self.get(url, headers={"Accept": "application/json"})
        except HttpError as exc:
            raise RateFetchError(f"rates_request_failed: {exc}") from exc

        if response.status_code >= 400:
            raise RateFetchError(f"rates_http_status: {response.status_code}")

        try:
            body = response.json()
        except ValueError as exc:
            raise RateFetchError("rates_invalid_json") from exc

        table = parse_rates_body(body, base)
        logger.debug(
            "rates_fetched",
            extra={"base_currency": base, "currency_count": len(table.rates)},
        )
        return table


def parse_rates_body(body: Any, base_currency: str) -> RateTable:
    """Converte corpo JSON em RateTable.

    Raises:
        RateFetchError: Corpo sem `rates`, resultado de erro, base divergente
            ou taxa não positiva.
    """
    if not isinstance(body, dict):
        raise RateFetchError("rates_body_not_object")

    result = body.get("result")
    if result is not None and result != "success":
        raise RateFetchError(f"rates_result_error: {body.get('error-type', result)}")

    reported_base = body.get("base_code") or body.get("base")
    if reported_base and str(reported_base).upper() != base_currency.upper():
        raise RateFetchError(f"rates_base_mismatch: {reported_base}")

    raw_rates = body.get("rates")
    if not isinstance(raw_rates, dict) or not raw_rates:
        raise RateFetchError("rates_missing")

    rates: dict[str, Decimal] = {}
    for code, raw in raw_rates.items():
        try:
            rate = Decimal(str(raw))
        except InvalidOperation as exc:
            raise RateFetchError(f"rates_invalid_value: {code}") from exc
        if not rate.is_finite() or rate <= 0:
            raise RateFetchError(f"rates_invalid_value: {code}")
        rates[str(code).upper()] = rate

    return RateTable.build(base_currency, rates, updated_at=datetime.now(UTC))


def create_exchange_rate_client(
    settings: CurrencySettings | None = None,
) -> ExchangeRateHttpClient:
    """Factory do cliente de câmbio."""
    from config.settings import get_currency_settings

    currency = settings or get_currency_settings()
    return ExchangeRateHttpClient(
        currency.rates_url,
        HttpClientConfig(timeout_seconds=currency.request_timeout_seconds),
    )
