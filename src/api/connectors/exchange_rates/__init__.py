"""Conector da fonte de câmbio."""

from .http_client import (
    ExchangeRateHttpClient,
    create_exchange_rate_client,
    parse_rates_body,
)

__all__ = [
    "ExchangeRateHttpClient",
    "create_exchange_rate_client",
    "parse_rates_body",
]
