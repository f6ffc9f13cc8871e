"""Serviços de aplicação.

Unidades reutilizáveis de orquestração. IO externo passa pelos clientes
injetados (protocols); implementações concretas ficam em api/connectors.
"""

from app.services.currency_converter import CurrencyConverter, convert, convert_amount
from app.services.forwarder import FALLBACK_CHAIN, TipForwarder
from app.services.rate_provider import RateProvider

__all__ = [
    "FALLBACK_CHAIN",
    "CurrencyConverter",
    "RateProvider",
    "TipForwarder",
    "convert",
    "convert_amount",
]
