"""Factories — criação das implementações concretas a partir das settings.

Referência: app/bootstrap é o único lugar que conhece classes concretas.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.exchange_rates import create_exchange_rate_client
from api.connectors.streamelements import create_streamelements_http_client
from api.normalizers import StreamlabsNormalizer
from app.domain import RateTable
from app.infra.stores import BoundedIdentityCache
from app.services.currency_converter import CurrencyConverter
from app.services.forwarder import TipForwarder
from app.services.rate_provider import RateProvider
from app.use_cases.streamlabs import RelayDonationUseCase
from config.settings import (
    get_currency_settings,
    get_dedupe_settings,
    get_streamelements_settings,
)

if TYPE_CHECKING:
    from app.protocols import RateSourceProtocol, TipApiClientProtocol
    from config.settings import CurrencySettings, StreamElementsSettings

logger = logging.getLogger(__name__)


def create_identity_cache() -> BoundedIdentityCache:
    """Cria o cache de identidades (memória, FIFO limitado)."""
    return BoundedIdentityCache(capacity=get_dedupe_settings().capacity)


def create_rate_provider(
    settings: CurrencySettings | None = None,
    source: RateSourceProtocol | None = None,
) -> RateProvider:
    """Cria o provedor de câmbio com a tabela de fallback de boot."""
    currency = settings or get_currency_settings()
    default_table = RateTable.fallback(
        currency.base_currency,
        currency.target_currency,
        currency.fallback_rate,
    )
    return RateProvider(
        source or create_exchange_rate_client(currency),
        default_table,
        refresh_interval_seconds=currency.refresh_interval_seconds,
        stale_after_seconds=currency.stale_after_seconds,
    )


def create_tip_forwarder(
    settings: StreamElementsSettings | None = None,
    client: TipApiClientProtocol | None = None,
) -> TipForwarder:
    """Cria o forwarder apontado para o canal configurado."""
    streamelements = settings or get_streamelements_settings()
    return TipForwarder(
        client or create_streamelements_http_client(streamelements),
        streamelements.get_tips_endpoint(),
        streamelements.jwt,
        # Margem sobre o timeout HTTP para cobrir retries configurados
        attempt_timeout_seconds=streamelements.request_timeout_seconds
        * (streamelements.max_retries + 1)
        + 5.0,
    )


def create_relay_use_case(
    *,
    rate_provider: RateProvider,
    forwarder: TipForwarder | None = None,
    settings: CurrencySettings | None = None,
) -> RelayDonationUseCase:
    """Monta o pipeline normalize -> dedupe -> convert -> deliver."""
    currency = settings or get_currency_settings()
    return RelayDonationUseCase(
        normalizer=StreamlabsNormalizer(default_currency=currency.base_currency),
        identity_cache=create_identity_cache(),
        rate_provider=rate_provider,
        converter=CurrencyConverter(currency.target_currency),
        forwarder=forwarder or create_tip_forwarder(),
        base_currency=currency.base_currency,
        forward_only_base_currency=currency.forward_only_base_currency,
    )
