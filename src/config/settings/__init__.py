"""Agregador de settings da ponte de gorjetas.

Cada integração (origem, destino, câmbio) tem seu módulo; este pacote
só re-exporta dataclasses e getters.
"""

from __future__ import annotations

from config.settings.base import (
    DEFAULT_DEDUPE_CAPACITY,
    BaseSettings,
    BridgeMode,
    DedupeSettings,
    get_base_settings,
    get_dedupe_settings,
)
from config.settings.currency import (
    DEFAULT_FALLBACK_RATE,
    EXCHANGE_RATES_URL,
    CurrencySettings,
    get_currency_settings,
)
from config.settings.streamelements import (
    STREAMELEMENTS_API_BASE_URL,
    StreamElementsSettings,
    get_streamelements_settings,
)
from config.settings.streamlabs import (
    STREAMLABS_SOCKET_URL,
    StreamlabsSettings,
    get_streamlabs_settings,
)

__all__ = [
    # Constants
    "DEFAULT_DEDUPE_CAPACITY",
    "DEFAULT_FALLBACK_RATE",
    "EXCHANGE_RATES_URL",
    "STREAMELEMENTS_API_BASE_URL",
    "STREAMLABS_SOCKET_URL",
    # Base
    "BaseSettings",
    "BridgeMode",
    "CurrencySettings",
    "DedupeSettings",
    # Channels
    "StreamElementsSettings",
    "StreamlabsSettings",
    "get_base_settings",
    "get_currency_settings",
    "get_dedupe_settings",
    "get_streamelements_settings",
    "get_streamlabs_settings",
]
