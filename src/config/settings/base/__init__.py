"""Agregador de settings base."""

from __future__ import annotations

from config.settings.base.core import (
    BaseSettings,
    BridgeMode,
    get_base_settings,
)
from config.settings.base.dedupe import (
    DEFAULT_DEDUPE_CAPACITY,
    DedupeSettings,
    get_dedupe_settings,
)

__all__ = [
    "DEFAULT_DEDUPE_CAPACITY",
    "BaseSettings",
    "BridgeMode",
    "DedupeSettings",
    "get_base_settings",
    "get_dedupe_settings",
]
