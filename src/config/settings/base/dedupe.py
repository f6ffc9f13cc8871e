"""Settings de deduplicação de doações.

O cache de identidades vive apenas em memória (sem persistência entre
reinícios); só a capacidade é configurável.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_DEDUPE_CAPACITY = 5000


@dataclass(frozen=True)
class DedupeSettings:
    """Configurações de dedupe.

    Attributes:
        capacity: Máximo de identidades retidas (FIFO)
    """

    capacity: int = DEFAULT_DEDUPE_CAPACITY

    def validate(self) -> list[str]:
        """Valida configurações de dedupe."""
        errors: list[str] = []
        if self.capacity <= 0:
            errors.append("DEDUPE_CAPACITY deve ser > 0")
        return errors


def _load_dedupe_from_env() -> DedupeSettings:
    """Carrega DedupeSettings de variáveis de ambiente."""
    raw = os.getenv("DEDUPE_CAPACITY", str(DEFAULT_DEDUPE_CAPACITY))
    try:
        capacity = int(raw)
    except ValueError:
        capacity = 0
    return DedupeSettings(capacity=capacity)


@lru_cache(maxsize=1)
def get_dedupe_settings() -> DedupeSettings:
    """Retorna instância cacheada de DedupeSettings."""
    return _load_dedupe_from_env()
