"""Settings base da ponte: modo de ingress e porta HTTP."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

BridgeMode = Literal["socket", "webhook"]

VALID_MODES: frozenset[str] = frozenset({"socket", "webhook"})

DEFAULT_PORT = 3000


@dataclass(frozen=True)
class BaseSettings:
    """Configurações do processo.

    Attributes:
        mode: Ingress ativo. "socket" conecta no Streamlabs; "webhook" só
            aceita POST em /webhook/streamlabs.
        port: Porta HTTP (status, health e webhook sobem nos dois modos)
    """

    mode: str = "socket"
    port: int = DEFAULT_PORT

    @property
    def is_socket_mode(self) -> bool:
        """Retorna True se o listener de socket deve ser iniciado."""
        return self.mode == "socket"

    def validate(self) -> list[str]:
        """Valida modo e porta.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []
        if self.mode not in VALID_MODES:
            errors.append(f"MODE inválido: {self.mode} (use 'socket' ou 'webhook')")
        if not 0 < self.port < 65536:
            errors.append(f"PORT inválida: {self.port}")
        return errors


def _parse_port(raw: str) -> int:
    # Porta não numérica vira 0 e é reportada por validate()
    try:
        return int(raw)
    except ValueError:
        return 0


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Lê MODE e PORT do ambiente (cacheado por processo)."""
    return BaseSettings(
        mode=os.getenv("MODE", "socket").strip().lower(),
        port=_parse_port(os.getenv("PORT", str(DEFAULT_PORT))),
    )
