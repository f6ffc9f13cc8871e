"""Protocolo de dedupe de doações.

Interface leve (ABC) dependida pela camada de aplicação.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class IdentityCacheProtocol(ABC):
    """Contrato síncrono de admissão por identidade.

    Método canônico:
    - admit(identity: str) -> bool
      Retorna True na primeira vez que a identidade é vista (e a registra);
      False em toda chamada seguinte enquanto ela estiver retida.

    Síncrono de propósito: a admissão acontece antes de qualquer await, então
    um duplicado que chega durante a entrega ainda é rejeitado.
    """

    @abstractmethod
    def admit(self, identity: str) -> bool:
        """Admite identidade nova ou rejeita duplicada."""

    @abstractmethod
    def __len__(self) -> int:
        """Quantidade de identidades retidas."""
