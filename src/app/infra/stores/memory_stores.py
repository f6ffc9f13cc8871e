"""Cache de identidades em memória.

Escopo de processo: começa vazio no boot, nunca é persistido e se perde no
restart (janela de dedupe best-effort).
"""

from __future__ import annotations

from collections import OrderedDict

from app.protocols.dedupe import IdentityCacheProtocol
from config.settings.base.dedupe import DEFAULT_DEDUPE_CAPACITY


class BoundedIdentityCache(IdentityCacheProtocol):
    """Conjunto FIFO limitado de identidades já vistas.

    A ordem rastreada é só a de inserção: uma identidade readmitida não é
    promovida (FIFO, não LRU). Não é thread-safe; o caminho de eventos roda
    num único event loop.
    """

    def __init__(self, capacity: int = DEFAULT_DEDUPE_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity deve ser > 0")
        self._capacity = capacity
        self._seen: OrderedDict[str, None] = OrderedDict()

    @property
    def capacity(self) -> int:
        return self._capacity

    def admit(self, identity: str) -> bool:
        """Registra identidade nova; False se já retida."""
        if identity in self._seen:
            return False
        self._seen[identity] = None
        if len(self._seen) > self._capacity:
            self._seen.popitem(last=False)
        return True

    def __contains__(self, identity: object) -> bool:
        return identity in self._seen

    def __len__(self) -> int:
        return len(self._seen)
