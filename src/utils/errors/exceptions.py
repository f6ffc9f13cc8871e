"""Exceções de domínio da ponte de gorjetas.

Apenas ConfigurationError é fatal (startup). As demais são recuperáveis e
tratadas no ponto indicado em cada classe.
"""

from __future__ import annotations


class TipBridgeError(Exception):
    """Base para todos os erros da ponte."""


class ConfigurationError(TipBridgeError):
    """Credencial ou configuração obrigatória ausente/inválida (fatal no boot)."""


class InfrastructureError(TipBridgeError, RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class TransportError(InfrastructureError):
    """Falha do socket inbound; a reconexão fica a cargo do transporte."""


class RateFetchError(InfrastructureError):
    """Falha ao buscar/parsear tabela de câmbio (mantém tabela anterior)."""


class MalformedEventError(TipBridgeError, ValueError):
    """Doação individual não parseável (ignorada sem abortar o lote)."""


class ConversionLookupError(TipBridgeError, LookupError):
    """Taxa ausente ou inválida para a moeda pedida (fail-open)."""

    def __init__(self, currency: str) -> None:
        super().__init__(f"rate_not_found: {currency}")
        self.currency = currency


class DeliveryError(TipBridgeError):
    """Falha de entrega para a API de gorjetas.

    Attributes:
        stage: Estágio da cadeia de fallback em que ocorreu
        status_code: Status HTTP (None para erro de conexão)
        body: Corpo da resposta, quando disponível
    """

    def __init__(
        self,
        message: str,
        *,
        stage: str | None = None,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.stage = stage
        self.status_code = status_code
        self.body = body

    def with_stage(self, stage: str) -> DeliveryError:
        """Retorna cópia do erro marcada com o estágio."""
        return DeliveryError(
            str(self),
            stage=stage,
            status_code=self.status_code,
            body=self.body,
        )
