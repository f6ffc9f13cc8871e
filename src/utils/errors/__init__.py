"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    ConfigurationError,
    ConversionLookupError,
    DeliveryError,
    InfrastructureError,
    MalformedEventError,
    RateFetchError,
    TipBridgeError,
    TransportError,
)

__all__ = [
    "ConfigurationError",
    "ConversionLookupError",
    "DeliveryError",
    "InfrastructureError",
    "MalformedEventError",
    "RateFetchError",
    "TipBridgeError",
    "TransportError",
]
