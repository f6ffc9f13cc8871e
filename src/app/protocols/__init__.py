"""Protocolos e contratos do core da aplicação."""

from .dedupe import IdentityCacheProtocol
from .http_client import RateSourceProtocol, TipApiClientProtocol
from .normalizer import DonationNormalizerProtocol
from .rate_provider import RateProviderProtocol

__all__ = [
    "DonationNormalizerProtocol",
    "IdentityCacheProtocol",
    "RateProviderProtocol",
    "RateSourceProtocol",
    "TipApiClientProtocol",
]
