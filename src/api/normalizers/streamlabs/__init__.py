"""Normalizer Streamlabs — extração e normalização de doações."""

from .aliases import FIELD_ALIASES, WEBHOOK_NESTED_KEYS
from .normalizer import StreamlabsNormalizer

__all__ = [
    "FIELD_ALIASES",
    "WEBHOOK_NESTED_KEYS",
    "StreamlabsNormalizer",
]
