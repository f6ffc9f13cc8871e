"""Payload builders da API de gorjetas do StreamElements."""

from .sanitizer import (
    restrict_donor_name,
    sanitize_donor_name,
    sanitize_message,
)
from .tip import PROBE_AMOUNT, PROBE_DONOR_NAME, TipPayloadBuilder

__all__ = [
    "PROBE_AMOUNT",
    "PROBE_DONOR_NAME",
    "TipPayloadBuilder",
    "restrict_donor_name",
    "sanitize_donor_name",
    "sanitize_message",
]
