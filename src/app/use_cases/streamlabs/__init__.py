"""Use cases da origem Streamlabs."""

from .relay_donation import RelayDonationUseCase, RelayResult

__all__ = [
    "RelayDonationUseCase",
    "RelayResult",
]
