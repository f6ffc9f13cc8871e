"""Coordenação inbound da origem Streamlabs."""

from .dispatcher import SerialDispatcher

__all__ = ["SerialDispatcher"]
