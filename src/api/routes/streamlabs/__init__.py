"""Rotas HTTP do Streamlabs."""

from __future__ import annotations

from api.routes.streamlabs.router import router

__all__ = ["router"]
