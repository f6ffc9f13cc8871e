"""Rotas HTTP: status/health na raiz e webhook de doações."""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
