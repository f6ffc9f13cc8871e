"""Monta o router raiz da ponte."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.streamlabs.router import router as streamlabs_router

WEBHOOK_PREFIX = "/webhook/streamlabs"


def create_api_router() -> APIRouter:
    """`/` e `/health` na raiz; webhook sob WEBHOOK_PREFIX."""
    api_router = APIRouter()
    api_router.include_router(health_router, tags=["health"])
    api_router.include_router(streamlabs_router, prefix=WEBHOOK_PREFIX, tags=["streamlabs"])
    return api_router
