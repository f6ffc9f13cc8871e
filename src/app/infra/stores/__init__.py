"""Stores concretos da aplicação."""

from app.infra.stores.memory_stores import BoundedIdentityCache

__all__ = ["BoundedIdentityCache"]
