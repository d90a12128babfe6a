"""Publication registry backends and the pool sharing them."""

from __future__ import annotations

from .base import PublicationRegistry
from .pool import REGISTRY_FACTORIES, RegistryFactory, RegistryPool
from .sqlite import SqliteRegistry


__all__ = [
    "REGISTRY_FACTORIES",
    "PublicationRegistry",
    "RegistryFactory",
    "RegistryPool",
    "SqliteRegistry",
]
