"""Interface implemented by every publication registry backend."""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Protocol, runtime_checkable


__all__ = ["PublicationRegistry"]


@runtime_checkable
class PublicationRegistry(Protocol):
    """Persistent mapping from post name to its first publication date.

    A name receives a date at most once. ``set`` on a known name raises
    `DuplicateEntryError`; callers look the date up with ``get`` first.
    """

    @property
    def location(self) -> Path: ...

    def initialize(self) -> None:
        """Create the backing store and its schema when missing; idempotent."""
        ...

    def get(self, name: str) -> date | None:
        """Return the stored date for ``name`` or ``None`` when it was never published."""
        ...

    def set(self, name: str, when: date | datetime | None = None) -> date:
        """Record the publication date of ``name``; ``None`` stamps today."""
        ...

    def close(self) -> None: ...
