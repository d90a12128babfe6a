"""Cache handing out one open publication registry per blog directory."""

from __future__ import annotations

from collections.abc import Callable, Mapping
import logging
from pathlib import Path
from threading import Lock
from types import TracebackType

from microblog.core.diagnostics import DiagnosticEmitter, NullEmitter
from microblog.core.exceptions import UnsupportedBackendError
from microblog.core.settings import DEFAULT_REGISTRY_FILENAME, RegistryBackend

from .base import PublicationRegistry
from .sqlite import SqliteRegistry


__all__ = ["REGISTRY_FACTORIES", "RegistryFactory", "RegistryPool"]


logger = logging.getLogger(__name__)


RegistryFactory = Callable[[Path], PublicationRegistry]

REGISTRY_FACTORIES: Mapping[RegistryBackend, RegistryFactory] = {
    RegistryBackend.SQLITE: SqliteRegistry,
}


class RegistryPool:
    """Map each blog directory to a single initialised registry handle.

    The first caller for a directory creates and initialises its registry
    while holding the pool lock; callers racing on the same directory wait and
    receive that same handle. Entries are never evicted.
    """

    def __init__(
        self,
        backend: RegistryBackend | str = RegistryBackend.SQLITE,
        *,
        filename: str = DEFAULT_REGISTRY_FILENAME,
        factory: RegistryFactory | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        try:
            self.backend = RegistryBackend(backend)
        except ValueError as exc:
            raise UnsupportedBackendError(f"unrecognised backend option {backend!r}") from exc
        if factory is None:
            factory = REGISTRY_FACTORIES.get(self.backend)
            if factory is None:  # pragma: no cover - every enum member is registered
                raise UnsupportedBackendError(f"no registry implementation for {self.backend.value}")
        self.filename = filename
        self._factory = factory
        self._registries: dict[Path, PublicationRegistry] = {}
        self._guard = Lock()
        self._emitter = emitter if emitter is not None else NullEmitter()

    def acquire(self, directory: str | Path) -> PublicationRegistry:
        """Return the registry for ``directory``, creating it on first access."""
        key = self._key(directory)
        registry = self._registries.get(key)
        if registry is not None:
            return registry
        with self._guard:
            registry = self._registries.get(key)
            if registry is None:
                registry = self._factory(key / self.filename)
                registry.initialize()
                self._registries[key] = registry
                logger.debug("Registered %s registry for %s", self.backend.value, key)
                self._emitter.event("registry_opened", {"location": str(registry.location)})
        return registry

    def __contains__(self, directory: object) -> bool:
        if not isinstance(directory, (str, Path)):
            return False
        return self._key(directory) in self._registries

    def __len__(self) -> int:
        return len(self._registries)

    def close(self) -> None:
        """Close every handle; the pool must not be used afterwards."""
        with self._guard:
            registries = list(self._registries.values())
            self._registries.clear()
        for registry in registries:
            registry.close()

    def __enter__(self) -> RegistryPool:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @staticmethod
    def _key(directory: str | Path) -> Path:
        return Path(directory).resolve()
