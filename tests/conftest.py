from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from microblog.registry import RegistryPool


@pytest.fixture
def blog_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "blog"
    directory.mkdir()
    return directory


@pytest.fixture
def write_post(blog_dir: Path) -> Callable[..., Path]:
    def _write(name: str, text: str, *, directory: Path | None = None) -> Path:
        target = (directory or blog_dir) / name
        target.write_text(text, encoding="utf-8")
        return target

    return _write


@pytest.fixture
def pool() -> Iterator[RegistryPool]:
    with RegistryPool() as registry_pool:
        yield registry_pool
