"""Settings model shared by the library entry points and the CLI.

BlogSettings

`tracking` (`bool`)
: Persist the first publication date of each post in the collection's
  registry and reuse it on later builds. When `False`, every build stamps
  today's date.

`backend` (`RegistryBackend`)
: Storage engine backing the publication registry. Only `sqlite` ships today.

`registry_filename` (`str`)
: Name of the registry file created inside the blog directory.

`concurrent` (`bool`)
: Render posts on a thread pool instead of one after the other. Output is
  identical in both modes.

`max_workers` (`int | None`)
: Upper bound on rendering threads when `concurrent` is set. Defaults to the
  executor's own heuristic.

`post_template` (`Path | None`)
: Template file used for each post instead of the built-in one. Relative
  paths resolve against the settings file.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
import yaml

from .exceptions import SettingsError


__all__ = ["DEFAULT_REGISTRY_FILENAME", "BlogSettings", "RegistryBackend", "load_settings"]


DEFAULT_REGISTRY_FILENAME = "blog.sqlite"


class RegistryBackend(str, Enum):
    """Storage engines able to back the publication registry."""

    SQLITE = "sqlite"


class BlogSettings(BaseModel):
    """Options applied to every post of a blog."""

    model_config = ConfigDict(extra="forbid")

    tracking: bool = False
    backend: RegistryBackend = RegistryBackend.SQLITE
    registry_filename: str = Field(default=DEFAULT_REGISTRY_FILENAME, min_length=1)
    concurrent: bool = False
    max_workers: int | None = Field(default=None, ge=1)
    post_template: Path | None = None

    def merged(self, overrides: Mapping[str, Any]) -> BlogSettings:
        """Return a copy with the non-``None`` overrides applied and validated."""
        payload = self.model_dump()
        payload.update({key: value for key, value in overrides.items() if value is not None})
        try:
            return BlogSettings.model_validate(payload)
        except ValidationError as exc:
            raise SettingsError(f"Invalid settings override: {exc}") from exc


def load_settings(path: str | Path) -> BlogSettings:
    """Read and validate a YAML settings file."""
    target = Path(path)
    try:
        raw = target.read_text(encoding="utf-8")
    except OSError as exc:
        raise SettingsError(f"Unable to read settings file '{target}': {exc}") from exc

    try:
        payload = yaml.safe_load(raw) or {}
    except yaml.YAMLError as exc:
        raise SettingsError(f"Settings file '{target}' is not valid YAML: {exc}") from exc

    if not isinstance(payload, dict):
        raise SettingsError(f"Settings file '{target}' must contain a mapping.")

    try:
        settings = BlogSettings.model_validate(payload)
    except ValidationError as exc:
        raise SettingsError(f"Invalid settings in '{target}': {exc}") from exc

    if settings.post_template is not None and not settings.post_template.is_absolute():
        settings = settings.model_copy(
            update={"post_template": target.parent / settings.post_template}
        )
    return settings
