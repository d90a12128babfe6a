"""Markdown extensions bundled with microblog."""

from __future__ import annotations

from .link_target import LinkTargetExtension


__all__ = ["LinkTargetExtension"]
