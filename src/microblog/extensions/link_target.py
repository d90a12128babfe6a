"""Markdown extension that opens every rendered link in a new browsing context."""

from __future__ import annotations

import xml.etree.ElementTree as ElementTree

from markdown import Markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor


class _LinkTargetTreeprocessor(Treeprocessor):
    """Stamp a ``target`` attribute on each anchor produced by the inline pass."""

    def __init__(self, md: Markdown, target: str) -> None:
        super().__init__(md)
        self.target = target

    def run(self, root: ElementTree.Element) -> None:  # type: ignore[override]
        for anchor in root.iter("a"):
            if anchor.get("href") is None:
                continue
            anchor.set("target", self.target)


class LinkTargetExtension(Extension):
    """Register the anchor ``target`` rewriter after inline patterns have run."""

    def __init__(self, **kwargs: object) -> None:
        self.config = {
            "target": ["_blank", "Value written to the target attribute of every link."],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        processor = _LinkTargetTreeprocessor(md, str(self.getConfig("target")))
        # The inline processor runs at priority 20; anchors only exist after it.
        md.treeprocessors.register(processor, "microblog_link_target", priority=5)


def makeExtension(**kwargs: object) -> LinkTargetExtension:  # pragma: no cover - API hook  # noqa: N802
    return LinkTargetExtension(**kwargs)


__all__ = ["LinkTargetExtension", "makeExtension"]
