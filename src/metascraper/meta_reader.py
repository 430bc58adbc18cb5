# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Structured <meta> metadata from the document head.

Structured properties are written as a run of meta tags where each "extra"
property extends the preceding tag's property with a ":" suffix (Open Graph
``og:image`` followed by ``og:image:width``, ``og:image:height``). Extras are
attached to the last top-level tag, so nesting is exactly one level deep.
"""

from __future__ import annotations

from . import Meta


class MetaReader:
    """Groups head <meta> tags into top-level entries with their extras."""

    def __init__(self) -> None:
        self.items: list[Meta] = []
        self.in_head = False
        self._open: Meta | None = None  # meta element whose text may still supply content

    def handle_start(self, tag_name: str, attrs: dict[str, str]) -> None:
        if tag_name == "head":
            self.in_head = True
            return
        # meta is normally void and never closed; any other tag ends its text run.
        self._open = None
        if tag_name != "meta" or not self.in_head:
            return

        # "property" is not a standard meta attribute, but Open Graph relies on it.
        meta = Meta(
            property=attrs.get("property", ""),
            content=attrs.get("content", ""),
            name=attrs.get("name", ""),
        )
        parent = self.items[-1] if self.items else None
        if parent is not None and meta.property.startswith(parent.property + ":"):
            parent.extra.append(meta)
        else:
            self.items.append(meta)
        self._open = meta

    def handle_end(self, tag_name: str) -> None:
        if tag_name == "head":
            self.in_head = False
        elif tag_name == "meta":
            self._open = None

    def handle_text(self, text: str) -> None:
        # Rare: content given as element text instead of the content attribute.
        meta = self._open
        if meta is not None and self.in_head and not meta.content and text.strip():
            meta.content = text

    def finalize(self) -> None:
        self._open = None
