# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""schema.org microdata from the document body.

Builds a forest of ItemScopes with an explicit scope stack. Plain elements
open and close between a scope's start and end tags, so a parallel marker
stack records, for every open element, whether it pushed a scope. An end tag
pops one marker and pops a scope only when that marker is set.

HTML void elements (img, meta, link, ...) have no end tag in HTML and are
written both as ``<img>`` and ``<img />``; they never touch either stack.
See http://schema.org/docs/gs.html for the vocabulary.
"""

from __future__ import annotations

import logging

from . import ItemProp, ItemScope

logger = logging.getLogger(__name__)

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)


class SchemaReader:
    """Collects itemscope/itemprop elements outside the document head."""

    def __init__(self) -> None:
        self.items: list[ItemScope] = []
        self.in_head = False
        self._scopes: list[ItemScope] = []
        self._markers: list[bool] = []
        self._prop: ItemProp | None = None  # property whose content the next text sets

    @property
    def depth(self) -> int:
        """Number of currently open scopes."""
        return len(self._scopes)

    @property
    def marker_depth(self) -> int:
        """Number of open elements being tracked."""
        return len(self._markers)

    def _push_scope(self, scope: ItemScope) -> None:
        if self._scopes:
            self._scopes[-1].children.append(scope)
        else:
            self.items.append(scope)
        self._scopes.append(scope)

    def handle_start(self, tag_name: str, attrs: dict[str, str]) -> None:
        if tag_name == "head":
            self.in_head = True
        if self.in_head:
            return

        void = tag_name in VOID_ELEMENTS
        opened_scope = False
        if "itemscope" in attrs:
            self._push_scope(
                ItemScope(
                    tag_name=tag_name,
                    item_type=attrs.get("itemtype", ""),
                    item_prop=attrs.get("itemprop", ""),
                )
            )
            opened_scope = True
        elif self._scopes and "itemprop" in attrs:
            prop = ItemProp(
                tag_name=tag_name,
                item_prop=attrs["itemprop"],
                content=attrs.get("content", ""),
                href=attrs.get("href", ""),
                date_time=attrs.get("datetime", ""),
            )
            self._scopes[-1].props.append(prop)
            if not void:
                self._prop = prop

        if void:
            # A void scope has no content and no end tag: it is complete already.
            if opened_scope:
                self._scopes.pop()
            return
        self._markers.append(opened_scope)

    def handle_end(self, tag_name: str) -> None:
        if self.in_head:
            if tag_name == "head":
                self.in_head = False
            return

        self._prop = None
        if tag_name in VOID_ELEMENTS or not self._markers:
            return
        if self._markers.pop():
            self._scopes.pop()

    def handle_text(self, text: str) -> None:
        # Element text wins over a content attribute.
        if self._prop is not None:
            self._prop.content = text

    def finalize(self) -> None:
        if self._markers or self._scopes:
            logger.debug(
                "Closing %d unterminated scope(s) across %d open element(s) at end of stream",
                len(self._scopes),
                len(self._markers),
            )
        self._markers.clear()
        self._scopes.clear()
        self._prop = None
