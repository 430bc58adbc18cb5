# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""metascraper: page text, <meta> metadata and schema.org microdata from HTML.

A single pass over the tokenizer's event stream feeds three readers:
- text: page title and whitespace-normalized body text
- metadata: head <meta> tags, structured properties grouped one level deep
- microdata: nested itemscope/itemprop forest from the body
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass
class Meta:
    """A <meta> tag from the document head.

    Structured properties (``og:image:width`` after ``og:image``) are folded
    into ``extra`` of the preceding top-level tag. Never more than one level.
    """

    property: str = ""
    content: str = ""  # content attribute, or element text if absent
    name: str = ""
    extra: list[Meta] = field(default_factory=list)


@dataclass
class ItemProp:
    """A simple schema.org itemprop."""

    tag_name: str = ""
    item_prop: str = ""
    content: str = ""  # text content, else the content attribute
    href: str = ""
    date_time: str = ""


@dataclass
class ItemScope:
    """A schema.org itemscope, possibly a complex property of its parent."""

    tag_name: str = ""
    item_type: str = ""
    item_prop: str = ""  # property name within the parent scope, "" at top level
    props: list[ItemProp] = field(default_factory=list)
    children: list[ItemScope] = field(default_factory=list)

    def walk(self) -> Iterator[ItemScope]:
        """Yield this scope and every descendant scope in document order."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass
class Page:
    """Everything extracted from one HTML document."""

    url: str = ""
    title: str = ""
    text: str = ""
    metadata: list[Meta] = field(default_factory=list)
    microdata: list[ItemScope] = field(default_factory=list)
    html: str = field(default="", repr=False)  # decoded source; set by scrape() and read_html()

    def find_meta(self, key: str) -> Meta | None:
        """First top-level Meta whose property or name equals *key*."""
        for meta in self.metadata:
            if key in (meta.property, meta.name):
                return meta
        return None

    def find_scopes(self, item_type: str) -> list[ItemScope]:
        """All scopes at any depth matching *item_type*.

        Accepts a full type URL or its last path segment (``"Offer"``).
        """
        suffix = "/" + item_type
        return [
            scope
            for root in self.microdata
            for scope in root.walk()
            if scope.item_type == item_type or scope.item_type.endswith(suffix)
        ]
