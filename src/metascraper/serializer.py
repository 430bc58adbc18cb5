# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Page serialization to plain dicts and JSON.

Empty ``extra``, ``props`` and ``children`` lists are omitted to keep the
output compact. The source document (``Page.html``) is left out unless asked
for.
"""

from __future__ import annotations

import json
from typing import Any

from . import ItemProp, ItemScope, Meta, Page


def _meta_dict(meta: Meta) -> dict[str, Any]:
    return {
        "property": meta.property,
        "content": meta.content,
        "name": meta.name,
        **({"extra": [_meta_dict(e) for e in meta.extra]} if meta.extra else {}),
    }


def _prop_dict(prop: ItemProp) -> dict[str, Any]:
    return {
        "tag_name": prop.tag_name,
        "item_prop": prop.item_prop,
        "content": prop.content,
        **({"href": prop.href} if prop.href else {}),
        **({"date_time": prop.date_time} if prop.date_time else {}),
    }


def _scope_dict(scope: ItemScope) -> dict[str, Any]:
    return {
        "tag_name": scope.tag_name,
        "item_type": scope.item_type,
        **({"item_prop": scope.item_prop} if scope.item_prop else {}),
        **({"props": [_prop_dict(p) for p in scope.props]} if scope.props else {}),
        **({"children": [_scope_dict(c) for c in scope.children]} if scope.children else {}),
    }


def to_dict(page: Page, *, include_html: bool = False) -> dict[str, Any]:
    """Page as nested JSON-compatible dicts."""
    return {
        "url": page.url,
        "title": page.title,
        "text": page.text,
        "metadata": [_meta_dict(m) for m in page.metadata],
        "microdata": [_scope_dict(s) for s in page.microdata],
        **({"html": page.html} if include_html else {}),
    }


def to_json(page: Page, indent: int | None = 2, *, include_html: bool = False) -> str:
    """Serialize a Page to a JSON string.

    Args:
        page: Page to serialize
        indent: JSON indentation level, None for a single line
        include_html: Add the decoded source document under "html"

    Returns:
        JSON string
    """
    return json.dumps(to_dict(page, include_html=include_html), ensure_ascii=False, indent=indent)
