# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for Page serialization (to_dict / to_json)."""

from __future__ import annotations

import json

from metascraper import ItemProp, ItemScope, Meta, Page
from metascraper.page import read_page
from metascraper.serializer import to_dict, to_json


def _make_page(**overrides) -> Page:
    """Create a Page with sensible defaults for testing."""
    defaults = {
        "url": "https://example.com/product/123",
        "title": "Test Product",
        "text": "Body text",
        "metadata": [Meta(property="og:image", content="a.jpg", extra=[Meta(property="og:image:width", content="300")])],
        "microdata": [
            ItemScope(
                tag_name="div",
                item_type="http://schema.org/Offer",
                props=[ItemProp(tag_name="a", item_prop="url", content="Alice", href="alice.html")],
                children=[ItemScope(tag_name="div", item_type="http://schema.org/AggregateRating", item_prop="reviews")],
            )
        ],
    }
    defaults.update(overrides)
    return Page(**defaults)


class TestToDict:
    """Tests for to_dict()."""

    def test_top_level_keys(self):
        data = to_dict(_make_page())
        assert list(data) == ["url", "title", "text", "metadata", "microdata"]

    def test_meta_extra_nested(self):
        meta = to_dict(_make_page())["metadata"][0]
        assert meta["extra"] == [{"property": "og:image:width", "content": "300", "name": ""}]
        assert "extra" not in meta["extra"][0]

    def test_scope_fields(self):
        scope = to_dict(_make_page())["microdata"][0]
        assert scope["item_type"] == "http://schema.org/Offer"
        assert "item_prop" not in scope
        assert scope["props"] == [{"tag_name": "a", "item_prop": "url", "content": "Alice", "href": "alice.html"}]
        assert scope["children"] == [
            {"tag_name": "div", "item_type": "http://schema.org/AggregateRating", "item_prop": "reviews"}
        ]

    def test_empty_page(self):
        assert to_dict(Page()) == {"url": "", "title": "", "text": "", "metadata": [], "microdata": []}

    def test_html_only_on_request(self):
        page = _make_page(html="<html></html>")
        assert "html" not in to_dict(page)
        assert to_dict(page, include_html=True)["html"] == "<html></html>"
        assert list(to_dict(page, include_html=True))[-1] == "html"


class TestToJson:
    """Tests for to_json() output."""

    def test_round_trips_through_json(self, reference_html):
        page = read_page(reference_html)
        assert json.loads(to_json(page)) == to_dict(page)

    def test_non_ascii_preserved(self):
        out = to_json(_make_page(title="Café ☕"))
        assert "Café ☕" in out

    def test_indent(self):
        assert "\n" not in to_json(_make_page(), indent=None)
        assert '\n    "url"' in to_json(_make_page(), indent=4)

    def test_include_html(self):
        data = json.loads(to_json(_make_page(html="<p>é</p>"), include_html=True))
        assert data["html"] == "<p>é</p>"
