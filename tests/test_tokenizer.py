# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for metascraper.tokenizer (stdlib HTMLParser token stream)."""

from __future__ import annotations

import io

import pytest

from metascraper.errors import TokenizerError
from metascraper.tokenizer import Token, TokenType, tokenize


def _kinds(tokens: list[Token]) -> list[tuple[str, str]]:
    return [(t.type.value, t.name or t.data) for t in tokens]


class _FailingStream:
    """Binary stream that yields *data* once, then raises on the next read."""

    def __init__(self, data: bytes) -> None:
        self._data = data

    def read(self, n: int) -> bytes:
        if self._data:
            data, self._data = self._data, b""
            return data
        raise OSError("connection reset by peer")


class TestTokenKinds:
    """Tests for the token kinds produced from markup."""

    def test_start_text_end(self):
        tokens = list(tokenize("<p>Hello</p>"))
        assert _kinds(tokens) == [("start_tag", "p"), ("text", "Hello"), ("end_tag", "p")]

    def test_self_closing_tag(self):
        tokens = list(tokenize('<meta property="og:title" content="X" />'))
        assert len(tokens) == 1
        assert tokens[0].type is TokenType.SELF_CLOSING_TAG
        assert tokens[0].attrs == (("property", "og:title"), ("content", "X"))

    def test_unclosed_void_is_plain_start(self):
        tokens = list(tokenize('<img src="a.png"><p>x</p>'))
        assert tokens[0].type is TokenType.START_TAG
        assert tokens[0].name == "img"

    def test_tag_and_attr_names_lowercased(self):
        (token,) = list(tokenize('<DIV ItemScope ItemType="T"></DIV>'))[:1]
        assert token.name == "div"
        assert token.attrs == (("itemscope", None), ("itemtype", "T"))

    def test_has_attrs(self):
        start, end = list(tokenize("<b></b>"))
        assert start.has_attrs is False
        assert end.has_attrs is False

    def test_comments_and_doctype_dropped(self):
        tokens = list(tokenize("<!DOCTYPE html><!-- note --><p>x</p>"))
        assert _kinds(tokens) == [("start_tag", "p"), ("text", "x"), ("end_tag", "p")]

    def test_script_body_is_text(self):
        tokens = list(tokenize('<script>if (a < b) { x = "<p>"; }</script>'))
        assert tokens[0].name == "script"
        assert tokens[1].type is TokenType.TEXT
        assert "<p>" in tokens[1].data
        assert tokens[2].type is TokenType.END_TAG

    def test_charrefs_decoded(self):
        tokens = list(tokenize("<p>Fish &amp; Chips &euro;5</p>"))
        assert tokens[1].data == "Fish & Chips €5"


class TestChunking:
    """Tests for chunked feeding and byte decoding."""

    def test_text_coalesced_across_chunks(self):
        tokens = list(tokenize("<p>Hello, wide world</p>", chunk_size=3))
        texts = [t.data for t in tokens if t.type is TokenType.TEXT]
        assert texts == ["Hello, wide world"]

    def test_multibyte_split_across_chunks(self):
        tokens = list(tokenize("<p>café ☕</p>".encode(), chunk_size=1))
        assert tokens[1].data == "café ☕"

    def test_utf8_bom_dropped(self):
        tokens = list(tokenize(b"\xef\xbb\xbf<title>T</title>"))
        assert tokens[0].name == "title"

    def test_invalid_utf8_replaced(self):
        tokens = list(tokenize(b"<p>a\xffb</p>"))
        assert tokens[1].data == "a�b"

    def test_binary_stream_source(self):
        tokens = list(tokenize(io.BytesIO(b"<p>stream</p>"), chunk_size=4))
        assert _kinds(tokens) == [("start_tag", "p"), ("text", "stream"), ("end_tag", "p")]

    def test_trailing_text_flushed_at_end(self):
        tokens = list(tokenize("<p>tail"))
        assert tokens[-1].type is TokenType.TEXT
        assert tokens[-1].data == "tail"

    def test_empty_source(self):
        assert list(tokenize(b"")) == []


class TestFailures:
    """Tests for TokenizerError on read and parse failures."""

    def test_read_failure_raises_tokenizer_error(self):
        stream = _FailingStream(b"<p>one</p><p>two")
        seen: list[Token] = []
        with pytest.raises(TokenizerError) as exc_info:
            for token in tokenize(stream):
                seen.append(token)
        assert isinstance(exc_info.value.__cause__, OSError)
        # Tokens completed before the failure were delivered.
        assert _kinds(seen)[:3] == [("start_tag", "p"), ("text", "one"), ("end_tag", "p")]

    def test_parser_failure_wrapped(self, monkeypatch):
        def _boom(self, data):
            raise AssertionError("unexpected markup")

        monkeypatch.setattr("metascraper.tokenizer.HTMLParser.feed", _boom)
        with pytest.raises(TokenizerError, match="unexpected markup"):
            list(tokenize("<p>x</p>"))
