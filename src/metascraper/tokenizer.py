# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""HTML token stream on top of the stdlib incremental HTMLParser.

A raw tokenizer: tags come out exactly as written, with no implied elements,
auto-closing or tree repair. The readers rely on that, e.g. a
``<meta name="x">text</meta>`` keeps its text inside the meta element.

The source is fed in chunks and events are yielded as soon as a chunk has
been parsed, so only one chunk's worth of tokens is ever buffered.
"""

from __future__ import annotations

import codecs
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum
from html.parser import HTMLParser
from typing import BinaryIO

from .errors import TokenizerError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024
_ENCODING = "utf-8-sig"

Attr = tuple[str, str | None]


class TokenType(StrEnum):
    """Kinds of token the readers care about."""

    START_TAG = "start_tag"
    END_TAG = "end_tag"
    SELF_CLOSING_TAG = "self_closing_tag"
    TEXT = "text"


@dataclass(frozen=True, slots=True)
class Token:
    type: TokenType
    name: str = ""  # lower-cased tag name; empty for text
    attrs: tuple[Attr, ...] = ()
    data: str = ""  # text content; empty for tags

    @property
    def has_attrs(self) -> bool:
        return bool(self.attrs)


class _Collector(HTMLParser):
    """Turns HTMLParser callbacks into queued Tokens.

    Consecutive text callbacks are merged into one TEXT token, flushed when the
    next tag arrives or the input ends. Comments, doctypes and processing
    instructions produce nothing.
    """

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.tokens: list[Token] = []
        self._text: list[str] = []

    def _flush_text(self) -> None:
        if self._text:
            self.tokens.append(Token(TokenType.TEXT, data="".join(self._text)))
            self._text.clear()

    def handle_starttag(self, tag: str, attrs: list[Attr]) -> None:
        self._flush_text()
        self.tokens.append(Token(TokenType.START_TAG, name=tag, attrs=tuple(attrs)))

    def handle_startendtag(self, tag: str, attrs: list[Attr]) -> None:
        self._flush_text()
        self.tokens.append(Token(TokenType.SELF_CLOSING_TAG, name=tag, attrs=tuple(attrs)))

    def handle_endtag(self, tag: str) -> None:
        self._flush_text()
        self.tokens.append(Token(TokenType.END_TAG, name=tag))

    def handle_data(self, data: str) -> None:
        if data:
            self._text.append(data)

    def close(self) -> None:
        super().close()
        self._flush_text()

    def drain(self) -> list[Token]:
        tokens, self.tokens = self.tokens, []
        return tokens


def decode_html(data: bytes) -> str:
    """Decode a whole document the same way tokenize() decodes byte sources."""
    return codecs.decode(data, _ENCODING, errors="replace")


def _chunks(source: bytes | str | BinaryIO, chunk_size: int) -> Iterator[str]:
    """Decoded text chunks of *source*. Bytes are read as UTF-8 (BOM dropped)."""
    if isinstance(source, str):
        for i in range(0, len(source), chunk_size):
            yield source[i : i + chunk_size]
        return

    decoder = codecs.getincrementaldecoder(_ENCODING)(errors="replace")
    if isinstance(source, (bytes, bytearray, memoryview)):
        data = bytes(source)
        for i in range(0, len(data), chunk_size):
            yield decoder.decode(data[i : i + chunk_size])
    else:
        while True:
            block = source.read(chunk_size)
            if not block:
                break
            yield decoder.decode(block)
    yield decoder.decode(b"", final=True)


def tokenize(source: bytes | str | BinaryIO, *, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[Token]:
    """Yield the tokens of an HTML document until end-of-stream.

    Args:
        source: Raw bytes, an already decoded string, or a binary stream.
        chunk_size: Bytes (or characters) fed to the parser per step.

    Raises:
        TokenizerError: the source could not be read or the parser failed.
            Tokens yielded before the failure remain valid.
    """
    collector = _Collector()
    try:
        for chunk in _chunks(source, chunk_size):
            if chunk:
                collector.feed(chunk)
            yield from collector.drain()
        collector.close()
    except Exception as e:
        logger.debug("Tokenizer aborted: %s", e)
        raise TokenizerError(f"HTML tokenization failed: {e}") from e
    yield from collector.drain()
