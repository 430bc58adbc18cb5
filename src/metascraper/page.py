# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Document orchestrator: drives the tokenizer and the readers to a Page.

Pipeline:
  1. tokenize() yields start / end / self-closing / text tokens
  2. ReaderList fans each token out to the text, meta and schema readers
  3. At end-of-stream every reader is finalized and the Page is assembled
"""

from __future__ import annotations

import logging
from typing import BinaryIO

from . import Page
from .errors import PageReadError, TokenizerError
from .meta_reader import MetaReader
from .readers import ReaderList, attr_map
from .schema_reader import SchemaReader
from .text_reader import TextReader
from .tokenizer import TokenType, decode_html, tokenize

logger = logging.getLogger(__name__)


class Document:
    """One HTML document and the readers that interpret it.

    Subclasses can register additional readers by overriding readers(); the
    built-in readers should stay in the list so page() has results to copy.
    Every read() starts from fresh readers, so a Document can be reused and
    earlier Pages are never touched by later reads.
    """

    def __init__(self, url: str = "") -> None:
        self.url = url
        self._reset()

    def _reset(self) -> None:
        self.text_reader = TextReader()
        self.meta_reader = MetaReader()
        self.schema_reader = SchemaReader()

    def readers(self) -> ReaderList:
        return ReaderList([self.text_reader, self.meta_reader, self.schema_reader])

    def page(self) -> Page:
        """Snapshot the readers' results. Complete only after the stream ended."""
        return Page(
            url=self.url,
            title=self.text_reader.title,
            text=self.text_reader.text,
            metadata=list(self.meta_reader.items),
            microdata=list(self.schema_reader.items),
        )

    def read(self, source: bytes | str | BinaryIO) -> Page:
        """Interpret *source* in a single pass and return the Page.

        Raises:
            PageReadError: the token stream failed before its end. The error's
                ``page`` holds the partial results; the tokenizer error is
                chained as ``__cause__``.
        """
        self._reset()
        readers = self.readers()
        tokens = 0
        try:
            for token in tokenize(source):
                tokens += 1
                if token.type is TokenType.TEXT:
                    readers.handle_text(token.data)
                elif token.type is TokenType.START_TAG:
                    readers.handle_start(token.name, attr_map(token.has_attrs, token.attrs))
                elif token.type is TokenType.END_TAG:
                    readers.handle_end(token.name)
                elif token.type is TokenType.SELF_CLOSING_TAG:
                    readers.handle_start(token.name, attr_map(token.has_attrs, token.attrs))
                    readers.handle_end(token.name)
        except TokenizerError as e:
            readers.finalize()
            page = self.page()
            logger.warning("Token stream for %s aborted after %d tokens: %s", self.url or "<input>", tokens, e)
            raise PageReadError(str(e), page=page) from e

        readers.finalize()
        page = self.page()
        logger.debug(
            "Read %s: %d tokens, %d meta, %d scopes, %d text chars",
            self.url or "<input>",
            tokens,
            len(page.metadata),
            len(page.microdata),
            len(page.text),
        )
        return page


def read_page(source: bytes | str | BinaryIO, url: str = "") -> Page:
    """Extract title, text, metadata and microdata from an HTML document."""
    return Document(url).read(source)


def read_html(data: bytes | str, url: str = "") -> Page:
    """read_page() for an in-memory document that also keeps it as ``Page.html``.

    On a PageReadError the partial page carries the source as well.
    """
    html = data if isinstance(data, str) else decode_html(data)
    try:
        page = read_page(html, url=url)
    except PageReadError as e:
        e.page.html = html
        raise
    page.html = html
    return page
