# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Page title and body text from the token stream."""

from __future__ import annotations

import re

_LINE_FEEDS = re.compile(r"[\n\r]+")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Collapse line-feed runs to one newline, then all whitespace runs to one space.

    The second pass also flattens the surviving newlines, so the result is a
    single line. Idempotent.
    """
    text = _LINE_FEEDS.sub("\n", text)
    text = _WHITESPACE.sub(" ", text)
    return text.strip()


class TextReader:
    """Collects the <title> text and the body text outside <script>.

    ``title`` and ``text`` are final once finalize() has run.
    """

    def __init__(self) -> None:
        self.in_title = False
        self.in_body = False
        self.in_script = False
        self.title = ""
        self.text = ""
        self._parts: list[str] = []

    def handle_start(self, tag_name: str, attrs: dict[str, str]) -> None:
        self._toggle(tag_name, True)

    def handle_end(self, tag_name: str) -> None:
        self._toggle(tag_name, False)

    def _toggle(self, tag_name: str, value: bool) -> None:
        if tag_name == "title":
            self.in_title = value
        elif tag_name == "body":
            self.in_body = value
        elif tag_name == "script":
            self.in_script = value

    def handle_text(self, text: str) -> None:
        if self.in_title:
            # Last title text wins.
            self.title = text
        elif self.in_body and not self.in_script:
            self._parts.append(text)

    def finalize(self) -> None:
        self.text = normalize_text("".join(self._parts))
