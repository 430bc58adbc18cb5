# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Token reader protocol and the fan-out dispatcher.

A TokenReader is a lightweight SAX-style handler. Readers keep private state
and never raise on any input; a failure inside one is a programming error.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable


@runtime_checkable
class TokenReader(Protocol):
    def handle_start(self, tag_name: str, attrs: dict[str, str]) -> None:
        """Start or self-closing tag. Always precedes handle_end for that tag."""
        ...

    def handle_end(self, tag_name: str) -> None:
        """End tag, or the closing half of a self-closing tag."""
        ...

    def handle_text(self, text: str) -> None:
        """A run of text between two tags."""
        ...

    def finalize(self) -> None:
        """End of the token stream; results become final."""
        ...


class ReaderList:
    """Forwards every event to each reader, in registration order.

    Order matters only to readers that share an owner; the page reader is
    conventionally first. The list itself is a TokenReader.
    """

    __slots__ = ("readers",)

    def __init__(self, readers: Iterable[TokenReader]) -> None:
        self.readers: tuple[TokenReader, ...] = tuple(readers)

    def handle_start(self, tag_name: str, attrs: dict[str, str]) -> None:
        for reader in self.readers:
            reader.handle_start(tag_name, attrs)

    def handle_end(self, tag_name: str) -> None:
        for reader in self.readers:
            reader.handle_end(tag_name)

    def handle_text(self, text: str) -> None:
        for reader in self.readers:
            reader.handle_text(text)

    def finalize(self) -> None:
        for reader in self.readers:
            reader.finalize()

    def __len__(self) -> int:
        return len(self.readers)


def attr_map(has_attrs: bool, attrs: Iterable[tuple[str, str | None]]) -> dict[str, str]:
    """Attribute pairs of one tag as a dict.

    Valueless attributes (``itemscope``) map to "". A repeated name keeps
    its last value.
    """
    if not has_attrs:
        return {}
    return {key: value or "" for key, value in attrs}
