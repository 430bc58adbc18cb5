# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""metascraper exception hierarchy.

All metascraper errors inherit from MetaScraperError, allowing callers
to catch the base class for any failure or specific subclasses
for targeted handling.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from . import Page


class MetaScraperError(Exception):
    """Base exception for all metascraper errors."""


class ConfigError(MetaScraperError):
    """Invalid configuration value (environment or arguments)."""


class FetchError(MetaScraperError):
    """Network fetch failed or returned a non-success status."""

    def __init__(self, message: str, *, url: str = "", status: int = 0) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class ResourceExhaustionError(MetaScraperError):
    """Document exceeds resource limits (response size)."""


class TokenizerError(MetaScraperError):
    """Reading or tokenizing the HTML source failed before end-of-stream."""


class PageReadError(MetaScraperError):
    """Token stream aborted; ``page`` holds whatever was extracted so far."""

    def __init__(self, message: str, *, page: Page) -> None:
        super().__init__(message)
        self.page = page
