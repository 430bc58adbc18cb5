# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Fetch a URL and read it into a Page in one call.

Log records emitted while a page is fetched and read carry its ``url`` in the
structlog context, so JSON log lines can be filtered per page.
"""

from __future__ import annotations

import logging

import structlog

from . import Page
from .config import ScrapeConfig
from .fetch import fetch, fetch_async
from .page import read_html

logger = logging.getLogger(__name__)


def scrape(url: str, config: ScrapeConfig | None = None) -> Page:
    """Fetch *url* and extract its title, text, metadata and microdata.

    The decoded response body is kept as ``Page.html``.

    Raises:
        FetchError: the page could not be retrieved.
        ResourceExhaustionError: the response was too large.
        PageReadError: tokenization failed; ``page`` holds the partial result.
    """
    with structlog.contextvars.bound_contextvars(url=url):
        body = fetch(url, config)
        page = read_html(body, url=url)
        logger.info("Scraped %s: %d meta, %d scopes", url, len(page.metadata), len(page.microdata))
    return page


async def scrape_async(url: str, config: ScrapeConfig | None = None) -> Page:
    """scrape() with a non-blocking fetch. Reading stays synchronous."""
    with structlog.contextvars.bound_contextvars(url=url):
        body = await fetch_async(url, config)
        return read_html(body, url=url)
