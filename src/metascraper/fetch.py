# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Fetch a page's raw bytes over HTTP(S).

Single attempt, no retries. The async variant runs the blocking urllib call
in a worker thread.
"""

from __future__ import annotations

import asyncio
import http.client
import logging
import time
import urllib.error
import urllib.request
from urllib.parse import urlparse

from .config import ScrapeConfig
from .errors import FetchError, ResourceExhaustionError

logger = logging.getLogger(__name__)

_ALLOWED_SCHEMES = ("http", "https")


def validate_url(url: str) -> str:
    """Return *url* if it is an absolute http(s) URL, else raise FetchError."""
    parsed = urlparse(url)
    if parsed.scheme not in _ALLOWED_SCHEMES or not parsed.netloc:
        raise FetchError(f"Only absolute http(s) URLs can be fetched: {url!r}", url=url)
    return url


def _read_limited(resp, url: str, max_bytes: int) -> bytes:
    declared = resp.headers.get("Content-Length", "")
    if declared.isdigit() and int(declared) > max_bytes:
        raise ResourceExhaustionError(f"{url} declares {declared} bytes, limit is {max_bytes}")
    body = resp.read(max_bytes + 1)
    if len(body) > max_bytes:
        raise ResourceExhaustionError(f"{url} exceeds the {max_bytes} byte limit")
    return body


def fetch(url: str, config: ScrapeConfig | None = None) -> bytes:
    """GET *url* and return the response body.

    Raises:
        FetchError: bad scheme, network failure, or non-2xx status.
        ResourceExhaustionError: body larger than ``config.max_bytes``.
    """
    config = config or ScrapeConfig()
    validate_url(url)
    req = urllib.request.Request(url, headers={"User-Agent": config.user_agent})
    start = time.monotonic()
    try:
        with urllib.request.urlopen(req, timeout=config.timeout) as resp:  # noqa: S310  # nosec B310
            status = getattr(resp, "status", 200)
            if not 200 <= status < 300:
                raise FetchError(f"GET {url} returned HTTP {status}", url=url, status=status)
            body = _read_limited(resp, url, config.max_bytes)
    except urllib.error.HTTPError as e:
        raise FetchError(f"GET {url} returned HTTP {e.code}", url=url, status=e.code) from e
    except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
        raise FetchError(f"GET {url} failed: {e}", url=url) from e

    logger.info("Fetched %s: %d bytes in %.1f ms", url, len(body), (time.monotonic() - start) * 1000)
    return body


async def fetch_async(url: str, config: ScrapeConfig | None = None) -> bytes:
    """fetch() in a worker thread, bounded by the configured timeout."""
    config = config or ScrapeConfig()
    try:
        return await asyncio.wait_for(asyncio.to_thread(fetch, url, config), timeout=config.timeout + 5)
    except TimeoutError as e:
        raise FetchError(f"GET {url} timed out after {config.timeout}s", url=url) from e
