# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Shared test configuration and fixtures."""

try:
    import metascraper  # noqa: F401
except ImportError:
    raise ImportError("metascraper is not installed. Run: pip install -e '.[dev]'") from None

import logging

import pytest
import structlog

from _pages import REFERENCE_PAGE


@pytest.fixture
def reference_html() -> str:
    return REFERENCE_PAGE


@pytest.fixture
def reset_logging():
    """Restore root logging and structlog state after tests that call configure()."""
    root = logging.getLogger()
    old_handlers = root.handlers[:]
    old_level = root.level
    yield
    root.handlers = old_handlers
    root.setLevel(old_level)
    structlog.reset_defaults()
