# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""structlog + stdlib bridge for the CLI.

Library modules only call logging.getLogger(__name__); nothing is emitted
until an application calls configure(). Leaf module, no metascraper imports.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

_PRE_CHAIN: tuple = (
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
)


def resolve_level(level: str | int) -> int:
    """Map "debug"/"INFO"/20 to a logging level; unknown names give INFO."""
    if isinstance(level, int):
        return level
    return getattr(logging, level.strip().upper(), logging.INFO)


def configure(*, json_output: bool = False, level: str | int = "INFO", stream: TextIO | None = None) -> logging.Handler:
    """Install a single root handler rendering every record through structlog.

    Args:
        json_output: JSON lines instead of the human-readable console format.
        level: Root logger level name or number.
        stream: Destination, stderr by default so stdout stays clean for JSON output.

    Returns:
        The installed handler.
    """
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=list(_PRE_CHAIN),
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolve_level(level))
    return handler
