# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Fetch configuration, overridable through METASCRAPER_* environment variables."""

from __future__ import annotations

import dataclasses
import math
import os
from collections.abc import Mapping

from .errors import ConfigError

try:
    from importlib.metadata import version as _pkg_version

    _VERSION = _pkg_version("metascraper")
except Exception:
    _VERSION = "unknown"

DEFAULT_TIMEOUT = 10.0
DEFAULT_MAX_BYTES = 5 * 1024 * 1024
DEFAULT_USER_AGENT = f"metascraper/{_VERSION}"


@dataclasses.dataclass(frozen=True, slots=True)
class ScrapeConfig:
    """Limits and identity used when fetching a page."""

    timeout: float = DEFAULT_TIMEOUT  # seconds
    max_bytes: int = DEFAULT_MAX_BYTES
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ScrapeConfig:
        """Build a config from the environment. Blank variables keep defaults."""
        env = os.environ if environ is None else environ
        kwargs: dict[str, object] = {}

        env_timeout = env.get("METASCRAPER_TIMEOUT", "").strip()
        if env_timeout:
            kwargs["timeout"] = _positive(float, "METASCRAPER_TIMEOUT", env_timeout)

        env_max = env.get("METASCRAPER_MAX_BYTES", "").strip()
        if env_max:
            kwargs["max_bytes"] = _positive(int, "METASCRAPER_MAX_BYTES", env_max)

        env_ua = env.get("METASCRAPER_USER_AGENT", "").strip()
        if env_ua:
            kwargs["user_agent"] = env_ua

        return cls(**kwargs)


def _positive(kind: type, var: str, raw: str):
    try:
        value = kind(raw)
    except ValueError:
        raise ConfigError(f"{var} must be a {kind.__name__}, got {raw!r}") from None
    if not math.isfinite(value) or value <= 0:
        raise ConfigError(f"{var} must be a positive finite number, got {raw!r}")
    return value
