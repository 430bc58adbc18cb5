# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for ScrapeConfig environment loading."""

from __future__ import annotations

import dataclasses

import pytest

from metascraper.config import DEFAULT_MAX_BYTES, DEFAULT_TIMEOUT, ScrapeConfig
from metascraper.errors import ConfigError


class TestFromEnv:
    """Tests for ScrapeConfig.from_env()."""

    def test_defaults(self):
        config = ScrapeConfig.from_env({})
        assert config.timeout == DEFAULT_TIMEOUT
        assert config.max_bytes == DEFAULT_MAX_BYTES
        assert config.user_agent.startswith("metascraper/")

    def test_overrides(self):
        config = ScrapeConfig.from_env(
            {
                "METASCRAPER_TIMEOUT": "2.5",
                "METASCRAPER_MAX_BYTES": "1024",
                "METASCRAPER_USER_AGENT": "Bot/2",
            }
        )
        assert config == ScrapeConfig(timeout=2.5, max_bytes=1024, user_agent="Bot/2")

    def test_blank_values_keep_defaults(self):
        config = ScrapeConfig.from_env({"METASCRAPER_TIMEOUT": "  ", "METASCRAPER_USER_AGENT": ""})
        assert config == ScrapeConfig()

    @pytest.mark.parametrize(
        "env",
        [
            {"METASCRAPER_TIMEOUT": "soon"},
            {"METASCRAPER_TIMEOUT": "0"},
            {"METASCRAPER_TIMEOUT": "nan"},
            {"METASCRAPER_TIMEOUT": "inf"},
            {"METASCRAPER_TIMEOUT": "-inf"},
            {"METASCRAPER_MAX_BYTES": "1.5"},
            {"METASCRAPER_MAX_BYTES": "-1"},
        ],
    )
    def test_invalid_values(self, env):
        with pytest.raises(ConfigError):
            ScrapeConfig.from_env(env)

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("METASCRAPER_TIMEOUT", "7")
        assert ScrapeConfig.from_env().timeout == 7.0

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            ScrapeConfig().timeout = 1.0
