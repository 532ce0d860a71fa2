# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Shared test configuration and fixtures."""

try:
    import mockweb  # noqa: F401
except ImportError:
    raise ImportError("mockweb is not installed. Run: pip install -e '.[dev]'") from None

import pytest

from mockweb.random_source import RandomSource


@pytest.fixture
def rng() -> RandomSource:
    """Fixed-seed random source so failures reproduce."""
    return RandomSource(0)


@pytest.fixture(autouse=True)
def _clear_mockweb_env(monkeypatch):
    """Keep developer MOCKWEB_* variables out of config tests."""
    import os

    for key in list(os.environ):
        if key.startswith("MOCKWEB_"):
            monkeypatch.delenv(key, raising=False)
