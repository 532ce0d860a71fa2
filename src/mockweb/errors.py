# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""mockweb exception hierarchy.

All mockweb errors inherit from MockWebError. Precondition failures are also
ValueErrors so callers validating input can catch them generically;
invariant violations are RuntimeErrors and are never caught internally.
"""

from __future__ import annotations


class MockWebError(Exception):
    """Base exception for all mockweb errors."""


class InvariantViolation(MockWebError, RuntimeError):
    """Generation produced a structure that breaks a guaranteed invariant."""


class GenerationSizeError(MockWebError, ValueError):
    """Requested size cannot produce a valid structure."""

    def __init__(self, message: str, *, requested: int = 0, minimum: int = 0) -> None:
        super().__init__(message)
        self.requested = requested
        self.minimum = minimum


class PageSizeError(GenerationSizeError):
    """Element count too small for the fixed skeleton or the link set."""


class SiteSizeError(GenerationSizeError):
    """Site must contain at least the origin page."""


class ConfigError(MockWebError, ValueError):
    """Invalid generator configuration value."""

    def __init__(self, message: str, *, field: str = "") -> None:
        super().__init__(message)
        self.field = field
