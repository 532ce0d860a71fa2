# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Generator configuration with ``MOCKWEB_*`` environment overrides.

Leaf module — imports only mockweb.errors.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .errors import ConfigError

# Fixed skeleton elements of every page: html, head, title, body.
SKELETON_ELEMENTS = 4

_TRUTHY = ("1", "true", "yes")


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """Immutable configuration for fixture generation."""

    seed: int | None = None  # None: seed from the clock
    page_elements: int = 100  # default generate_page size
    page_extra_elements: int = 91  # exclusive bound of per-page random extra in sites
    scheme: str = "http"
    host_suffix: str = ".com"
    token_length: int = 17  # attribute filler tokens
    log_level: str = "INFO"
    json_logs: bool = False

    def __post_init__(self) -> None:
        if self.page_elements <= SKELETON_ELEMENTS:
            raise ConfigError(
                f"page_elements must be > {SKELETON_ELEMENTS}, got {self.page_elements}",
                field="page_elements",
            )
        if self.page_extra_elements <= 0:
            raise ConfigError(
                f"page_extra_elements must be > 0, got {self.page_extra_elements}",
                field="page_extra_elements",
            )
        if not self.scheme or not self.scheme.isalpha():
            raise ConfigError(f"scheme must be alphabetic, got {self.scheme!r}", field="scheme")
        if self.token_length <= 0:
            raise ConfigError(f"token_length must be > 0, got {self.token_length}", field="token_length")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> GeneratorConfig:
        """Build a config from ``MOCKWEB_*`` variables, defaults for the rest."""
        env = os.environ if environ is None else environ
        kwargs: dict = {}

        raw_seed = env.get("MOCKWEB_SEED", "").strip()
        if raw_seed:
            kwargs["seed"] = _parse_int(raw_seed, "seed")

        raw_elements = env.get("MOCKWEB_PAGE_ELEMENTS", "").strip()
        if raw_elements:
            kwargs["page_elements"] = _parse_int(raw_elements, "page_elements")

        raw_extra = env.get("MOCKWEB_PAGE_EXTRA", "").strip()
        if raw_extra:
            kwargs["page_extra_elements"] = _parse_int(raw_extra, "page_extra_elements")

        scheme = env.get("MOCKWEB_SCHEME", "").strip().lower()
        if scheme:
            kwargs["scheme"] = scheme

        suffix = env.get("MOCKWEB_HOST_SUFFIX", "").strip()
        if suffix:
            kwargs["host_suffix"] = suffix

        raw_token = env.get("MOCKWEB_TOKEN_LENGTH", "").strip()
        if raw_token:
            kwargs["token_length"] = _parse_int(raw_token, "token_length")

        level = env.get("MOCKWEB_LOG_LEVEL", "").strip().upper()
        if level:
            kwargs["log_level"] = level

        kwargs["json_logs"] = env.get("MOCKWEB_JSON_LOGS", "").strip().lower() in _TRUTHY

        return cls(**kwargs)


def _parse_int(raw: str, field: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{field} must be an integer, got {raw!r}", field=field) from None
