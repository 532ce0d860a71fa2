# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""FixtureGenerator — one RandomSource plus config behind a small facade.

Usage::

    gen = FixtureGenerator(seed=7)
    page = gen.generate_page(100, ["http://a.com/x"])
    site = gen.generate_site(20)

Two generators never share state; a seed plus an identical call sequence
reproduces the same fixtures.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import structlog

from .builder import build_graph, build_spanning_tree
from .config import GeneratorConfig
from .dom import DomNode, generate_page
from .random_source import RandomSource
from .site import SiteNode, generate_site
from .structure import StructureNode

logger = logging.getLogger("mockweb.generator")


class FixtureGenerator:
    """Random tree, page and site generator bound to one random stream."""

    __slots__ = ("config", "rng")

    def __init__(self, seed: int | None = None, config: GeneratorConfig | None = None) -> None:
        self.config = config or GeneratorConfig()
        self.rng = RandomSource(self.config.seed if seed is None else seed)

    @classmethod
    def from_config(cls, config: GeneratorConfig | None = None) -> FixtureGenerator:
        """Generator configured from *config*, or from ``MOCKWEB_*`` env vars."""
        return cls(config=config or GeneratorConfig.from_env())

    @property
    def seed(self) -> int:
        return self.rng.current_seed

    def reseed(self, seed: int) -> None:
        self.rng.seed(seed)

    def _bind(self, operation: str) -> None:
        structlog.contextvars.bind_contextvars(mockweb_seed=self.seed, mockweb_op=operation)

    def rand_tree(self, root: StructureNode, n: int) -> list[StructureNode]:
        """Grow *n* nodes below *root*."""
        return build_spanning_tree(root, n, self.rng)

    def rand_graph(self, root: StructureNode, n: int) -> list[StructureNode]:
        """Grow *n* nodes below *root* and add random extra edges."""
        return build_graph(root, n, self.rng)

    def generate_page(self, element_count: int | None = None, links: Iterable[str] | None = None) -> DomNode:
        """Random page; *element_count* defaults to ``config.page_elements``."""
        count = self.config.page_elements if element_count is None else element_count
        self._bind("page")
        try:
            return generate_page(count, links, self.rng, config=self.config)
        finally:
            structlog.contextvars.unbind_contextvars("mockweb_seed", "mockweb_op")

    def generate_site(self, n: int) -> SiteNode:
        """Random site of *n* pages; returns the origin."""
        self._bind("site")
        try:
            site = generate_site(n, self.rng, config=self.config)
            logger.info("Site fixture ready: pages=%d max_depth=%d", len(site.context.pages), site.context.max_depth)
            return site
        finally:
            structlog.contextvars.unbind_contextvars("mockweb_seed", "mockweb_op")
