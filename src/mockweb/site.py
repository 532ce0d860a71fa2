# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Random multi-host website link graphs.

The link graph is built by ``build_graph`` over SiteNode, then frozen and
walked depth-first from the origin. The walk assigns depths (first visit
wins, so a depth is not necessarily the shortest path) and builds one page
per node whose anchors cover exactly the node's outgoing refs.

The SiteContext is the crawler-test oracle: ``pages`` holds every node ever
created, ``hosts`` every hostname, ``max_depth`` the deepest depth seen.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from dataclasses import dataclass, field

from .builder import build_graph
from .config import SKELETON_ELEMENTS, GeneratorConfig
from .dom import DomNode, generate_page
from .errors import SiteSizeError
from .random_source import RandomSource
from .stage_timer import StageTimer

logger = logging.getLogger("mockweb.site")


@dataclass
class SiteContext:
    """State shared by every node of one site."""

    scheme: str = "http"
    host_suffix: str = ".com"
    pages: dict[str, SiteNode] = field(default_factory=dict)
    hosts: list[str] = field(default_factory=list)
    max_depth: int = 0

    def mint_host(self, rng: RandomSource) -> str:
        hostname = f"{self.scheme}://{rng.uuid_token()}{self.host_suffix}"
        self.hosts.append(hostname)
        return hostname

    def pick_host(self, rng: RandomSource) -> str:
        """Reuse an early host most of the time, occasionally mint a new one.

        ``idx = floor(|N(0,1)| * hosts / 2)`` favours the first hosts minted,
        giving a few dominant sites and a long tail.
        """
        n_hosts = len(self.hosts)
        if n_hosts == 0:
            return self.mint_host(rng)
        idx = math.floor(abs(rng.normal()) * n_hosts / 2)
        if idx >= n_hosts:
            return self.mint_host(rng)
        return self.hosts[idx]

    def register(self, node: SiteNode) -> None:
        self.pages[node.full_link] = node


@dataclass(eq=False)
class SiteNode:
    """One page of a generated site. Compared by identity."""

    hostname: str
    link_path: str
    context: SiteContext = field(repr=False)
    full_link: str = field(init=False)
    depth: int = 0
    page: DomNode | None = field(default=None, repr=False)
    refs: list[SiteNode] = field(default_factory=list, repr=False)
    backlinks: list[SiteNode] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        self.full_link = f"{self.hostname}/{self.link_path}"

    # -- StructureNode --------------------------------------------------

    def spawn_child(self, rng: RandomSource) -> SiteNode:
        ctx = self.context
        hostname = ctx.pick_host(rng)
        child = SiteNode(hostname=hostname, link_path=rng.uuid_token(), context=ctx)
        ctx.register(child)
        self.attach(child)
        return child

    def attach(self, node: SiteNode) -> None:
        self.refs.append(node)
        node.backlinks.append(self)

    def has_edge_to(self, node: SiteNode) -> bool:
        return any(ref is node for ref in self.refs)


def _page_size(n_sites: int, n_links: int, rng: RandomSource, cfg: GeneratorConfig) -> int:
    # Pages carry far more elements than links; tiny sites still need a valid page.
    size = 2 * n_sites + rng.int_in_range(cfg.page_extra_elements)
    return max(size, n_links + SKELETON_ELEMENTS + 1)


def generate_site(n: int, rng: RandomSource, *, config: GeneratorConfig | None = None) -> SiteNode:
    """Build a site of *n* pages and return its origin.

    Raises:
        SiteSizeError: n < 1.
    """
    if n < 1:
        raise SiteSizeError(f"n must be >= 1, got {n}", requested=n, minimum=1)

    cfg = config or GeneratorConfig()
    ctx = SiteContext(scheme=cfg.scheme, host_suffix=cfg.host_suffix)
    origin = SiteNode(hostname=ctx.mint_host(rng), link_path=rng.uuid_token(), context=ctx)
    ctx.register(origin)

    timer = StageTimer()
    with timer.stage("graph"):
        build_graph(origin, n - 1, rng)
    with timer.stage("pages"):
        _walk(origin, n, rng, cfg)

    logger.debug(
        "Site generated: pages=%d hosts=%d max_depth=%d stages=%s total_ms=%.1f",
        len(ctx.pages),
        len(ctx.hosts),
        ctx.max_depth,
        timer.elapsed_per_stage(),
        timer.total_ms(),
    )
    return origin


def _walk(origin: SiteNode, n_sites: int, rng: RandomSource, cfg: GeneratorConfig) -> None:
    """Depth-first walk from *origin* assigning depths and building pages.

    Uses an explicit stack of ``(node, depth, pending refs, links)`` frames,
    so sites far deeper than the interpreter recursion limit still build.
    ``max_depth`` counts every arrival, repeats included; ``depth`` is set on
    the first one. A page is built once all of its node's refs are walked.
    """
    ctx = origin.context
    visited: set[str] = set()
    stack: list[tuple[SiteNode, int, Iterator[SiteNode], dict[str, None]]] = []

    def arrive(node: SiteNode, depth: int) -> None:
        ctx.max_depth = max(ctx.max_depth, depth)
        if node.full_link in visited:
            return
        visited.add(node.full_link)
        node.depth = depth
        stack.append((node, depth, iter(node.refs), {}))

    arrive(origin, 0)
    while stack:
        node, depth, pending, links = stack[-1]
        ref = next(pending, None)
        if ref is not None:
            links[ref.full_link] = None
            arrive(ref, depth + 1)
            continue
        stack.pop()
        node.page = generate_page(_page_size(n_sites, len(links), rng, cfg), links, rng, config=cfg)
