# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for mockweb.site — link graph, host clustering and page attachment."""

from __future__ import annotations

import inspect
import sys
from collections import deque

import pytest

from mockweb.config import GeneratorConfig
from mockweb.dom import collect_links, count_elements
from mockweb.errors import SiteSizeError
from mockweb.random_source import RandomSource
from mockweb.serializer import to_html
from mockweb.site import SiteContext, SiteNode, generate_site


def _bfs(origin: SiteNode) -> list[SiteNode]:
    seen: dict[int, SiteNode] = {id(origin): origin}
    queue = deque([origin])
    while queue:
        current = queue.popleft()
        for ref in current.refs:
            if id(ref) not in seen:
                seen[id(ref)] = ref
                queue.append(ref)
    return list(seen.values())


def _root_node(ctx: SiteContext, rng: RandomSource) -> SiteNode:
    node = SiteNode(hostname=ctx.mint_host(rng), link_path=rng.uuid_token(), context=ctx)
    ctx.register(node)
    return node


# =========================================================================
# SiteNode
# =========================================================================


class TestSiteNode:
    def test_full_link(self):
        node = SiteNode(hostname="http://h.com", link_path="p", context=SiteContext())
        assert node.full_link == "http://h.com/p"

    def test_spawn_registers_and_links(self, rng):
        ctx = SiteContext()
        parent = _root_node(ctx, rng)
        child = parent.spawn_child(rng)
        assert ctx.pages[child.full_link] is child
        assert parent.refs == [child]
        assert child.backlinks == [parent]

    def test_spawn_never_returns_none(self, rng):
        ctx = SiteContext()
        parent = _root_node(ctx, rng)
        assert all(parent.spawn_child(rng) is not None for _ in range(20))

    def test_attach_records_backlink(self, rng):
        ctx = SiteContext()
        a = _root_node(ctx, rng)
        b = a.spawn_child(rng)
        b.attach(a)
        assert a.backlinks == [b]
        assert b.has_edge_to(a)

    def test_has_edge_to_identity(self):
        ctx = SiteContext()
        a = SiteNode(hostname="http://h.com", link_path="p", context=ctx)
        twin = SiteNode(hostname="http://h.com", link_path="p", context=ctx)
        a.attach(SiteNode(hostname="http://h.com", link_path="p", context=ctx))
        assert not a.has_edge_to(twin)

    def test_hostname_format(self, rng):
        ctx = SiteContext(scheme="https", host_suffix=".test")
        host = ctx.mint_host(rng)
        assert host.startswith("https://")
        assert host.endswith(".test")
        assert ctx.hosts == [host]


class TestHostClustering:
    def test_first_pick_mints(self, rng):
        ctx = SiteContext()
        host = ctx.pick_host(rng)
        assert ctx.hosts == [host]

    def test_hosts_grow_monotonically(self, rng):
        ctx = SiteContext()
        parent = _root_node(ctx, rng)
        seen: list[str] = []
        for _ in range(200):
            parent.spawn_child(rng)
            assert ctx.hosts[: len(seen)] == seen
            seen = list(ctx.hosts)

    def test_early_hosts_dominate(self):
        rng = RandomSource(9)
        ctx = SiteContext()
        parent = _root_node(ctx, rng)
        children = [parent.spawn_child(rng) for _ in range(500)]
        per_host = {h: 0 for h in ctx.hosts}
        for child in children:
            per_host[child.hostname] += 1
        assert len(ctx.hosts) < len(children)
        assert per_host[ctx.hosts[0]] == max(per_host.values())


# =========================================================================
# generate_site
# =========================================================================


class TestGenerateSite:
    def test_single_page_site(self, rng):
        site = generate_site(1, rng)
        ctx = site.context
        assert len(ctx.pages) == 1
        assert ctx.max_depth == 0
        assert site.refs == []
        assert site.page is not None
        assert all(href == "#" for href in collect_links(site.page))
        assert count_elements(site.page) >= 5

    @pytest.mark.parametrize("n", [2, 5, 20, 60])
    def test_registry_size(self, n):
        site = generate_site(n, RandomSource(n))
        assert len(site.context.pages) == n

    def test_registry_matches_reachable_nodes(self, rng):
        site = generate_site(20, rng)
        reachable = _bfs(site)
        assert len(reachable) == 20
        for node in reachable:
            assert site.context.pages[node.full_link] is node

    def test_every_page_links_every_ref(self, rng):
        site = generate_site(20, rng)
        for node in site.context.pages.values():
            assert node.page is not None, f"cannot find page at link {node.full_link}"
            markup = to_html(node.page)
            for ref in node.refs:
                assert f'href="{ref.full_link}"' in markup, f"{node.full_link} missing link {ref.full_link}"

    def test_page_links_exactly_refs(self, rng):
        site = generate_site(15, rng)
        for node in site.context.pages.values():
            placed = [h for h in collect_links(node.page) if h != "#"]
            assert sorted(placed) == sorted({r.full_link for r in node.refs})

    def test_page_size_scales_with_site(self, rng):
        n = 30
        site = generate_site(n, rng)
        for node in site.context.pages.values():
            assert 2 * n <= count_elements(node.page) < 2 * n + 91

    def test_depths(self, rng):
        site = generate_site(25, rng)
        ctx = site.context
        assert site.depth == 0
        assert ctx.max_depth >= max(node.depth for node in ctx.pages.values())
        for node in ctx.pages.values():
            if node is not site:
                assert node.depth >= 1

    def test_backlinks_mirror_refs(self, rng):
        site = generate_site(20, rng)
        for node in site.context.pages.values():
            for ref in node.refs:
                assert any(b is node for b in ref.backlinks)
            for src in node.backlinks:
                assert src.has_edge_to(node)

    def test_hosts_cover_every_page(self, rng):
        site = generate_site(30, rng)
        hosts = set(site.context.hosts)
        assert all(node.hostname in hosts for node in site.context.pages.values())
        assert site.context.hosts[0] == site.hostname

    def test_config_scheme_and_extra(self, rng):
        cfg = GeneratorConfig(scheme="https", host_suffix=".org", page_extra_elements=1)
        site = generate_site(6, rng, config=cfg)
        assert all(h.startswith("https://") and h.endswith(".org") for h in site.context.hosts)
        for node in site.context.pages.values():
            assert count_elements(node.page) == max(12, len({r.full_link for r in node.refs}) + 5)

    def test_self_edge_page_links_itself(self):
        cfg = GeneratorConfig(page_extra_elements=1)
        looped: list[SiteNode] = []
        for seed in range(10):
            site = generate_site(12, RandomSource(seed), config=cfg)
            looped.extend(node for node in site.context.pages.values() if node in node.refs)
        assert looped, "no self-edge in ten seeded sites"
        for node in looped:
            assert node.has_edge_to(node)
            assert any(b is node for b in node.backlinks)
            assert node.full_link in collect_links(node.page)

    def test_deep_site_needs_no_recursion(self):
        # Leave headroom for page building only; one frame per DFS level would not fit.
        headroom = 80
        old_limit = sys.getrecursionlimit()
        sys.setrecursionlimit(len(inspect.stack(0)) + headroom)
        try:
            site = generate_site(200, RandomSource(0), config=GeneratorConfig(page_extra_elements=1))
        finally:
            sys.setrecursionlimit(old_limit)
        ctx = site.context
        assert len(ctx.pages) == 200
        assert ctx.max_depth > headroom
        assert all(node.page is not None for node in ctx.pages.values())

    def test_walk_keeps_first_visit_depth(self, rng):
        site = generate_site(30, rng)
        for node in site.context.pages.values():
            if node is not site:
                # Depth is set on first arrival, one level below the parent it came from.
                assert any(parent.depth == node.depth - 1 for parent in node.backlinks)

    @pytest.mark.parametrize("n", [0, -3])
    def test_empty_site_rejected(self, n, rng):
        with pytest.raises(SiteSizeError, match="n must be"):
            generate_site(n, rng)
