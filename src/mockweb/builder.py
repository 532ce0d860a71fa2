# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Random spanning-tree and graph construction over StructureNode.

Both functions are domain-agnostic: leaf constraints live in the node's
``spawn_child`` (a None result is retried, never counted).
"""

from __future__ import annotations

import logging

from .random_source import RandomSource
from .structure import StructureNode

logger = logging.getLogger("mockweb.builder")


def build_spanning_tree(root: StructureNode, n: int, rng: RandomSource) -> list[StructureNode]:
    """Grow *n* new nodes below *root* and return ``[root, *new_nodes]``.

    Each round picks a parent uniformly among the nodes built so far and asks
    it for a child. Nodes that cannot take children return None and the round
    is retried. There is no retry cap: a node family that always refuses
    children loops forever.
    """
    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}")

    nodes: list[StructureNode] = [root]
    created = 0
    retries = 0
    while created < n:
        parent = nodes[0] if len(nodes) == 1 else nodes[rng.int_in_range(len(nodes))]
        child = parent.spawn_child(rng)
        if child is None:
            retries += 1
            continue
        nodes.append(child)
        created += 1

    logger.debug("Spanning tree built: nodes=%d retries=%d", len(nodes), retries)
    return nodes


def build_graph(root: StructureNode, n: int, rng: RandomSource) -> list[StructureNode]:
    """Spanning tree of *n* new nodes plus random extra edges.

    For every node, ``c`` in ``[0, n)`` targets are taken from the front of a
    random permutation of ``[0, n)`` and attached unless the edge exists.
    A node may pick its own index (self-edge).
    """
    nodes = build_spanning_tree(root, n, rng)
    if n == 0:
        return nodes

    extra = 0
    for node in nodes:
        count = rng.int_in_range(n)
        for idx in rng.permutation(n)[:count]:
            target = nodes[idx]
            if not node.has_edge_to(target):
                node.attach(target)
                extra += 1

    logger.debug("Graph augmented: nodes=%d extra_edges=%d", len(nodes), extra)
    return nodes
