# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""StructureNode — the capability the generic builders operate on.

Runtime-checkable Protocol; the concrete implementations are
``dom.DomNode`` and ``site.SiteNode``.
The builders never inspect which variant they hold.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .random_source import RandomSource


@runtime_checkable
class StructureNode(Protocol):
    """A node that can grow children and accept extra edges."""

    def spawn_child(self, rng: RandomSource) -> StructureNode | None:
        """Create a new node linked below this one, or None if this node is a leaf."""
        ...

    def attach(self, node: StructureNode) -> None:
        """Add an edge from this node to an existing node."""
        ...

    def has_edge_to(self, node: StructureNode) -> bool:
        """True if an edge from this node to *node* already exists."""
        ...
