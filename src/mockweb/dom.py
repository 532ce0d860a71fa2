# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Random HTML element trees with a tag/attribute grammar.

Every page is ``root -> html -> {head -> title, body -> ...}`` where the
body subtree is grown by ``build_spanning_tree``. A shared PageContext
tracks the links that still have to be placed and the remaining element
budget. Once the budget no longer exceeds the pending links, every new
element is an anchor, so all links land exactly once.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from .builder import build_spanning_tree
from .config import SKELETON_ELEMENTS, GeneratorConfig
from .errors import InvariantViolation, PageSizeError
from .random_source import RandomSource

logger = logging.getLogger("mockweb.dom")

# ---------------------------------------------------------------------------
# Grammar
# ---------------------------------------------------------------------------

ANCHOR_TAG = "a"
HREF_ATTR = "href"
FALLBACK_HREF = "#"

SECTIONING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6", "article", "section", "footer", "header", "nav")
TEXT_TAGS = ("div", "hr", "li", "main", "p", "ul")
CONTENT_TAGS = ("a", "img", "span", "audio", "video", "source")

_FLOW = CONTENT_TAGS + TEXT_TAGS

TAG_POOL: dict[str, tuple[str, ...]] = {
    "body": SECTIONING_TAGS + TEXT_TAGS + CONTENT_TAGS,
    **{h: TEXT_TAGS for h in ("h1", "h2", "h3", "h4", "h5", "h6")},
    **{t: _FLOW for t in ("article", "section", "footer", "header", "nav", "main", "div")},
    "ul": CONTENT_TAGS + ("li",),
    "li": CONTENT_TAGS,
    "hr": (),
    "p": (),
    "a": ("img", "span", "audio", "video", "source"),
    "audio": ("source",),
    "video": ("source",),
    "source": (),
    "span": (),
    "img": (),
}

COMMON_ATTRS = ("class", "id")

ATTR_POOL: dict[str, tuple[str, ...]] = {
    **{tag: COMMON_ATTRS for tag in ("head", "body", "title") + SECTIONING_TAGS + TEXT_TAGS + ("span",)},
    "li": COMMON_ATTRS + ("value",),
    "a": COMMON_ATTRS + (HREF_ATTR,),
    "audio": COMMON_ATTRS + ("controls",),
    "video": COMMON_ATTRS + ("controls",),
    "img": COMMON_ATTRS + ("src",),
    "source": COMMON_ATTRS + ("src",),
}


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class PageContext:
    """State shared by every node of one page.

    ``tag_index`` / ``attr_index`` are the expected-output oracle: every
    element registered under its tag and under each attribute it carries.
    """

    remaining_links: deque[str]
    remaining_budget: int
    token_length: int = 17
    tag_index: dict[str, list[DomNode]] = field(default_factory=dict)
    attr_index: dict[str, list[DomNode]] = field(default_factory=dict)

    def register(self, node: DomNode) -> None:
        if node.tag:
            self.tag_index.setdefault(node.tag, []).append(node)
        for attr in node.attributes:
            self.attr_index.setdefault(attr, []).append(node)

    def exhausted(self) -> bool:
        """True once every further element is needed to carry a pending link."""
        return self.remaining_budget <= len(self.remaining_links)


@dataclass(eq=False)
class DomNode:
    """One element of a generated page. Compared by identity."""

    tag: str
    context: PageContext = field(repr=False)
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[DomNode] = field(default_factory=list, repr=False)
    text: str | None = None  # content-bearing payload (title only)
    position: int = 0  # BFS ordinal from <html>, 1-based; document root stays 0

    # -- StructureNode --------------------------------------------------

    def spawn_child(self, rng: RandomSource) -> DomNode | None:
        allowed = TAG_POOL.get(self.tag)
        if not allowed:
            return None

        ctx = self.context
        if ctx.exhausted():
            if ANCHOR_TAG not in allowed:
                return None  # retried under another parent
            tag = ANCHOR_TAG
        else:
            tag = allowed[rng.int_in_range(len(allowed))]

        child = DomNode(tag=tag, context=ctx)
        for attr in ATTR_POOL.get(tag, ()):
            if attr == HREF_ATTR:
                child.attributes[attr] = ctx.remaining_links.popleft() if ctx.remaining_links else FALLBACK_HREF
            elif rng.coin():
                child.attributes[attr] = rng.token(ctx.token_length)

        ctx.remaining_budget -= 1
        ctx.register(child)
        self.attach(child)
        return child

    def attach(self, node: DomNode) -> None:
        self.children.append(node)

    def has_edge_to(self, node: DomNode) -> bool:
        return any(child is node for child in self.children)

    # -- Convenience ----------------------------------------------------

    @property
    def is_document(self) -> bool:
        return not self.tag

    @property
    def href(self) -> str | None:
        return self.attributes.get(HREF_ATTR)


# ---------------------------------------------------------------------------
# Traversal helpers
# ---------------------------------------------------------------------------


def iter_elements(node: DomNode) -> Iterator[DomNode]:
    """Breadth-first over *node* and its descendants, skipping the document root."""
    queue: deque[DomNode] = deque([node])
    while queue:
        current = queue.popleft()
        if not current.is_document:
            yield current
        queue.extend(current.children)


def count_elements(node: DomNode) -> int:
    return sum(1 for _ in iter_elements(node))


def collect_links(node: DomNode) -> list[str]:
    """Every href value in the tree, BFS order (fallback ``#`` included)."""
    return [el.href for el in iter_elements(node) if el.href is not None]


def _assign_positions(html: DomNode) -> None:
    for pos, element in enumerate(iter_elements(html), start=1):
        element.position = pos


# ---------------------------------------------------------------------------
# Page generation
# ---------------------------------------------------------------------------


def generate_page(
    element_count: int,
    links: Iterable[str] | None,
    rng: RandomSource,
    *,
    config: GeneratorConfig | None = None,
) -> DomNode:
    """Build a random page of exactly *element_count* elements.

    Every distinct string in *links* becomes the ``href`` of exactly one
    anchor. Returns the document root; its single child is ``<html>``.

    Raises:
        PageSizeError: element_count leaves no room beyond the skeleton,
            or the links do not fit into the remaining budget.
        InvariantViolation: links or budget left over after generation.
    """
    if element_count <= SKELETON_ELEMENTS:
        raise PageSizeError(
            f"element_count must be > {SKELETON_ELEMENTS}, got {element_count}",
            requested=element_count,
            minimum=SKELETON_ELEMENTS + 1,
        )
    pending = deque(dict.fromkeys(links or ()))
    budget = element_count - SKELETON_ELEMENTS
    if len(pending) > budget:
        raise PageSizeError(
            f"{len(pending)} links do not fit into {budget} generated elements",
            requested=element_count,
            minimum=SKELETON_ELEMENTS + len(pending),
        )

    cfg = config or GeneratorConfig()
    ctx = PageContext(remaining_links=pending, remaining_budget=budget, token_length=cfg.token_length)

    title = DomNode(tag="title", context=ctx, text=rng.token(cfg.token_length))
    head = DomNode(tag="head", context=ctx, children=[title])
    body = DomNode(tag="body", context=ctx)
    html = DomNode(tag="html", context=ctx, children=[head, body])
    root = DomNode(tag="", context=ctx, children=[html])
    for node in (html, head, title, body):
        ctx.register(node)

    build_spanning_tree(body, budget, rng)
    _assign_positions(html)

    if ctx.remaining_links:
        raise InvariantViolation(f"{len(ctx.remaining_links)} links were not placed")
    if ctx.remaining_budget != 0:
        raise InvariantViolation(f"element budget ended at {ctx.remaining_budget}, expected 0")

    logger.debug(
        "Page generated: elements=%d anchors=%d",
        element_count,
        len(ctx.tag_index.get(ANCHOR_TAG, ())),
    )
    return root
