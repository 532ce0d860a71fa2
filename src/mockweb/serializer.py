# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Fixture serialization: markup, lxml trees and site oracles.

Three output forms:
- Markup: nested open/close tags for parser tests (``to_html``)
- lxml element: the same tree pre-built for comparison (``to_element``)
- Site oracle: JSON-ready dict of the link graph for crawler tests
"""

from __future__ import annotations

import html
import json
from typing import TYPE_CHECKING, Any

from lxml import etree

from .dom import DomNode
from .errors import InvariantViolation

if TYPE_CHECKING:
    from .site import SiteNode


def _render_attrs(node: DomNode) -> str:
    return "".join(f' {name}="{html.escape(value, quote=True)}"' for name, value in node.attributes.items() if name)


def to_html(node: DomNode | None) -> str:
    """Render *node* depth-first.

    Childless elements without text are self-closing. The document root has
    no tag of its own and renders only its children. Attribute order is the
    order attributes were assigned.
    """
    if node is None:
        raise InvariantViolation("cannot render an absent node")
    parts: list[str] = []
    _render(node, parts)
    return "".join(parts)


def _render(node: DomNode, parts: list[str]) -> None:
    if node.is_document:
        for child in node.children:
            _render(child, parts)
        return

    attrs = _render_attrs(node)
    if not node.children and node.text is None:
        parts.append(f"<{node.tag}{attrs}/>")
        return

    parts.append(f"<{node.tag}{attrs}>")
    if node.text is not None:
        parts.append(html.escape(node.text, quote=False))
    for child in node.children:
        _render(child, parts)
    parts.append(f"</{node.tag}>")


def to_element(node: DomNode | None) -> etree._Element:
    """Build the lxml element tree matching *node*.

    A document root is unwrapped to its single ``<html>`` child.
    """
    if node is None:
        raise InvariantViolation("cannot convert an absent node")
    if node.is_document:
        if len(node.children) != 1:
            raise InvariantViolation(f"document root must have one child, has {len(node.children)}")
        node = node.children[0]

    element = etree.Element(node.tag, dict(node.attributes))
    element.text = node.text
    for child in node.children:
        element.append(to_element(child))
    return element


def site_to_dict(site: SiteNode, *, include_html: bool = False) -> dict[str, Any]:
    """Serialize the site oracle: registry, hosts, depths and edges."""
    ctx = site.context
    pages: dict[str, Any] = {}
    for link, page in ctx.pages.items():
        entry: dict[str, Any] = {
            "hostname": page.hostname,
            "link_path": page.link_path,
            "depth": page.depth,
            "refs": [ref.full_link for ref in page.refs],
            "backlinks": [src.full_link for src in page.backlinks],
        }
        if include_html:
            entry["html"] = to_html(page.page) if page.page is not None else None
        pages[link] = entry
    return {
        "origin": site.full_link,
        "max_depth": ctx.max_depth,
        "hosts": list(ctx.hosts),
        "pages": pages,
    }


def site_to_json(site: SiteNode, *, include_html: bool = False, indent: int = 2) -> str:
    """Serialize the site oracle to a JSON string."""
    return json.dumps(site_to_dict(site, include_html=include_html), ensure_ascii=False, indent=indent)
