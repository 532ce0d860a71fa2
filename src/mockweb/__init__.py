# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""mockweb: randomized DOM trees and website link graphs for test fixtures.

Generates structurally valid inputs for consumers that walk hierarchical or
graph-shaped data:
- pages: HTML element trees following a tag/attribute grammar, embedding a
  given link set exactly once each
- sites: multi-host link graphs whose pages link to every outgoing ref,
  with the registry of all pages as the expected crawl result
"""

from __future__ import annotations

from .builder import build_graph, build_spanning_tree
from .config import GeneratorConfig
from .dom import DomNode, PageContext, collect_links, count_elements, generate_page, iter_elements
from .errors import (
    ConfigError,
    GenerationSizeError,
    InvariantViolation,
    MockWebError,
    PageSizeError,
    SiteSizeError,
)
from .generator import FixtureGenerator
from .random_source import RandomSource
from .serializer import site_to_dict, site_to_json, to_element, to_html
from .site import SiteContext, SiteNode, generate_site
from .structure import StructureNode

__all__ = [
    "ConfigError",
    "DomNode",
    "FixtureGenerator",
    "GenerationSizeError",
    "GeneratorConfig",
    "InvariantViolation",
    "MockWebError",
    "PageContext",
    "PageSizeError",
    "RandomSource",
    "SiteContext",
    "SiteNode",
    "SiteSizeError",
    "StructureNode",
    "build_graph",
    "build_spanning_tree",
    "collect_links",
    "count_elements",
    "generate_page",
    "generate_site",
    "iter_elements",
    "site_to_dict",
    "site_to_json",
    "to_element",
    "to_html",
]
