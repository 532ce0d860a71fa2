# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""structlog + stdlib bridge for mockweb log output.

Generator modules log via ``logging.getLogger("mockweb.<module>")``; this
module decides how those records are rendered. Fixtures are usually built
inside someone else's test session, so by default only the ``mockweb``
logger tree gets the handler and the host's root logging is left alone.
Pass ``namespace=None`` to take over the root logger instead (CLI-style
runs, CI jobs that collect JSON lines). Calling ``configure`` again
replaces the handler it installed.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

from .config import GeneratorConfig
from .errors import ConfigError

LOGGER_NAMESPACE = "mockweb"


def _pre_chain() -> list:
    # Bound contextvars (mockweb_seed, mockweb_op) ride along on stdlib records too.
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _level_number(level: str) -> int:
    number = logging.getLevelName(level.upper())
    if not isinstance(number, int):
        raise ConfigError(f"log_level must be a logging level name, got {level!r}", field="log_level")
    return number


def configure(
    *,
    json_output: bool = False,
    level: str = "INFO",
    stream: TextIO | None = None,
    namespace: str | None = LOGGER_NAMESPACE,
) -> logging.Logger:
    """Render mockweb log records through one structlog-formatted handler.

    Args:
        json_output: JSON lines instead of the console renderer.
        level: Level name for the configured logger.
        stream: Output stream (default: stderr at call time).
        namespace: Logger that receives the handler. The default scopes
            output to ``mockweb.*`` and stops propagation so records are not
            printed twice; ``None`` configures the root logger.

    Returns:
        The configured logger.

    Raises:
        ConfigError: *level* is not a logging level name.
    """
    level_no = _level_number(level)
    pre_chain = _pre_chain()
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=pre_chain,
        )
    )

    target = logging.getLogger(namespace)
    target.handlers.clear()
    target.addHandler(handler)
    target.setLevel(level_no)
    if namespace is not None:
        target.propagate = False
    return target


def configure_from(
    config: GeneratorConfig,
    *,
    stream: TextIO | None = None,
    namespace: str | None = LOGGER_NAMESPACE,
) -> logging.Logger:
    """Apply the ``log_level`` / ``json_logs`` fields of *config*."""
    return configure(json_output=config.json_logs, level=config.log_level, stream=stream, namespace=namespace)
