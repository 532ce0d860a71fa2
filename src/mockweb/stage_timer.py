# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Stage timer for generation latency logging.

Generation cost grows with the requested size; the per-stage split shows
whether graph construction or page building dominates for a given size::

    timer = StageTimer()
    with timer.stage("graph"):
        build_graph(...)
    logger.debug("stages=%s total_ms=%.1f", timer.elapsed_per_stage(), timer.total_ms())
"""

from __future__ import annotations

import time
from collections.abc import Iterator
from contextlib import contextmanager


class StageTimer:
    """Accumulate wall time per named generation stage."""

    __slots__ = ("_elapsed_ns", "_start_ns")

    def __init__(self) -> None:
        self._elapsed_ns: dict[str, int] = {}
        self._start_ns: int = time.monotonic_ns()

    @contextmanager
    def stage(self, name: str) -> Iterator[None]:
        """Time the enclosed block; repeated names accumulate."""
        start = time.monotonic_ns()
        try:
            yield
        finally:
            self._elapsed_ns[name] = self._elapsed_ns.get(name, 0) + time.monotonic_ns() - start

    def elapsed_per_stage(self) -> dict[str, float]:
        """Return {stage_name: elapsed_ms} for finished stages, in first-run order."""
        return {name: round(ns / 1e6, 1) for name, ns in self._elapsed_ns.items()}

    def total_ms(self) -> float:
        """Wall time since the timer was created, stages or not."""
        return round((time.monotonic_ns() - self._start_ns) / 1e6, 1)
