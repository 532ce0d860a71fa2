# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Seedable random source threaded through every generation call.

There is no module-level generator: each RandomSource owns its own
``random.Random`` stream, so two sources never interfere. Opaque tokens
(hostnames, link paths, attribute fillers) are drawn from the same stream,
which makes a seed reproduce the whole fixture.
"""

from __future__ import annotations

import random
import string
import time
import uuid

_TOKEN_ALPHABET = string.ascii_letters + string.digits


class RandomSource:
    """Uniform/normal integer, permutation and token provider.

    NOTE: not thread-safe. Share one instance per generation call only.
    """

    __slots__ = ("_rng", "_seed")

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random()
        self._seed = 0
        self.seed(time.time_ns() if seed is None else seed)

    @property
    def current_seed(self) -> int:
        return self._seed

    def seed(self, value: int) -> None:
        """Reset the stream to *value*."""
        self._seed = value
        self._rng.seed(value)

    def int_in_range(self, n: int) -> int:
        """Uniform integer in ``[0, n)``. ``n`` must be positive."""
        if n <= 0:
            raise ValueError(f"n must be > 0, got {n}")
        return self._rng.randrange(n)

    def normal(self) -> float:
        """Standard normal sample (mean 0, stddev 1)."""
        return self._rng.gauss(0.0, 1.0)

    def permutation(self, n: int) -> list[int]:
        """``[0, n)`` in random order."""
        perm = list(range(n))
        self._rng.shuffle(perm)
        return perm

    def coin(self) -> bool:
        """True with probability 1/2."""
        return self._rng.randrange(2) == 1

    def token(self, length: int) -> str:
        """Alphanumeric token of *length* characters."""
        return "".join(self._rng.choice(_TOKEN_ALPHABET) for _ in range(length))

    def uuid_token(self) -> str:
        """UUID4-shaped token drawn from this stream (reproducible under a seed)."""
        return str(uuid.UUID(int=self._rng.getrandbits(128), version=4))
