"""Circular indexing over a fixed-length closed sequence."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class CircularIndex:
    """Index arithmetic modulo ``length``.

    All walks are expressed in traversal order: "forward" follows increasing
    indices, "backward" decreasing ones.
    """

    length: int

    def wrap(self, i: int) -> int:
        return int(i) % self.length

    def step(self, i: int, k: int) -> int:
        """Index reached walking ``k`` positions from ``i`` (negative = backward)."""
        return (int(i) + int(k)) % self.length

    def forward_distance(self, a: int, b: int) -> int:
        """Number of forward steps from ``a`` to ``b`` (0 when equal)."""
        return (int(b) - int(a)) % self.length

    def forward_range(self, start: int, end: int, loop: bool = False) -> NDArray[np.int64]:
        """Indices walked forward from ``start`` to ``end``, both included.

        When ``start == end`` the result is ``[start]``, or the full loop
        ``start, ..., start`` (length + 1 entries) if ``loop`` is set.
        """
        span = self.forward_distance(start, end)
        if span == 0 and loop:
            span = self.length
        return (int(start) + np.arange(span + 1)) % self.length

    def window(self, start: int, size: int) -> NDArray[np.int64]:
        """``|size|`` indices beginning at ``start``; forward if size > 0, else backward."""
        if size > 0:
            return (int(start) + np.arange(size)) % self.length
        return (int(start) - np.arange(-size)) % self.length

    def between(self, a: int, b: int, i: int) -> bool:
        """True when ``i`` lies strictly inside the forward arc a -> b.

        With ``a == b`` the arc is the full loop, so any other index is inside.
        """
        span = self.forward_distance(a, b) or self.length
        offset = self.forward_distance(a, i)
        return 0 < offset < span
