"""Exception types raised by the shape engine."""

from __future__ import annotations


class FuzzyShapeError(Exception):
    """Base class for all engine errors."""


class ConstructionError(FuzzyShapeError, ValueError):
    """Invalid parameters or inconsistent objects, detected at construction time."""


class TracingStuckError(FuzzyShapeError, RuntimeError):
    """The boundary tracer found no next foreground neighbour.

    Usually means the mask is a single isolated pixel or otherwise ill-formed.
    """

    def __init__(self, point: tuple[int, int], steps: int) -> None:
        self.point = point
        self.steps = steps
        super().__init__(f"Boundary tracing stuck at {point} after {steps} steps")
