"""Stage registry — every stage is a standalone function registered via decorator.

Usage:
    @stage(id="S1.01", phase=Phase.CONTOUR_ANALYSIS, dependencies=["S0.01"])
    def curvature(ctx: ShapeContext) -> None:
        ctx.curvature = estimate_curvature(ctx.contour)

Adding a new stage = creating one file with the decorator. Nothing else changes.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from fuzzyshape.engine.context import ShapeContext

logger = logging.getLogger(__name__)


class Phase(enum.IntEnum):
    TRACING = 0
    CONTOUR_ANALYSIS = 1
    MULTISCALE = 2


@dataclass
class StageSpec:
    id: str
    phase: Phase
    fn: Callable[["ShapeContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class StageRegistry:
    """Registry of pipeline stages keyed by ID."""

    def __init__(self) -> None:
        self._stages: dict[str, StageSpec] = {}

    def register(self, spec: StageSpec) -> None:
        if spec.id in self._stages:
            raise ValueError(f"Duplicate stage ID: {spec.id}")
        self._stages[spec.id] = spec
        logger.debug("Registered stage %s (%s)", spec.id, spec.phase.name)

    def get(self, stage_id: str) -> StageSpec:
        return self._stages[stage_id]

    def get_phase(self, phase: Phase) -> list[StageSpec]:
        specs = [s for s in self._stages.values() if s.phase == phase]
        return sorted(specs, key=lambda s: s.id)

    def all(self) -> list[StageSpec]:
        return sorted(self._stages.values(), key=lambda s: (s.phase, s.id))

    def check_dependencies(self, specs: list[StageSpec] | None = None) -> None:
        """Reject unknown dependencies and dependencies on a later phase.

        Contours flow tracing -> contour analysis -> multi-scale, so a stage may
        only read results of its own phase or an earlier one.
        """
        for spec in specs if specs is not None else self._stages.values():
            for dep in spec.dependencies:
                upstream = self._stages.get(dep)
                if upstream is None:
                    raise ValueError(f"Stage {spec.id} depends on unknown stage {dep}")
                if upstream.phase > spec.phase:
                    raise ValueError(
                        f"Stage {spec.id} ({spec.phase.name}) depends on later-phase "
                        f"stage {dep} ({upstream.phase.name})"
                    )

    def resolve_order(
        self,
        requested_ids: set[str] | None = None,
        up_to: Phase | None = None,
    ) -> list[StageSpec]:
        """Topological sort respecting dependencies. If requested_ids is None, run all.

        ``up_to`` drops every stage of a later phase, so a run can stop after
        tracing or after single-scale analysis.
        """
        pool = self._stages
        if requested_ids is not None:
            unknown = set(requested_ids) - set(pool)
            if unknown:
                raise ValueError(f"Unknown stages requested: {sorted(unknown)}")
            # Expand with transitive dependencies
            expanded: set[str] = set()
            stack = list(requested_ids)
            while stack:
                sid = stack.pop()
                if sid in expanded:
                    continue
                expanded.add(sid)
                spec = pool.get(sid)
                if spec:
                    stack.extend(spec.dependencies)
            pool = {k: v for k, v in pool.items() if k in expanded}
        if up_to is not None:
            pool = {k: v for k, v in pool.items() if v.phase <= up_to}
        self.check_dependencies(list(pool.values()))

        # Kahn's algorithm
        in_degree: dict[str, int] = {sid: 0 for sid in pool}
        for sid, spec in pool.items():
            for dep in spec.dependencies:
                if dep in pool:
                    in_degree[sid] += 1

        queue = sorted(sid for sid, d in in_degree.items() if d == 0)
        ordered: list[StageSpec] = []

        while queue:
            sid = queue.pop(0)
            ordered.append(pool[sid])
            for other_id, other_spec in pool.items():
                if sid in other_spec.dependencies:
                    in_degree[other_id] -= 1
                    if in_degree[other_id] == 0:
                        queue.append(other_id)
                        queue.sort()

        if len(ordered) != len(pool):
            missing = set(pool) - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {missing}")

        return ordered

    @property
    def count(self) -> int:
        return len(self._stages)


# Module-level singleton
_registry = StageRegistry()


def get_registry() -> StageRegistry:
    return _registry


def stage(
    *,
    id: str,
    phase: Phase,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Decorator to register a stage function."""

    def decorator(fn: Callable[["ShapeContext"], None]):
        _registry.register(
            StageSpec(
                id=id,
                phase=phase,
                fn=fn,
                dependencies=dependencies or [],
                description=description,
            )
        )
        return fn

    return decorator
