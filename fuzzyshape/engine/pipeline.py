"""Pipeline orchestrator — runs stages in dependency order."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time

from fuzzyshape.engine.config import SalienceConfig
from fuzzyshape.engine.context import ShapeContext
from fuzzyshape.engine.registry import Phase, StageRegistry, get_registry

logger = logging.getLogger(__name__)

STAGE_PACKAGES = ("stage0", "stage1", "stage2")


def register_stages() -> None:
    """Import all stage modules so @stage decorators fire."""
    for package_name in STAGE_PACKAGES:
        package = importlib.import_module(f"fuzzyshape.engine.{package_name}")
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package.__name__}.{module_name}")


class Pipeline:
    """Orchestrates the stage pipeline."""

    def __init__(
        self,
        registry: StageRegistry | None = None,
        config: SalienceConfig | None = None,
    ) -> None:
        if registry is None:
            register_stages()
            registry = get_registry()
        self.registry = registry
        self.config = config

    def run(
        self,
        ctx: ShapeContext,
        stages: set[str] | None = None,
        up_to: Phase | None = None,
    ) -> ShapeContext:
        """Run every registered stage, or only ``stages`` and their dependencies.

        With ``up_to`` the run stops after that phase.
        """
        start = time.perf_counter()
        if self.config is not None:
            ctx.config = self.config

        ordered = self.registry.resolve_order(stages, up_to=up_to)
        logger.info("Pipeline: %d stages queued", len(ordered))

        for spec in ordered:
            self._run_stage(ctx, spec)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d stages in %.0fms (%d salient points)",
            len(ctx.completed_stages),
            len(ordered),
            total,
            len(ctx.salient_indices),
        )
        return ctx

    def run_phase(self, ctx: ShapeContext, phase: Phase) -> ShapeContext:
        """Run only the stages of one phase, assuming earlier phases already ran."""
        if self.config is not None:
            ctx.config = self.config
        for spec in self.registry.get_phase(phase):
            self._run_stage(ctx, spec)
        return ctx

    def _run_stage(self, ctx: ShapeContext, spec) -> None:
        t0 = time.perf_counter()
        try:
            spec.fn(ctx)
            ctx.completed_stages.add(spec.id)
        except Exception as e:
            ctx.errors[spec.id] = str(e)
            logger.warning("  %s FAILED: %s", spec.id, e)
        elapsed = (time.perf_counter() - t0) * 1000
        ctx.timings_ms[spec.id] = round(elapsed, 2)
        logger.debug("  %s finished in %.1fms", spec.id, elapsed)


def create_pipeline(config: SalienceConfig | None = None) -> Pipeline:
    """Factory function for creating a pipeline over the registered stages."""
    return Pipeline(config=config)
