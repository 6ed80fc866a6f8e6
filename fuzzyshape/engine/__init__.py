"""fuzzyshape salient point engine."""

from fuzzyshape.engine.registry import stage, Phase, get_registry
from fuzzyshape.engine.config import SalienceConfig
from fuzzyshape.engine.context import ShapeContext
from fuzzyshape.engine.pipeline import Pipeline, create_pipeline

__all__ = [
    "stage",
    "Phase",
    "get_registry",
    "SalienceConfig",
    "ShapeContext",
    "Pipeline",
    "create_pipeline",
]
