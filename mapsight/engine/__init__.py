"""Mapsight offscreen analysis engine."""

from mapsight.engine.boundary import PLAYFIELD_LIMITS, BoundaryLimits, Edge, excess
from mapsight.engine.config import EvaluatorConfig
from mapsight.engine.context import (
    Beatmap,
    DifficultyParameters,
    GameMode,
    ModelContractError,
    ObjectKind,
    PlacedObject,
    StackingInfo,
)
from mapsight.engine.evaluator import OffscreenEvaluator, create_evaluator, find_offscreen
from mapsight.engine.findings import Classification, Finding, Part, Severity

__all__ = [
    "PLAYFIELD_LIMITS",
    "BoundaryLimits",
    "Edge",
    "excess",
    "EvaluatorConfig",
    "Beatmap",
    "DifficultyParameters",
    "GameMode",
    "ModelContractError",
    "ObjectKind",
    "PlacedObject",
    "StackingInfo",
    "OffscreenEvaluator",
    "create_evaluator",
    "find_offscreen",
    "Classification",
    "Finding",
    "Part",
    "Severity",
]
