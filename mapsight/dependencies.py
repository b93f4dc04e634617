"""FastAPI dependency injection."""

from __future__ import annotations

from fastapi import Depends

from mapsight.config import Settings, settings
from mapsight.engine.config import EvaluatorConfig
from mapsight.engine.evaluator import OffscreenEvaluator, create_evaluator


def get_settings() -> Settings:
    return settings


def get_evaluator(app_settings: Settings = Depends(get_settings)) -> OffscreenEvaluator:
    return create_evaluator(EvaluatorConfig.from_settings(app_settings))
