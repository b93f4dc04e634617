"""Evaluator configuration: controls the two-stage body sampling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mapsight.config import Settings


@dataclass
class EvaluatorConfig:
    """Knobs for the margin pre-filter and dense re-evaluation."""

    # Leniency (px) for the coarse re-scan that decides whether to sample densely
    margin_leniency: float = 2.0
    # Dense pass temporal resolution
    dense_samples_per_ms: int = 50
    # None = uncapped; cost is then linear in curve duration
    max_dense_samples: int | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> EvaluatorConfig:
        return cls(
            margin_leniency=settings.margin_leniency,
            dense_samples_per_ms=settings.dense_samples_per_ms,
            max_dense_samples=settings.max_dense_samples,
        )
