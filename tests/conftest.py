"""Shared test fixtures and object-model builders."""

from __future__ import annotations

import numpy as np
import pytest

from mapsight.curves.path import CurveKind
from mapsight.engine.context import Beatmap, GameMode, PlacedObject


class FixedRadius:
    """Difficulty stand-in with an exact radius (CS maps to awkward floats)."""

    def __init__(self, radius: float = 10.0) -> None:
        self.radius = radius
        self.circle_size = 0.0

    def circle_radius(self) -> float:
        return self.radius


class StubPath:
    """Curve path with hand-picked samples and a scripted dense evaluator."""

    def __init__(self, kind, points, duration=10.0, position_fn=None) -> None:
        self.kind = CurveKind(kind)
        self._points = np.asarray(points, dtype=np.float64)
        self._duration = duration
        self._position_fn = position_fn or (lambda t: tuple(self._points[0]))
        self.calls = 0

    @property
    def points(self):
        return self._points

    @property
    def duration(self) -> float:
        return self._duration

    def position_at(self, elapsed: float):
        self.calls += 1
        return self._position_fn(elapsed)

    def positions_at(self, elapsed):
        return np.array([self.position_at(float(t)) for t in elapsed], dtype=np.float64).reshape(-1, 2)


def make_beatmap(*objects: PlacedObject, radius: float = 10.0, mode=GameMode.STANDARD) -> Beatmap:
    return Beatmap(objects=objects, difficulty=FixedRadius(radius), mode=mode)


# Margin case: sample peaks 1px inside the bottom edge with radius 10.
NEAR_BOTTOM_POINTS = [(100.0, 300.0), (256.0, 417.0), (400.0, 300.0)]


@pytest.fixture
def near_bottom_points() -> list[tuple[float, float]]:
    return list(NEAR_BOTTOM_POINTS)
