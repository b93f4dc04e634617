"""Object classifier & stack resolver.

Turns a PlacedObject into the handful of values the boundary checks need:
radius, head point, stack index and offset, and for sliders the end point
and path samples shifted to where the game draws them.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from mapsight.curves.path import CurveKind, CurvePath
from mapsight.engine.context import ModelContractError, ObjectKind, PlacedObject
from mapsight.utils.geometry import Point

# Kinds with a screen footprint; spinners are centred and never offscreen.
POSITIONAL_KINDS = frozenset({ObjectKind.CIRCLE, ObjectKind.SLIDER})


@dataclass(frozen=True)
class ResolvedObject:
    obj: PlacedObject
    index: int
    radius: float
    head: Point
    stacked_head: Point
    stack_index: int = 0
    stacked_offset: Point = (0.0, 0.0)
    end: Point | None = None
    path: CurvePath | None = None

    @property
    def is_slider(self) -> bool:
        return self.path is not None

    @property
    def curve_kind(self) -> CurveKind | None:
        return self.path.kind if self.path is not None else None

    def stacked_samples(self) -> NDArray[np.float64]:
        """Coarse path samples moved by the stack offset."""
        if self.path is None:
            return np.empty((0, 2))
        return np.asarray(self.path.points, dtype=np.float64) + np.asarray(self.stacked_offset)


def is_positional(obj: PlacedObject) -> bool:
    return obj.kind in POSITIONAL_KINDS


def resolve(obj: PlacedObject, index: int, radius: float) -> ResolvedObject | None:
    """Classify ``obj``; returns None for objects without a screen footprint."""
    if not is_positional(obj):
        return None
    if radius < 0:
        raise ModelContractError(f"Circle radius must be >= 0, got {radius}")

    stack_index = obj.stacking.stack_index if obj.stacking is not None else 0
    offset = obj.stacking.offset if obj.stacking is not None else (0.0, 0.0)

    if obj.kind != ObjectKind.SLIDER:
        return ResolvedObject(
            obj=obj,
            index=index,
            radius=radius,
            head=obj.position,
            stacked_head=obj.stacked_position,
            stack_index=stack_index,
            stacked_offset=offset,
        )

    if obj.path is None or len(obj.path.points) == 0:
        raise ModelContractError(f"Slider at {obj.time}ms has no path samples")
    return ResolvedObject(
        obj=obj,
        index=index,
        radius=radius,
        head=obj.position,
        stacked_head=obj.stacked_position,
        stack_index=stack_index,
        stacked_offset=offset,
        end=obj.end_position,
        path=obj.path,
    )
