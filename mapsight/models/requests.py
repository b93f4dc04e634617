"""API request models: JSON transport for an already-parsed beatmap."""

from __future__ import annotations

from pydantic import BaseModel, Field

from mapsight.curves.path import CurveKind, SliderPath
from mapsight.engine.context import (
    Beatmap,
    DifficultyParameters,
    GameMode,
    ObjectKind,
    PlacedObject,
    StackingInfo,
)


# Longer than any playable slide; keeps the dense pass bounded.
MAX_CURVE_DURATION_MS = 600_000


class SliderCurveIn(BaseModel):
    curve_kind: CurveKind = Field(default=CurveKind.BEZIER, description="L, P, B or C")
    control_points: list[tuple[float, float]] = Field(
        ..., min_length=1, description="Control points after the head"
    )
    pixel_length: float | None = Field(default=None, description="Declared slider length (px)")
    curve_duration: float = Field(
        ..., ge=0, le=MAX_CURVE_DURATION_MS, description="Time one slide takes (ms)"
    )
    slides: int = Field(default=1, ge=1)


class PlacedObjectIn(BaseModel):
    kind: ObjectKind = ObjectKind.CIRCLE
    time: float
    x: float = 256.0
    y: float = 192.0
    stack_index: int = Field(default=0, description="Signed stack index, 0 = unstacked")
    slider: SliderCurveIn | None = None

    def to_object(self, radius: float) -> PlacedObject:
        stacking = StackingInfo.from_index(self.stack_index, radius) if self.stack_index else None
        path = None
        slides = 1
        if self.kind == ObjectKind.SLIDER and self.slider is not None:
            path = SliderPath(
                self.slider.curve_kind,
                [(self.x, self.y), *self.slider.control_points],
                duration=self.slider.curve_duration,
                pixel_length=self.slider.pixel_length,
            )
            slides = self.slider.slides
        return PlacedObject(
            kind=self.kind,
            time=self.time,
            position=(self.x, self.y),
            stacking=stacking,
            path=path,
            slides=slides,
        )


class OffscreenRequest(BaseModel):
    circle_size: float = Field(default=4.0, ge=0, le=10)
    mode: GameMode = GameMode.STANDARD
    objects: list[PlacedObjectIn] = Field(default_factory=list)

    def to_beatmap(self) -> Beatmap:
        difficulty = DifficultyParameters(circle_size=self.circle_size)
        radius = difficulty.circle_radius()
        return Beatmap(
            objects=tuple(o.to_object(radius) for o in self.objects),
            difficulty=difficulty,
            mode=self.mode,
        )
