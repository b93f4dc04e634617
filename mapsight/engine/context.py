"""Immutable, already-parsed object model the offscreen evaluator reads.

Beatmap parsing lives upstream; these dataclasses are what it hands over.
Positions are authored (unstacked) osu!pixel coordinates; stacking is an
optional capability carrying the visual offset and signed stack index.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from mapsight.curves.path import CurvePath
from mapsight.utils.geometry import Point, add


class ModelContractError(ValueError):
    """The supplied object model breaks an invariant the evaluator relies on."""


class GameMode(str, enum.Enum):
    STANDARD = "standard"
    TAIKO = "taiko"
    CATCH = "catch"
    MANIA = "mania"


class ObjectKind(str, enum.Enum):
    CIRCLE = "circle"
    SLIDER = "slider"
    SPINNER = "spinner"


@dataclass(frozen=True)
class DifficultyParameters:
    circle_size: float = 4.0

    def circle_radius(self) -> float:
        """Hit circle radius in osu!pixels: 32 * (1 - 0.7 * (CS - 5) / 5)."""
        return 54.4 - 4.48 * self.circle_size


@dataclass(frozen=True)
class StackingInfo:
    stack_index: int = 0
    # stacked (visual) position minus unstacked (authored) position
    offset: Point = (0.0, 0.0)

    @classmethod
    def from_index(cls, stack_index: int, radius: float) -> StackingInfo:
        """Offset the game applies: radius/10 up and left per positive index."""
        step = -stack_index * radius / 10
        return cls(stack_index=stack_index, offset=(step, step))


@dataclass(frozen=True)
class PlacedObject:
    kind: ObjectKind
    time: float
    position: Point
    stacking: StackingInfo | None = None
    # Sliders only
    path: CurvePath | None = None
    slides: int = 1

    @property
    def is_slider(self) -> bool:
        return self.kind == ObjectKind.SLIDER

    @property
    def stacked_position(self) -> Point:
        if self.stacking is None:
            return self.position
        return add(self.position, self.stacking.offset)

    @property
    def curve_duration(self) -> float:
        return self.path.duration if self.path is not None else 0.0

    @property
    def end_time(self) -> float:
        return self.time + self.curve_duration * self.slides

    @property
    def end_position(self) -> Point:
        """Where the slider finishes: path end on odd slide counts, head on even."""
        if self.path is None or len(self.path.points) == 0:
            return self.position
        if self.slides % 2 == 0:
            return self.position
        end = self.path.points[-1]
        return (float(end[0]), float(end[1]))


def circle(time: float, x: float, y: float, stacking: StackingInfo | None = None) -> PlacedObject:
    return PlacedObject(ObjectKind.CIRCLE, time, (x, y), stacking=stacking)


def slider(
    time: float,
    path: CurvePath,
    stacking: StackingInfo | None = None,
    slides: int = 1,
) -> PlacedObject:
    head = path.points[0] if len(path.points) else (0.0, 0.0)
    return PlacedObject(
        ObjectKind.SLIDER,
        time,
        (float(head[0]), float(head[1])),
        stacking=stacking,
        path=path,
        slides=slides,
    )


@dataclass(frozen=True)
class Beatmap:
    objects: tuple[PlacedObject, ...] = field(default_factory=tuple)
    difficulty: DifficultyParameters = field(default_factory=DifficultyParameters)
    mode: GameMode = GameMode.STANDARD

    def __post_init__(self) -> None:
        # Accept any sequence but store a tuple so the model stays immutable.
        object.__setattr__(self, "objects", tuple(self.objects))

    @property
    def num_objects(self) -> int:
        return len(self.objects)
