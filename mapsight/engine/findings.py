"""Offscreen findings and their report messages."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from mapsight.engine.boundary import CLAMP_REGION
from mapsight.engine.context import PlacedObject


class Part(str, enum.Enum):
    HEAD = "head"
    TAIL = "tail"
    BODY = "body"


class Classification(str, enum.Enum):
    OFFSCREEN = "Offscreen"
    PREVENTED = "Prevented"
    BODY_MARGIN_WARNING = "BodyMarginWarning"


class Severity(str, enum.Enum):
    PROBLEM = "problem"
    WARNING = "warning"


_SEVERITY = {
    Classification.OFFSCREEN: Severity.PROBLEM,
    Classification.PREVENTED: Severity.WARNING,
    Classification.BODY_MARGIN_WARNING: Severity.WARNING,
}

_TEMPLATES = {
    Classification.OFFSCREEN: "{timestamp} - {label} is offscreen.",
    Classification.PREVENTED: "{timestamp} - {label} would be offscreen, but the game prevents it.",
    Classification.BODY_MARGIN_WARNING: (
        "{timestamp} - Slider body is possibly offscreen, ensure the entire white border "
        "is visible on a 4:3 aspect ratio."
    ),
}

_CLAMP_SIZE = f"{CLAMP_REGION[2] - CLAMP_REGION[0]:g}x{CLAMP_REGION[3] - CLAMP_REGION[1]:g}"

_CAUSES = {
    Classification.OFFSCREEN: (
        "The border of a hit object is partially off the screen in 4:3 aspect ratios."
    ),
    Classification.PREVENTED: (
        f"The hit object is placed where it would leave the {_CLAMP_SIZE} playfield area, "
        "but the game moves it back inside the screen automatically."
    ),
    Classification.BODY_MARGIN_WARNING: (
        "The slider body is approximated to be within the margin of being offscreen "
        "at some point on its curve."
    ),
}

# Within one object findings come head → tail → body.
PART_ORDER = {Part.HEAD: 0, Part.TAIL: 1, Part.BODY: 2}


def format_timestamp(ms: float) -> str:
    """Editor timestamp, mm:ss:mmm."""
    total = int(round(ms))
    sign = "-" if total < 0 else ""
    total = abs(total)
    minutes, rest = divmod(total, 60_000)
    seconds, millis = divmod(rest, 1000)
    return f"{sign}{minutes:02d}:{seconds:02d}:{millis:03d}"


@dataclass(frozen=True)
class Finding:
    obj: PlacedObject
    object_index: int
    timestamp: float
    part: Part
    classification: Classification

    @property
    def severity(self) -> Severity:
        return _SEVERITY[self.classification]

    @property
    def label(self) -> str:
        if not self.obj.is_slider:
            return "Circle"
        return f"Slider {self.part.value}"

    @property
    def cause(self) -> str:
        return _CAUSES[self.classification]

    def message(self) -> str:
        return _TEMPLATES[self.classification].format(
            timestamp=format_timestamp(self.timestamp),
            label=self.label,
        )

    def sort_key(self) -> tuple[int, int]:
        return (self.object_index, PART_ORDER[self.part])


def make_finding(
    obj: PlacedObject,
    index: int,
    part: Part,
    classification: Classification,
) -> Finding:
    """Map one evaluator decision to a finding; tails are stamped with the end time."""
    timestamp = obj.end_time if part == Part.TAIL else obj.time
    return Finding(
        obj=obj,
        object_index=index,
        timestamp=timestamp,
        part=part,
        classification=classification,
    )
