"""Boundary model: the visible 4:3 play area and per-point excess.

All coordinates are osu!pixels (the 512x384 playfield space). The limits
were measured against slider tails on a 4:3 display; 16:9 and 16:10 only
widen the screen, so the top and bottom limits hold for every aspect ratio.

    excess = max(x + r - right, r - x + left, y + r - lower, r - y + upper) + leniency

rounded up to the next 0.01 so near-boundary float noise never hides an
overflow. excess <= 0 → on-screen; > 0 → offscreen by that many pixels.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from mapsight.utils.geometry import Point


class Edge(str, enum.Enum):
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class BoundaryLimits:
    # Old measurements: -60, 430, -66, 578
    upper: float = -60.0
    lower: float = 428.0
    left: float = -67.0
    right: float = 579.0


PLAYFIELD_LIMITS = BoundaryLimits()

# Heads are clamped back into this square by the game (stacking aside).
CLAMP_REGION = (0.0, 0.0, 512.0, 512.0)


def _ceil_hundredths(value: float) -> float:
    return math.ceil(value * 100) / 100


def edge_excess(
    point: Point,
    radius: float,
    leniency: float = 0.0,
    limits: BoundaryLimits = PLAYFIELD_LIMITS,
) -> dict[Edge, float]:
    """Rounded excess past each of the four screen edges."""
    x, y = point
    return {
        Edge.RIGHT: _ceil_hundredths(x + radius - limits.right + leniency),
        Edge.LEFT: _ceil_hundredths(radius - x + limits.left + leniency),
        Edge.BOTTOM: _ceil_hundredths(y + radius - limits.lower + leniency),
        Edge.TOP: _ceil_hundredths(radius - y + limits.upper + leniency),
    }


def excess(
    point: Point,
    radius: float,
    leniency: float = 0.0,
    limits: BoundaryLimits = PLAYFIELD_LIMITS,
) -> float:
    """How far (px) a circle of ``radius`` at ``point`` pokes past the screen."""
    return max(edge_excess(point, radius, leniency, limits).values())


def excess_many(
    points: NDArray[np.float64],
    radius: float,
    leniency: float = 0.0,
    limits: BoundaryLimits = PLAYFIELD_LIMITS,
) -> NDArray[np.float64]:
    """Vectorised ``excess`` over an Nx2 array of points."""
    if len(points) == 0:
        return np.empty(0)
    x = points[:, 0]
    y = points[:, 1]
    per_edge = np.stack([
        x + radius - limits.right,
        radius - x + limits.left,
        y + radius - limits.lower,
        radius - y + limits.upper,
    ])
    worst = np.max(per_edge, axis=0) + leniency
    return np.ceil(worst * 100) / 100


def crossed_edges(
    point: Point,
    radius: float,
    limits: BoundaryLimits = PLAYFIELD_LIMITS,
) -> set[Edge]:
    """Edges the circle at ``point`` crosses with zero leniency."""
    return {edge for edge, value in edge_excess(point, radius, 0.0, limits).items() if value > 0}
