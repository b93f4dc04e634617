"""Leaf-node 2D geometry helpers. No engine imports."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

Point = tuple[float, float]


def add(a: Point, b: Point) -> Point:
    return (a[0] + b[0], a[1] + b[1])


def sub(a: Point, b: Point) -> Point:
    return (a[0] - b[0], a[1] - b[1])


def scale(p: Point, factor: float) -> Point:
    return (p[0] * factor, p[1] * factor)


def distance(a: Point, b: Point) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def lerp(a: Point, b: Point, t: float) -> Point:
    """Linear interpolation, t=0 → a, t=1 → b."""
    return (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)


def as_array(points) -> NDArray[np.float64]:
    """Coerce a point sequence into an Nx2 float array."""
    arr = np.asarray(points, dtype=np.float64)
    if arr.size == 0:
        return np.empty((0, 2))
    return arr.reshape(-1, 2)


def polyline_length(points: NDArray[np.float64]) -> float:
    """Total length of an open polyline."""
    if len(points) < 2:
        return 0.0
    diffs = np.diff(points, axis=0)
    return float(np.sum(np.sqrt(np.sum(diffs**2, axis=1))))


def dedupe_consecutive(points: NDArray[np.float64], eps: float = 1e-9) -> NDArray[np.float64]:
    """Drop points that coincide with their predecessor."""
    if len(points) < 2:
        return points
    step = np.sqrt(np.sum(np.diff(points, axis=0) ** 2, axis=1))
    keep = np.concatenate([[True], step > eps])
    return points[keep]
