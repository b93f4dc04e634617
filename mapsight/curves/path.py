"""Slider curve paths: control points → pixel samples + time evaluator.

The analyzer only relies on the ``CurvePath`` protocol. ``SliderPath`` is the
reference provider: it approximates the control polygon densely for the
curve kind, wraps the result in a shapely LineString, fits it to the
declared pixel length and samples it once per osu!pixel.
"""

from __future__ import annotations

import enum
import logging
import math
from typing import Protocol, Sequence, runtime_checkable

import numpy as np
import shapely
from numpy.typing import NDArray
from scipy.special import comb
from shapely.geometry import LineString

from mapsight.utils.geometry import Point, as_array, dedupe_consecutive, polyline_length

logger = logging.getLogger(__name__)

# Spatial resolution of the precomputed path samples.
_SAMPLE_SPACING_PX = 1.0
# Catmull segments are approximated with a fixed count, like the game.
_CATMULL_DETAIL = 50
# Arcs and bezier segments: roughly one point per pixel, bounded.
_MIN_SEGMENT_POINTS = 8
_MAX_SEGMENT_POINTS = 1000
# Three control points closer to collinear than this are not a circle.
_COLLINEAR_EPS = 1e-3


class CurveKind(str, enum.Enum):
    LINEAR = "L"
    PERFECT = "P"
    BEZIER = "B"
    CATMULL = "C"


@runtime_checkable
class CurvePath(Protocol):
    """What the offscreen evaluator needs from a slider path."""

    kind: CurveKind

    @property
    def points(self) -> NDArray[np.float64]: ...

    @property
    def duration(self) -> float: ...

    def position_at(self, elapsed: float) -> Point: ...

    def positions_at(self, elapsed: NDArray[np.float64]) -> NDArray[np.float64]: ...


def _segment_points(polygon: NDArray[np.float64]) -> int:
    estimate = int(math.ceil(polyline_length(polygon)))
    return min(max(estimate, _MIN_SEGMENT_POINTS), _MAX_SEGMENT_POINTS)


def bezier_points(control: NDArray[np.float64], count: int | None = None) -> NDArray[np.float64]:
    """Evaluate a single bezier segment of any degree via the Bernstein basis."""
    if len(control) < 2:
        return control.copy()
    degree = len(control) - 1
    n = count or _segment_points(control)
    t = np.linspace(0.0, 1.0, n)[:, None]
    i = np.arange(degree + 1)[None, :]
    basis = comb(degree, i) * t**i * (1.0 - t) ** (degree - i)
    return basis @ control


def _approximate_bezier(control: NDArray[np.float64]) -> NDArray[np.float64]:
    # A repeated control point splits the curve into independent segments.
    pieces: list[NDArray[np.float64]] = []
    start = 0
    for i in range(1, len(control)):
        last = i == len(control) - 1
        repeated = not last and np.allclose(control[i], control[i + 1])
        if repeated or last:
            seg = control[start : i + 1]
            pieces.append(bezier_points(seg))
            start = i + 1 if repeated else i
    if not pieces:
        return control.copy()
    return np.concatenate(pieces)


def _approximate_linear(control: NDArray[np.float64]) -> NDArray[np.float64]:
    return control.copy()


def _approximate_catmull(control: NDArray[np.float64]) -> NDArray[np.float64]:
    n = len(control)
    if n < 2:
        return control.copy()
    t = np.linspace(0.0, 1.0, _CATMULL_DETAIL)[:, None]
    pieces = []
    for i in range(n - 1):
        v1 = control[i - 1] if i > 0 else control[i]
        v2 = control[i]
        v3 = control[i + 1]
        v4 = control[i + 2] if i < n - 2 else v3 + v3 - v2
        pieces.append(
            0.5
            * (
                2 * v2
                + (-v1 + v3) * t
                + (2 * v1 - 5 * v2 + 4 * v3 - v4) * t**2
                + (-v1 + 3 * v2 - 3 * v3 + v4) * t**3
            )
        )
    return np.concatenate(pieces)


def _approximate_perfect(control: NDArray[np.float64]) -> NDArray[np.float64]:
    """Circular arc through three points; falls back to bezier when degenerate."""
    if len(control) != 3:
        return _approximate_bezier(control)

    a, b, c = control
    d = 2 * (a[0] * (b[1] - c[1]) + b[0] * (c[1] - a[1]) + c[0] * (a[1] - b[1]))
    if abs(d) < _COLLINEAR_EPS:
        return _approximate_bezier(control)

    a_sq = a @ a
    b_sq = b @ b
    c_sq = c @ c
    center = np.array([
        (a_sq * (b[1] - c[1]) + b_sq * (c[1] - a[1]) + c_sq * (a[1] - b[1])) / d,
        (a_sq * (c[0] - b[0]) + b_sq * (a[0] - c[0]) + c_sq * (b[0] - a[0])) / d,
    ])
    radius = float(np.linalg.norm(a - center))

    theta_start = math.atan2(a[1] - center[1], a[0] - center[0])
    theta_end = math.atan2(c[1] - center[1], c[0] - center[0])
    while theta_end < theta_start:
        theta_end += 2 * math.pi

    direction = 1.0
    theta_range = theta_end - theta_start
    # b on the clockwise side of a→c means the arc runs the other way round.
    ortho = np.array([c[1] - a[1], -(c[0] - a[0])])
    if ortho @ (b - a) < 0:
        direction = -1.0
        theta_range = 2 * math.pi - theta_range

    count = min(max(int(math.ceil(theta_range * radius)), 2), _MAX_SEGMENT_POINTS)
    theta = theta_start + direction * np.linspace(0.0, theta_range, count)
    return np.column_stack([center[0] + radius * np.cos(theta), center[1] + radius * np.sin(theta)])


_APPROXIMATORS = {
    CurveKind.LINEAR: _approximate_linear,
    CurveKind.PERFECT: _approximate_perfect,
    CurveKind.BEZIER: _approximate_bezier,
    CurveKind.CATMULL: _approximate_catmull,
}


class SliderPath:
    """Reference ``CurvePath`` built from slider control points.

    ``control_points`` includes the head. ``pixel_length`` trims (or linearly
    extends) the approximated curve; ``None`` keeps its natural length.
    ``duration`` is the time in ms one slide takes.
    """

    def __init__(
        self,
        kind: CurveKind,
        control_points: Sequence[Point],
        duration: float,
        pixel_length: float | None = None,
    ) -> None:
        self.kind = CurveKind(kind)
        self.control_points = as_array(control_points)
        if len(self.control_points) == 0:
            raise ValueError("Slider path needs at least one control point")
        self._duration = float(duration)

        curve = dedupe_consecutive(_APPROXIMATORS[self.kind](self.control_points))
        natural = polyline_length(curve)
        target = natural if pixel_length is None or pixel_length <= 0 else float(pixel_length)

        if len(curve) < 2:
            # Every control point coincides: the slider never moves.
            self._line = None
            self._length = 0.0
            self._points = curve[:1].copy()
            return

        if target > natural:
            tail_dir = curve[-1] - curve[-2]
            tail_dir = tail_dir / np.linalg.norm(tail_dir)
            curve = np.vstack([curve, curve[-1] + tail_dir * (target - natural)])

        self._line = LineString(curve)
        self._length = target
        distances = np.append(np.arange(0.0, target, _SAMPLE_SPACING_PX), target)
        self._points = shapely.get_coordinates(shapely.line_interpolate_point(self._line, distances))
        logger.debug(
            "SliderPath %s: %d control points → %d samples over %.1fpx",
            self.kind.value,
            len(self.control_points),
            len(self._points),
            self._length,
        )

    @property
    def points(self) -> NDArray[np.float64]:
        return self._points

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def length(self) -> float:
        return self._length

    @property
    def start(self) -> Point:
        return (float(self._points[0, 0]), float(self._points[0, 1]))

    @property
    def end(self) -> Point:
        return (float(self._points[-1, 0]), float(self._points[-1, 1]))

    def position_at(self, elapsed: float) -> Point:
        """Point on the path ``elapsed`` ms into a single slide."""
        if self._line is None:
            return self.start
        if self._duration <= 0:
            return self.end
        progress = min(max(elapsed / self._duration, 0.0), 1.0)
        p = self._line.interpolate(progress * self._length)
        return (p.x, p.y)

    def positions_at(self, elapsed: NDArray[np.float64]) -> NDArray[np.float64]:
        """Vectorised ``position_at``: an Nx2 array for N elapsed times."""
        elapsed = np.asarray(elapsed, dtype=np.float64).reshape(-1)
        if self._line is None or self._duration <= 0:
            anchor = self._points[0] if self._line is None else self._points[-1]
            return np.tile(anchor, (len(elapsed), 1))
        progress = np.clip(elapsed / self._duration, 0.0, 1.0)
        points = shapely.line_interpolate_point(self._line, progress * self._length)
        return shapely.get_coordinates(points).reshape(-1, 2)
