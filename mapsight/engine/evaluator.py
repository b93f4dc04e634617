"""Offscreen evaluator: head, tail and body checks per placed object.

Per object, in order:
  1. head vs the bottom edge (the game never corrects bottom overflow)
  2. head vs the other edges, where the game clamps unstacked heads back
     inside the 512x512 square; stacked heads escape the clamp by the sign
     of their stack index
  3. slider tail, never corrected
  4. slider body on the cheap pixel samples
  5. non-linear bodies only: the same samples with a margin; any hit there
     triggers a dense walk of the whole curve in time
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor

import numpy as np
from numpy.typing import NDArray

from mapsight.curves.path import CurveKind
from mapsight.engine.boundary import (
    PLAYFIELD_LIMITS,
    BoundaryLimits,
    Edge,
    crossed_edges,
    edge_excess,
    excess,
    excess_many,
)
from mapsight.engine.classifier import ResolvedObject, resolve
from mapsight.engine.config import EvaluatorConfig
from mapsight.engine.context import Beatmap, GameMode, ModelContractError, ObjectKind
from mapsight.engine.findings import Classification, Finding, Part, make_finding

logger = logging.getLogger(__name__)

_TOP_OR_LEFT = frozenset({Edge.TOP, Edge.LEFT})


class OffscreenEvaluator:
    """Reports hit objects that render partially outside the 4:3 screen."""

    def __init__(
        self,
        config: EvaluatorConfig | None = None,
        limits: BoundaryLimits = PLAYFIELD_LIMITS,
    ) -> None:
        self.config = config or EvaluatorConfig()
        self.limits = limits

    def evaluate(self, beatmap: Beatmap) -> Iterator[Finding]:
        """Validate ``beatmap`` now, then lazily yield its findings.

        Calling again re-runs the analysis; nothing is cached.
        """
        resolved = self.prepare(beatmap)
        return self._iter_findings(resolved)

    def evaluate_parallel(self, beatmap: Beatmap, max_workers: int | None = None) -> list[Finding]:
        """Evaluate objects on a thread pool and merge back into traversal order."""
        resolved = self.prepare(beatmap)
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            batches = list(pool.map(lambda r: list(self.evaluate_object(r)), resolved))
        return sorted((f for batch in batches for f in batch), key=Finding.sort_key)

    def prepare(self, beatmap: Beatmap) -> list[ResolvedObject]:
        """Check the model's contract and classify every positional object."""
        if beatmap.mode != GameMode.STANDARD:
            logger.debug("Skipping %s beatmap: only standard is evaluated", beatmap.mode.value)
            return []

        radius = beatmap.difficulty.circle_radius()
        if radius < 0:
            raise ModelContractError(
                f"Circle size {beatmap.difficulty.circle_size} gives negative radius {radius:.2f}"
            )

        resolved: list[ResolvedObject] = []
        previous_time = -math.inf
        for index, obj in enumerate(beatmap.objects):
            if obj.time < previous_time:
                raise ModelContractError(
                    f"Objects must be ordered by start time ({obj.time}ms after {previous_time}ms)"
                )
            previous_time = obj.time

            if obj.kind == ObjectKind.SLIDER:
                if obj.path is None:
                    raise ModelContractError(f"Slider at {obj.time}ms has no curve path")
                if obj.path.duration < 0:
                    raise ModelContractError(f"Slider at {obj.time}ms has negative curve duration")
                if obj.slides < 1:
                    raise ModelContractError(f"Slider at {obj.time}ms has {obj.slides} slides")

            r = resolve(obj, index, radius)
            if r is not None:
                resolved.append(r)
        return resolved

    def _iter_findings(self, resolved: Iterable[ResolvedObject]) -> Iterator[Finding]:
        start = time.perf_counter()
        count = 0
        objects = 0
        for r in resolved:
            objects += 1
            for finding in self.evaluate_object(r):
                count += 1
                yield finding
        elapsed = (time.perf_counter() - start) * 1000
        logger.info("Offscreen check: %d findings over %d objects in %.1fms", count, objects, elapsed)

    def evaluate_object(self, r: ResolvedObject) -> Iterator[Finding]:
        """Findings for one object, head → tail → body."""
        head = self.check_head(r)
        if head is not None:
            yield make_finding(r.obj, r.index, Part.HEAD, head)

        if not r.is_slider:
            return

        if self.check_tail(r):
            yield make_finding(r.obj, r.index, Part.TAIL, Classification.OFFSCREEN)
            return

        body = self.check_body(r)
        if body is not None:
            yield make_finding(r.obj, r.index, Part.BODY, body)

    def check_head(self, r: ResolvedObject) -> Classification | None:
        per_edge = edge_excess(r.head, r.radius, 0.0, self.limits)
        # Letterboxing means the clamp never saves a head from the bottom.
        if per_edge[Edge.BOTTOM] > 0:
            return Classification.OFFSCREEN
        if max(per_edge.values()) <= 0:
            return None

        # Stacked heads skip the clamp: each index shifts them up-left, so
        # top/left only escape with index > 0 and right only with index < 0.
        crossed = crossed_edges(r.stacked_head, r.radius, self.limits)
        escapes_top_or_left = bool(crossed & _TOP_OR_LEFT) and r.stack_index > 0
        escapes_right = Edge.RIGHT in crossed and r.stack_index < 0
        if escapes_top_or_left or escapes_right:
            return Classification.OFFSCREEN
        return Classification.PREVENTED

    def check_tail(self, r: ResolvedObject) -> bool:
        if r.end is None:
            return False
        return excess(r.end, r.radius, 0.0, self.limits) > 0

    def check_body(self, r: ResolvedObject) -> Classification | None:
        samples = r.stacked_samples()
        if np.any(excess_many(samples, r.radius, 0.0, self.limits) > 0):
            return Classification.OFFSCREEN

        # Linear paths are sampled exactly; only curves can hide an overflow
        # between samples.
        if r.curve_kind == CurveKind.LINEAR:
            return None
        near = excess_many(samples, r.radius, self.config.margin_leniency, self.limits) > 0
        if not np.any(near):
            return None

        logger.debug(
            "Slider at %.0fms within %.1fpx of the edge at sample %d, sampling densely",
            r.obj.time,
            self.config.margin_leniency,
            int(np.argmax(near)),
        )
        if self.dense_offscreen(r):
            return Classification.OFFSCREEN
        return Classification.BODY_MARGIN_WARNING

    def dense_times(self, duration: float) -> NDArray[np.float64]:
        """Elapsed times (ms) for the dense pass over a full curve duration."""
        rate = self.config.dense_samples_per_ms
        count = max(int(math.ceil(duration * rate)), 0)
        cap = self.config.max_dense_samples
        if cap is not None and count > cap:
            return np.linspace(0.0, duration, cap, endpoint=False)
        return np.arange(count) / rate

    def dense_offscreen(self, r: ResolvedObject) -> bool:
        assert r.path is not None
        times = self.dense_times(r.path.duration)
        if len(times) == 0:
            return False
        positions = np.asarray(r.path.positions_at(times), dtype=np.float64).reshape(-1, 2)
        positions = positions + np.asarray(r.stacked_offset)
        return bool(np.any(excess_many(positions, r.radius, 0.0, self.limits) > 0))


def create_evaluator(config: EvaluatorConfig | None = None) -> OffscreenEvaluator:
    """Factory function for creating an evaluator instance."""
    return OffscreenEvaluator(config=config)


def find_offscreen(beatmap: Beatmap, config: EvaluatorConfig | None = None) -> list[Finding]:
    return list(create_evaluator(config).evaluate(beatmap))
