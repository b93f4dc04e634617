"""POST /api/offscreen: offscreen check over a parsed object model."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, HTTPException

from mapsight.dependencies import get_evaluator
from mapsight.engine.context import ModelContractError
from mapsight.engine.evaluator import OffscreenEvaluator
from mapsight.engine.findings import Severity
from mapsight.models.requests import OffscreenRequest
from mapsight.models.responses import FindingResponse, OffscreenResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/offscreen", response_model=OffscreenResponse)
def offscreen(
    request: OffscreenRequest,
    evaluator: OffscreenEvaluator = Depends(get_evaluator),
) -> OffscreenResponse:
    start = time.perf_counter()
    try:
        beatmap = request.to_beatmap()
        findings = list(evaluator.evaluate(beatmap))
    except ModelContractError as e:
        logger.warning("Rejected object model: %s", e)
        raise HTTPException(status_code=422, detail=str(e)) from e

    elapsed = (time.perf_counter() - start) * 1000
    items = [FindingResponse.from_finding(f) for f in findings]
    return OffscreenResponse(
        findings=items,
        object_count=beatmap.num_objects,
        problem_count=sum(1 for f in findings if f.severity == Severity.PROBLEM),
        warning_count=sum(1 for f in findings if f.severity == Severity.WARNING),
        processing_time_ms=round(elapsed, 1),
    )
