"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from mapsight.engine.findings import Finding, format_timestamp


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    checks: list[str] = Field(default_factory=list)


class FindingResponse(BaseModel):
    object_index: int
    timestamp: float
    timestamp_text: str
    part: str
    classification: str
    severity: str
    message: str

    @classmethod
    def from_finding(cls, finding: Finding) -> FindingResponse:
        return cls(
            object_index=finding.object_index,
            timestamp=finding.timestamp,
            timestamp_text=format_timestamp(finding.timestamp),
            part=finding.part.value,
            classification=finding.classification.value,
            severity=finding.severity.value,
            message=finding.message(),
        )


class OffscreenResponse(BaseModel):
    findings: list[FindingResponse] = Field(default_factory=list)
    object_count: int = 0
    problem_count: int = 0
    warning_count: int = 0
    processing_time_ms: float = 0.0
