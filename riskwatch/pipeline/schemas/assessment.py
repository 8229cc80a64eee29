"""Pydantic schemas for alert buckets and run reports."""
from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field


class AlertList(BaseModel):
    """Patient identifiers per alert bucket, in scan order.

    Serialised as is, this is the body posted to ``/submit-assessment``.
    """

    high_risk_patients: List[str] = Field(default_factory=list)
    fever_patients: List[str] = Field(default_factory=list)
    data_quality_issues: List[str] = Field(default_factory=list)


class PipelineReport(BaseModel):
    status: Literal["submitted", "no_patients", "dry_run", "failed"]
    patient_count: int = 0
    alerts: Optional[AlertList] = None
    response: Any = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status != "failed"
