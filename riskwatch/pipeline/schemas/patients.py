"""Pydantic schemas for the paginated patients endpoint."""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.functional_validators import field_validator


class Patient(BaseModel):
    """One patient record as served by the remote API.

    ``age``, ``blood_pressure`` and ``temperature`` arrive as numbers or
    strings and are kept as strings; checking their contents is the job of
    the risk scorer, so a missing value is not a schema error here.
    """

    patient_id: str
    name: str
    age: Optional[str] = None
    gender: Literal["M", "F"]
    blood_pressure: Optional[str] = None
    temperature: Optional[str] = None
    visit_date: str
    diagnosis: str
    medications: str

    model_config = ConfigDict(extra="ignore")

    @field_validator("age", "blood_pressure", "temperature", mode="before")
    @classmethod
    def coerce_to_string(cls, value: object) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, bool):
            return str(value).lower()
        if isinstance(value, (int, float)):
            return str(value)
        raise ValueError(f"expected a number or a string, got {type(value).__name__}")


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int
    hasNext: bool
    hasPrevious: bool


class ResponseMetadata(BaseModel):
    timestamp: str
    version: str
    requestId: str


class PatientPage(BaseModel):
    data: List[Patient]
    pagination: Pagination
    metadata: ResponseMetadata
