"""Deterministic per-patient risk scoring.

Each risk factor (blood pressure, temperature, age) is parsed by its own
function that returns the parsed value or ``None`` when the input fails basic
validation. A failed factor keeps a sub-score of 0 and marks the patient as
having a data-quality issue; the remaining factors are still scored.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..schemas.patients import Patient

HIGH_RISK_THRESHOLD = 4


def _parse_number(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    text = str(raw).strip()
    # float() would read "1_00" as 100
    if "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _parse_int(raw: Optional[str]) -> Optional[int]:
    # decimals truncate toward zero: "45.9" -> 45
    value = _parse_number(raw)
    if value is None:
        return None
    return int(value)


def parse_blood_pressure(raw: Optional[str]) -> Optional[Tuple[int, int]]:
    """Return ``(systolic, diastolic)`` or ``None`` if the reading is unusable."""

    if raw is None:
        return None
    parts = str(raw).split("/")
    if len(parts) != 2:
        return None
    systolic, diastolic = _parse_int(parts[0]), _parse_int(parts[1])
    if systolic is None or diastolic is None:
        return None
    if systolic <= 0 or diastolic <= 0:
        return None
    return systolic, diastolic


def parse_temperature(raw: Optional[str]) -> Optional[float]:
    value = _parse_number(raw)
    if value is None or value <= 0:
        return None
    return value


def parse_age(raw: Optional[str]) -> Optional[float]:
    """Return the age as given; only its whole-year part must be positive."""

    value = _parse_number(raw)
    if value is None or int(value) <= 0:
        return None
    return value


def blood_pressure_score(systolic: int, diastolic: int) -> int:
    # rules are applied in order; a later match overrides an earlier one
    score = 0
    if systolic < 120 and diastolic < 80:
        score = 0
    if 120 <= systolic <= 129 and diastolic < 80:
        score = 1
    if 130 <= systolic <= 139 or 80 <= diastolic <= 89:
        score = 2
    if systolic >= 140 or diastolic >= 90:
        score = 3
    return score


def temperature_score(temperature: float) -> int:
    # (99.5, 99.6) and (100.9, 101) match no band and stay at 0
    if temperature <= 99.5:
        return 0
    if 99.6 <= temperature <= 100.9:
        return 1
    if temperature >= 101:
        return 2
    return 0


def age_score(age: float) -> int:
    if age < 40:
        return 0
    if age <= 65:
        return 1
    return 2


@dataclass(frozen=True)
class RiskScore:
    blood_pressure: int = 0
    temperature: int = 0
    age: int = 0

    @property
    def total(self) -> int:
        return self.blood_pressure + self.temperature + self.age


@dataclass(frozen=True)
class PatientAssessment:
    patient_id: str
    score: RiskScore
    invalid_fields: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def data_quality_issue(self) -> bool:
        return bool(self.invalid_fields)

    @property
    def high_risk(self) -> bool:
        return self.score.total >= HIGH_RISK_THRESHOLD

    @property
    def fever(self) -> bool:
        return self.score.temperature >= 1


def score_patient(patient: Patient) -> PatientAssessment:
    """Score one patient record. Never raises on malformed vitals."""

    invalid = []

    bp_score = 0
    reading = parse_blood_pressure(patient.blood_pressure)
    if reading is None:
        invalid.append("blood_pressure")
    else:
        bp_score = blood_pressure_score(*reading)

    temp_score = 0
    temperature = parse_temperature(patient.temperature)
    if temperature is None:
        invalid.append("temperature")
    else:
        temp_score = temperature_score(temperature)

    years_score = 0
    age = parse_age(patient.age)
    if age is None:
        invalid.append("age")
    else:
        years_score = age_score(age)

    return PatientAssessment(
        patient_id=patient.patient_id,
        score=RiskScore(blood_pressure=bp_score, temperature=temp_score, age=years_score),
        invalid_fields=tuple(invalid),
    )
