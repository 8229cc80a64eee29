"""Aggregate scored patients into alert buckets."""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..schemas.assessment import AlertList
from ..schemas.patients import Patient
from .risk import score_patient

logger = logging.getLogger(__name__)


def classify_patients(patients: Iterable[Patient]) -> Optional[AlertList]:
    """Scan patients once and bucket their identifiers.

    Returns ``None`` if the scan fails unexpectedly; a malformed patient is
    recorded as a data-quality issue, not an error.
    """

    alerts = AlertList()
    try:
        for patient in patients:
            assessment = score_patient(patient)
            logger.debug(
                "Scored %s: bp=%s temp=%s age=%s total=%s invalid=%s",
                assessment.patient_id,
                assessment.score.blood_pressure,
                assessment.score.temperature,
                assessment.score.age,
                assessment.score.total,
                ",".join(assessment.invalid_fields) or "-",
            )
            if assessment.high_risk:
                alerts.high_risk_patients.append(assessment.patient_id)
            if assessment.fever:
                alerts.fever_patients.append(assessment.patient_id)
            if assessment.data_quality_issue:
                alerts.data_quality_issues.append(assessment.patient_id)
    except Exception:
        logger.exception("Alert classification failed")
        return None
    return alerts
