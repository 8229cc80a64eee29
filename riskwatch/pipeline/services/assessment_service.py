"""End-to-end orchestration: collect, classify, submit."""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from ..client.patients_api import PatientsAPIClient
from ..core.config import Settings
from ..schemas.assessment import AlertList, PipelineReport
from ..schemas.patients import Patient
from ..scoring.alerts import classify_patients
from .collector import PatientCollector

logger = logging.getLogger(__name__)

Classifier = Callable[[Iterable[Patient]], Optional[AlertList]]


class AssessmentService:
    """Run one assessment pass against the patients API."""

    def __init__(
        self,
        cfg: Settings,
        *,
        client: Optional[PatientsAPIClient] = None,
        classifier: Classifier = classify_patients,
    ) -> None:
        self.cfg = cfg
        self.client = client or PatientsAPIClient(cfg)
        self.collector = PatientCollector(self.client)
        self.classifier = classifier

    async def run(self) -> PipelineReport:
        try:
            return await self._run()
        except Exception as exc:
            logger.error("Assessment run failed: %s", exc, exc_info=self.cfg.verbose)
            return PipelineReport(status="failed", error=f"{type(exc).__name__}: {exc}")
        finally:
            await self.client.aclose()

    async def _run(self) -> PipelineReport:
        collected = await self.collector.collect()
        count = len(collected.patients)
        if not collected.complete:
            error = f"Patient collection incomplete at page {collected.failed_page}: {collected.reason}"
            logger.error("%s", error)
            return PipelineReport(status="failed", patient_count=count, error=error)
        logger.info("Total patients found: %s", count)
        if not count:
            logger.info("No patients found")
            return PipelineReport(status="no_patients")

        alerts = self.classifier(collected.patients)
        if alerts is None:
            logger.error("Alert classification failed, nothing submitted")
            return PipelineReport(status="failed", patient_count=count, error="Alert classification failed")
        logger.debug("Alert list: %s", alerts.model_dump_json())

        if self.cfg.dry_run:
            logger.info("Dry run, assessment not submitted")
            return PipelineReport(status="dry_run", patient_count=count, alerts=alerts)

        response = await self.client.submit_assessment(alerts)
        logger.info("Assessment submitted")
        return PipelineReport(status="submitted", patient_count=count, alerts=alerts, response=response)
