"""Walk every page of the patients API in order."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import AsyncIterator, List, Optional

from ..client.patients_api import PageResult, PatientsAPIClient
from ..schemas.patients import Patient, PatientPage

logger = logging.getLogger(__name__)


class CollectionIncompleteError(RuntimeError):
    """Raised when a page could not be fetched within the retry budget."""

    def __init__(self, result: PageResult):
        super().__init__(f"page {result.page_number} failed after {result.attempts} attempts: {result.reason}")
        self.result = result


@dataclass
class CollectionResult:
    patients: List[Patient] = field(default_factory=list)
    pages_fetched: int = 0
    failed_page: Optional[int] = None
    reason: Optional[str] = None

    @property
    def complete(self) -> bool:
        return self.failed_page is None


class PatientCollector:
    """Fetch pages one at a time, following ``hasNext``."""

    def __init__(self, client: PatientsAPIClient) -> None:
        self.client = client

    async def iter_pages(self, start_page: int = 1) -> AsyncIterator[PatientPage]:
        """Yield pages in ascending order.

        Raises ``CollectionIncompleteError`` when a page exhausts its retries.
        """

        page_number = start_page
        while True:
            result = await self.client.fetch_page(page_number)
            if not result.ok:
                raise CollectionIncompleteError(result)
            yield result.page
            if not result.page.pagination.hasNext:
                return
            await self.client.sleep(self.client.cfg.paging_delay_s)
            page_number += 1

    async def collect(self, start_page: int = 1) -> CollectionResult:
        """Concatenate every page's patients, keeping what was read on failure."""

        collected = CollectionResult()
        try:
            async for page in self.iter_pages(start_page):
                collected.patients.extend(page.data)
                collected.pages_fetched += 1
                logger.debug(
                    "Page %s/%s: %s patients (running total %s)",
                    page.pagination.page,
                    page.pagination.totalPages,
                    len(page.data),
                    len(collected.patients),
                )
        except CollectionIncompleteError as exc:
            collected.failed_page = exc.result.page_number
            collected.reason = exc.result.reason
            logger.warning("Stopped collecting at page %s: %s", collected.failed_page, collected.reason)
        return collected
