"""HTTP client for the patients API: paginated reads and assessment submission."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

import httpx

from ..core.config import Settings
from ..schemas.assessment import AlertList
from ..schemas.patients import PatientPage
from .parser import RETRYABLE_PARSE_ERRORS, ResponseParser, parser as default_parser

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class PageResult:
    """Outcome of fetching one page, including every retry."""

    page_number: int
    attempts: int
    page: Optional[PatientPage] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.page is not None


class PatientsAPIClient:
    """Talk to the patients API with a shared ``httpx.AsyncClient``."""

    def __init__(
        self,
        cfg: Settings,
        *,
        http: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        parser: ResponseParser = default_parser,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.cfg = cfg
        self.parser = parser
        self.sleep = sleep
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            timeout=cfg.request_timeout_s,
            follow_redirects=True,
            transport=transport,
        )

    async def __aenter__(self) -> "PatientsAPIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    @property
    def headers(self) -> dict[str, str]:
        return {API_KEY_HEADER: self.cfg.api_key}

    async def fetch_page(self, page: int, limit: Optional[int] = None) -> PageResult:
        """Fetch and validate one page, retrying HTTP and schema failures.

        Transport errors (no HTTP status at all) are not retried and
        propagate to the caller. Running out of retries is reported through
        a failed ``PageResult`` instead of an exception.
        """

        limit = limit or self.cfg.paging_limit
        url = httpx.URL(f"{self.cfg.base_url}/patients", params={"page": page, "limit": limit})
        retry_max = self.cfg.retry_max
        reason = "no attempt made"
        for attempt in range(retry_max + 1):
            if attempt:
                logger.debug("Retry attempt %s / %s", attempt, retry_max)
            logger.debug("Fetching url %s", url)
            try:
                response = await self.http.get(url, headers=self.headers)
                logger.debug("Response: %s", response.text)
                response.raise_for_status()
                parsed = self.parser.parse(response.text)
                return PageResult(page_number=page, attempts=attempt + 1, page=parsed)
            except httpx.HTTPStatusError as exc:
                reason = f"HTTP {exc.response.status_code} from {url}"
                logger.debug("%s", exc)
            except RETRYABLE_PARSE_ERRORS as exc:
                reason = f"Invalid API response: {exc}"
                logger.debug("%s", reason)
            if attempt < retry_max:
                logger.debug("Retrying in %s ms", self.cfg.retry_delay_ms)
                await self.sleep(self.cfg.retry_delay_s)
        logger.warning("Giving up on page %s after %s attempts: %s", page, retry_max + 1, reason)
        return PageResult(page_number=page, attempts=retry_max + 1, reason=reason)

    async def submit_assessment(self, alerts: AlertList) -> Any:
        """POST the alert buckets once and return the decoded response body."""

        url = f"{self.cfg.base_url}/submit-assessment"
        logger.debug("Submitting assessment to %s: %s", url, alerts.model_dump_json())
        response = await self.http.post(url, json=alerts.model_dump(), headers=self.headers)
        logger.debug("Response: %s", response.text)
        response.raise_for_status()
        return response.json()
