from __future__ import annotations

import math
from typing import Callable, Dict, List

import httpx
import pytest

from riskwatch.pipeline.client.patients_api import PatientsAPIClient
from riskwatch.pipeline.core.config import Settings

API_URL = "https://api.test"
API_KEY = "test-key-123"


def make_settings(**overrides) -> Settings:
    values = {
        "api_key": API_KEY,
        "api_url": API_URL,
        "retry_delay_ms": 0,
        "paging_delay_ms": 0,
        "retry_max": 3,
        "paging_limit": 2,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def patient(patient_id: str, **fields) -> Dict[str, object]:
    record = {
        "patient_id": patient_id,
        "name": f"Patient {patient_id}",
        "age": 30,
        "gender": "F",
        "blood_pressure": "110/70",
        "temperature": 98.6,
        "visit_date": "2024-01-15",
        "diagnosis": "Routine checkup",
        "medications": "None",
    }
    record.update(fields)
    return record


def page_payload(patients: List[Dict[str, object]], page: int, limit: int, total: int) -> Dict[str, object]:
    total_pages = max(1, math.ceil(total / limit))
    return {
        "data": patients,
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "totalPages": total_pages,
            "hasNext": page < total_pages,
            "hasPrevious": page > 1,
        },
        "metadata": {"timestamp": "2024-01-15T10:00:00Z", "version": "v1.0", "requestId": f"req-{page}"},
    }


def paged_handler(records: List[Dict[str, object]], limit: int) -> Callable[[httpx.Request], httpx.Response]:
    """Serve ``records`` through ``/patients`` the way the real API pages them."""

    def handler(request: httpx.Request) -> httpx.Response:
        page = int(request.url.params["page"])
        start = (page - 1) * limit
        body = page_payload(records[start : start + limit], page, limit, len(records))
        return httpx.Response(200, json=body)

    return handler


class SleepRecorder:
    def __init__(self) -> None:
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def make_client(cfg: Settings, handler, sleep=None) -> PatientsAPIClient:
    return PatientsAPIClient(cfg, transport=httpx.MockTransport(handler), sleep=sleep or SleepRecorder())


@pytest.fixture
def settings() -> Settings:
    return make_settings()
