"""Shared fixtures for API tests."""

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from cyclekit.main import create_app

REFERENCE_RECORD = {
    "anchor_date": "2024-01-01",
    "cycle_length_days": 28,
    "period_duration_days": 5,
}


@pytest.fixture
def client() -> Iterator[TestClient]:
    with TestClient(create_app()) as test_client:
        yield test_client
