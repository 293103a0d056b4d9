"""Shared test fixtures for gridmerge."""

import pytest


@pytest.fixture
def visit_sources() -> dict:
    """Service and support rows for the same doctors, keyed by source."""
    return {
        "service": [
            {
                "drCode": "00034943",
                "drName": "TARUN PRAKESH PARASHAR",
                "hq": "Jaipur",
                "salesTeam": "Elbrit Rajasthan",
                "serviceAmount": 20000,
                "date": "2025-04-01",
            },
            {
                "drCode": "00034944",
                "drName": "JOHN DOE",
                "hq": "Mumbai",
                "salesTeam": "Elbrit Maharashtra",
                "serviceAmount": 15000,
                "date": "2025-04-01",
            },
        ],
        "support": [
            {
                "drCode": "00034943",
                "drName": None,
                "salesTeam": "Elbrit Rajasthan",
                "supportValue": 3314,
                "date": "2025-04-01",
            },
            {
                "drCode": "00059157",
                "drName": "JANE SMITH",
                "salesTeam": "Elbrit Delhi",
                "supportValue": 4500,
                "date": "2025-03-01",
            },
        ],
    }


@pytest.fixture
def order_rows() -> list[dict]:
    return [{"orderId": 1, "total": 9.5, "createdAt": "2024-01-01T00:00:00Z"}]
