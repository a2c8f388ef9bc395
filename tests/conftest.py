"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

import pytest
from typing import Generator

from models.ineligible_item import IneligibleRule
from services import reference_data_service
from services.reference_data_service import ReferenceData


# ===================
# REFERENCE DATA
# ===================

INELIGIBLE_RULES = [
    IneligibleRule("INELIGIBLE_ITEM_ISO", "1234", "Processed"),
    IneligibleRule("INELIGIBLE_ITEM_ISO", "5678", None),
    IneligibleRule("INELIGIBLE_EXC_ISO", "9999", "!Chilled"),
    IneligibleRule("INELIGIBLE_EXC_ISO", "9999", "!Frozen"),
    IneligibleRule("INELIGIBLE_EXC_ISO", "4321", None),
    IneligibleRule("INELIGIBLE_EXC_ISO", "4321", "!Cooked"),
]


@pytest.fixture
def reference_data() -> Generator:
    """
    Install small, predictable reference data for the duration of a test.

    Usage:
        def test_something(reference_data):
            assert reference_data.is_valid_iso_code("GB")
    """
    data = ReferenceData.build(
        ["VALID_ISO", "INELIGIBLE_ITEM_ISO", "INELIGIBLE_EXC_ISO", "GB", "IE"],
        INELIGIBLE_RULES,
    )
    previous = reference_data_service._reference_data
    reference_data_service.set_reference_data(data)
    yield data
    reference_data_service.set_reference_data(previous)


# ===================
# DOCUMENTS
# ===================

@pytest.fixture
def iceland_csv_rows() -> list:
    """A valid ICELAND2 CSV table (header row plus two data rows)."""
    return [
        [
            "Consignor / Place o f Despatch",
            "CUPCC",
            "Product/Part Number",
            "Product/Part Number description",
            "Tariff Code EU",
            "Treatment Type",
            "Nature",
            "NIRMS",
            "Country of Origin Code",
            "Packages",
            "Net Weight/Package KG",
        ],
        [
            "RMS-GB-000040-001",
            "ICE",
            "12345",
            "  Prawn Ring  ",
            "0306179910",
            "FROZEN",
            "Seafood",
            "NIRMS",
            "GB",
            "10",
            "2.5",
        ],
        [
            "RMS-GB-000040-001",
            "ICE",
            "67890",
            "Chocolate Gateau",
            "1905906090",
            "FROZEN",
            "Dessert",
            "Non-NIRMS",
            "IE",
            "4",
            "1.2",
        ],
    ]


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client(reference_data):
    """
    Create FastAPI test client.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/health")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)
