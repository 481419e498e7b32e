from __future__ import annotations

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from paynowqr.api import app
from paynowqr.config import settings
from paynowqr.models import PaymentIntent


@pytest.fixture
def mobile_intent() -> PaymentIntent:
    return PaymentIntent.for_mobile("86854221", Decimal("1.00"), "test")


@pytest.fixture
def uen_intent() -> PaymentIntent:
    return PaymentIntent.for_uen("201912345Z", Decimal("12.90"), "TBL12-0001")


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"X-API-Key": settings.api_key}
