from datetime import date

import pytest
from fastapi.testclient import TestClient

from rental_availability.main import app
from rental_availability.models import BlockedInterval, DayPrice, PricingQuote
from rental_availability.routes import get_interval_source, get_pricing_oracle, get_today

SAMPLE_ICAL = """BEGIN:VCALENDAR
PRODID;X-RICAL-TZSOURCE=TZINFO:-//Airbnb Inc//Hosting Calendar 1.0//EN
CALSCALE:GREGORIAN
VERSION:2.0
BEGIN:VEVENT
DTEND;VALUE=DATE:20240604
DTSTART;VALUE=DATE:20240602
UID:1418fb94e984-abc@airbnb.com
DESCRIPTION:Reservation URL: https://www.airbnb.com/hosting/reservations/details/HM123
SUMMARY:Reserved
END:VEVENT
BEGIN:VEVENT
DTEND;VALUE=DATE:20240620
DTSTART;VALUE=DATE:20240615
UID:7f3f1d2e0a1b-def@airbnb.com
SUMMARY:Airbnb (Not available)
END:VEVENT
END:VCALENDAR
"""


@pytest.fixture
def june_reservation():
    return BlockedInterval(start=date(2024, 6, 2), end=date(2024, 6, 4), kind="reserved")


@pytest.fixture
def sample_pricing():
    return PricingQuote(
        per_day_prices=[
            DayPrice(date="2024-06-01", price=100),
            DayPrice(date="2024-06-02", price=120),
            DayPrice(date="2024-06-03", price=0),
        ],
        total=220,
        min_nights=2,
    )


@pytest.fixture
def client():
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def override_sources():
    def _override(blocked, pricing=None, today=date(2024, 5, 1)):
        app.dependency_overrides[get_interval_source] = lambda: (lambda: list(blocked))
        app.dependency_overrides[get_pricing_oracle] = lambda: (lambda candidate: pricing)
        app.dependency_overrides[get_today] = lambda: today
    yield _override
    app.dependency_overrides.clear()


@pytest.fixture
def sample_ical():
    return SAMPLE_ICAL
