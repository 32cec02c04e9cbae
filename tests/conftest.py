from __future__ import annotations

import pytest

from nrega_dash.core.errors import DataFetchError
from nrega_dash.core.models import GeoLocation, PerformanceRecord
from nrega_dash.i18n import default_catalog


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def en(catalog):
    return catalog.resolver("en")


@pytest.fixture
def hi(catalog):
    return catalog.resolver("hi")


SAMPLE_PAYLOAD = {
    "latestMonth": {
        "monthLabel": "April",
        "finYear": "2024-2025",
        "households": 1234567,
        "avgDaysPerHH": 42.5,
        "womenPersondays": 98765,
        "differentlyAbledWorked": 321,
        "avgWagePerDay": 245,
        "expenditure": 150000000,
        "paymentWithin15DaysPct": 97.25,
        "worksCompleted": 30,
        "worksOngoing": 10,
        "worksTotal": 40,
    },
    "timeseriesDays": [
        {"label": "Jan", "value": 10},
        {"label": "Feb", "value": 40},
        {"label": "Mar", "value": 20},
    ],
}


class FakeService:
    """In-memory stand-in for the data service."""

    def __init__(
        self,
        districts=("Patna", "Gaya", "Nalanda"),
        payload=None,
        location=None,
        fail=(),
    ):
        self.districts = list(districts)
        self.payload = payload if payload is not None else SAMPLE_PAYLOAD
        self.location = location or GeoLocation(state="Bihar", district="Patna", supported=True)
        self.fail = set(fail)
        self.calls: list[tuple] = []

    def list_districts(self, state_name):
        self.calls.append(("list_districts", state_name))
        if "districts" in self.fail:
            raise DataFetchError("districts down")
        return list(self.districts)

    def get_performance(self, district_name, month_count=12):
        self.calls.append(("get_performance", district_name, month_count))
        if "performance" in self.fail:
            raise DataFetchError("performance down")
        return PerformanceRecord.from_payload(district_name, self.payload)

    def reverse_geocode(self, lat, lon):
        self.calls.append(("reverse_geocode", lat, lon))
        if "locate" in self.fail:
            raise DataFetchError("locate down")
        return self.location


@pytest.fixture
def service():
    return FakeService()


@pytest.fixture
def make_service():
    return FakeService


@pytest.fixture
def sample_payload():
    return SAMPLE_PAYLOAD
