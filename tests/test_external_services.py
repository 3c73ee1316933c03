"""Tests for the holiday and exchange-rate HTTP clients using httpx.MockTransport."""

import asyncio
from datetime import date

import httpx

from cm_calculators.services.exchange_rates import fetch_exchange_rate
from cm_calculators.services.holiday_service import (
    FALLBACK_MESSAGE,
    applies_to_state,
    fetch_public_holidays,
)
from cm_calculators.schemas.calculators import PublicHoliday

NAGER_2025 = [
    {"date": "2025-01-01", "localName": "New Year's Day", "name": "New Year's Day", "counties": None},
    {"date": "2025-03-03", "localName": "Labour Day", "name": "Labour Day", "counties": ["AU-WA"]},
    {"date": "2025-03-10", "localName": "Labour Day", "name": "Labour Day", "counties": ["AU-VIC", "AU-TAS"]},
]
NAGER_2026 = [
    {"date": "2026-01-01", "localName": "New Year's Day", "name": "New Year's Day", "counties": None},
]


def _holiday_handler(request: httpx.Request) -> httpx.Response:
    year = request.url.path.rstrip("/").split("/")[-2]
    payload = {"2025": NAGER_2025, "2026": NAGER_2026}.get(year)
    if payload is None:
        return httpx.Response(404)
    return httpx.Response(200, json=payload)


def test_holidays_filtered_to_state():
    holidays, error = asyncio.run(
        fetch_public_holidays([2025], "VIC", transport=httpx.MockTransport(_holiday_handler))
    )
    assert error is None
    assert [(h.day, h.name) for h in holidays] == [
        (date(2025, 1, 1), "New Year's Day"),
        (date(2025, 3, 10), "Labour Day"),
    ]


def test_holidays_for_every_year_in_range():
    holidays, error = asyncio.run(
        fetch_public_holidays([2026, 2025, 2025], "NSW", transport=httpx.MockTransport(_holiday_handler))
    )
    assert error is None
    assert [h.day for h in holidays] == [date(2025, 1, 1), date(2026, 1, 1)]


def test_holiday_api_failure_uses_fallback():
    transport = httpx.MockTransport(lambda request: httpx.Response(500))
    holidays, error = asyncio.run(fetch_public_holidays([2025], "NSW", transport=transport))
    assert error == FALLBACK_MESSAGE
    assert date(2025, 12, 25) in {h.day for h in holidays}


def test_holiday_with_unreadable_date_is_skipped():
    payload = NAGER_2026 + [{"date": "26/01/2026", "localName": "Australia Day", "counties": None}]
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=payload))
    holidays, error = asyncio.run(fetch_public_holidays([2026], "NSW", transport=transport))
    assert error is None
    assert [h.name for h in holidays] == ["New Year's Day"]


def test_applies_to_state():
    assert applies_to_state(PublicHoliday(day=date(2025, 1, 1), name="x"), "QLD")
    assert applies_to_state(PublicHoliday(day=date(2025, 1, 1), name="x", counties=["AU-QLD"]), "qld")
    assert applies_to_state(PublicHoliday(day=date(2025, 1, 1), name="x", counties=["National"]), "SA")
    assert not applies_to_state(PublicHoliday(day=date(2025, 1, 1), name="x", counties=["AU-WA"]), "SA")


def test_exchange_rate_is_inverted_quote():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["from"] == "AUD"
        assert request.url.params["to"] == "LKR"
        return httpx.Response(200, json={"amount": 1.0, "base": "AUD", "rates": {"LKR": 200.0}})

    rate = asyncio.run(fetch_exchange_rate("lkr", transport=httpx.MockTransport(handler)))
    assert rate == 0.005


def test_exchange_rate_falls_back_on_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(500))
    assert asyncio.run(fetch_exchange_rate("LKR", transport=transport)) == 0.0054
    assert asyncio.run(fetch_exchange_rate("XYZ", transport=transport)) is None


def test_exchange_rate_falls_back_on_missing_currency():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"rates": {}}))
    assert asyncio.run(fetch_exchange_rate("PHP", transport=transport)) == 0.028
