"""Tests for working-day counting and date shortcuts."""

from datetime import date

from cm_calculators.calculators.working_days import (
    CHRISTMAS_SHUTDOWN,
    REVERSED_RANGE_MESSAGE,
    add_working_days,
    apply_end_shortcut,
    apply_start_shortcut,
    calculate_working_days,
    count_working_days,
    default_custom_holidays,
    end_mid_year,
    end_year_end,
    start_next_month,
    start_today,
    years_in_range,
)
from cm_calculators.schemas.calculators import PublicHoliday, WorkingDaysInputs


def test_two_plain_weeks():
    result = count_working_days(WorkingDaysInputs(start=date(2025, 1, 6), end=date(2025, 1, 17)), [])
    assert result.total_days == 12
    assert result.working_days == 10
    assert result.weekend_days == 2
    assert result.work_hours == 80


def test_public_holiday_is_not_a_working_day():
    holidays = [PublicHoliday(day=date(2025, 1, 27), name="Australia Day")]
    result = count_working_days(WorkingDaysInputs(start=date(2025, 1, 20), end=date(2025, 1, 31)), holidays)
    assert result.working_days == 9
    assert result.public_holidays == 1
    assert result.holidays[0].name == "Australia Day"


def test_christmas_shutdown_and_precedence():
    inputs = WorkingDaysInputs(
        start=date(2025, 12, 22),
        end=date(2026, 1, 9),
        custom_holidays=default_custom_holidays(2025),
    )
    result = count_working_days(inputs, [PublicHoliday(day=date(2025, 12, 25), name="Christmas Day")])
    assert inputs.custom_holidays[0].name == CHRISTMAS_SHUTDOWN
    assert result.total_days == 19
    assert result.weekend_days == 4
    assert result.public_holidays == 1
    assert result.custom_holidays == 9
    assert result.working_days == 5
    assert result.total_days == (
        result.working_days + result.weekend_days + result.public_holidays + result.custom_holidays
    )


def test_excluding_range_ends():
    inputs = WorkingDaysInputs(start=date(2025, 1, 6), end=date(2025, 1, 10), include_start=False)
    assert count_working_days(inputs, []).total_days == 4
    inputs = WorkingDaysInputs(start=date(2025, 1, 6), end=date(2025, 1, 10), include_start=False, include_end=False)
    assert count_working_days(inputs, []).working_days == 3


def test_reversed_range_is_an_error():
    result = count_working_days(WorkingDaysInputs(start=date(2025, 2, 1), end=date(2025, 1, 1)), [])
    assert result.error == REVERSED_RANGE_MESSAGE
    assert result.total_days == 0


def test_custom_hours_per_day():
    inputs = WorkingDaysInputs(start=date(2025, 1, 6), end=date(2025, 1, 10), hours_per_day=7.5)
    assert count_working_days(inputs, []).work_hours == 37.5


def test_years_in_range():
    assert years_in_range(date(2024, 12, 1), date(2026, 1, 1)) == [2024, 2025, 2026]


def test_start_shortcuts():
    assert start_today(date(2025, 1, 4)) == date(2025, 1, 6)
    assert start_next_month(date(2025, 5, 15)) == date(2025, 6, 2)
    assert start_next_month(date(2025, 12, 10)) == date(2026, 1, 1)
    assert apply_start_shortcut("plus_7", date(2025, 1, 1)) == date(2025, 1, 8)
    assert apply_start_shortcut("plus_14", date(2025, 1, 4)) == date(2025, 1, 20)


def test_end_shortcuts():
    assert add_working_days(date(2025, 1, 3), 1) == date(2025, 1, 6)
    assert add_working_days(date(2025, 1, 6), 30) == date(2025, 2, 17)
    assert apply_end_shortcut("plus_30", date(2025, 1, 6), date(2025, 1, 1)) == date(2025, 2, 17)
    assert end_mid_year(date(2025, 6, 30)) == date(2025, 6, 30)
    assert end_mid_year(date(2025, 7, 1)) == date(2026, 6, 30)
    assert end_year_end(date(2025, 3, 3)) == date(2025, 12, 31)


def test_calculate_uses_given_holidays_without_fetching(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("should not fetch")

    monkeypatch.setattr("cm_calculators.services.holiday_service.get_public_holidays", fail)
    result = calculate_working_days(WorkingDaysInputs(start=date(2025, 1, 6), end=date(2025, 1, 10)), [])
    assert result.working_days == 5
    assert result.error is None


def test_calculate_reports_fallback_message(monkeypatch):
    calls = []

    def fake_get(years, state):
        calls.append((years, state))
        return [PublicHoliday(day=date(2025, 1, 1), name="New Year's Day")], "using fallback"

    monkeypatch.setattr("cm_calculators.services.holiday_service.get_public_holidays", fake_get)
    result = calculate_working_days(WorkingDaysInputs(start=date(2025, 1, 1), end=date(2025, 1, 3), state="VIC"))
    assert calls == [([2025], "VIC")]
    assert result.working_days == 2
    assert result.error == "using fallback"
