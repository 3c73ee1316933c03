"""Australian working-days calculator and its date shortcuts."""

from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from cm_calculators.schemas.calculators import (
    CustomHoliday,
    DayBreakdown,
    PublicHoliday,
    WorkingDaysInputs,
    WorkingDaysResult,
)
from cm_calculators.utils.logger import get_logger

logger = get_logger(__name__)

CHRISTMAS_SHUTDOWN = "Christmas Mandatory Shutdown"
REVERSED_RANGE_MESSAGE = "End date must be after start date"


def is_weekday(day: date) -> bool:
    return day.weekday() < 5


def next_working_day(day: date) -> date:
    """day itself if it is a weekday, else the following Monday."""
    while not is_weekday(day):
        day += timedelta(days=1)
    return day


def default_custom_holidays(year: int) -> List[CustomHoliday]:
    """Christmas shutdown from Dec 25 to Jan 7 of the following year."""
    return [CustomHoliday(name=CHRISTMAS_SHUTDOWN, start=date(year, 12, 25), end=date(year + 1, 1, 7))]


def years_in_range(start: date, end: date) -> List[int]:
    if end < start:
        return [start.year]
    return list(range(start.year, end.year + 1))


def _custom_holiday_name(day: date, custom_holidays: Iterable[CustomHoliday]) -> Optional[str]:
    for holiday in custom_holidays:
        if holiday.start <= day <= holiday.end:
            return holiday.name
    return None


def count_working_days(inputs: WorkingDaysInputs, public_holidays: List[PublicHoliday]) -> WorkingDaysResult:
    """
    Classify every day in the range as weekend, public holiday, custom holiday
    or working day, in that order of precedence.
    """
    if inputs.end < inputs.start:
        return WorkingDaysResult(error=REVERSED_RANGE_MESSAGE)

    holiday_names: Dict[date, str] = {h.day: h.name for h in public_holidays}
    result = WorkingDaysResult()
    current = inputs.start if inputs.include_start else inputs.start + timedelta(days=1)
    while current <= inputs.end:
        if current == inputs.end and not inputs.include_end:
            break
        result.total_days += 1
        custom_name = _custom_holiday_name(current, inputs.custom_holidays)
        if not is_weekday(current):
            result.weekend_days += 1
        elif current in holiday_names:
            result.public_holidays += 1
            result.holidays.append(DayBreakdown(day=current, kind="public_holiday", name=holiday_names[current]))
        elif custom_name:
            result.custom_holidays += 1
            result.holidays.append(DayBreakdown(day=current, kind="custom_holiday", name=custom_name))
        else:
            result.working_days += 1
        current += timedelta(days=1)

    result.work_hours = result.working_days * inputs.hours_per_day
    logger.info(
        "Working days %s..%s (%s): %s working of %s",
        inputs.start, inputs.end, inputs.state, result.working_days, result.total_days,
    )
    return result


# ----- Date shortcuts -----


def start_today(today: date) -> date:
    return next_working_day(today)


def start_next_month(today: date) -> date:
    """First weekday of next month."""
    if today.month == 12:
        first = date(today.year + 1, 1, 1)
    else:
        first = date(today.year, today.month + 1, 1)
    return next_working_day(first)


def start_plus_days(today: date, days: int) -> date:
    """today + days, moved forward to a weekday (plus 7 / plus 14)."""
    return next_working_day(today + timedelta(days=days))


def add_working_days(start: date, working_days: int = 30) -> date:
    """Date of the Nth weekday after start, counting from the next day."""
    current = start
    counted = 0
    while counted < working_days:
        current += timedelta(days=1)
        if is_weekday(current):
            counted += 1
    return current


def end_mid_year(today: date) -> date:
    """June 30 this year, or next year's once it has passed."""
    june30 = date(today.year, 6, 30)
    return june30 if today <= june30 else date(today.year + 1, 6, 30)


def end_year_end(today: date) -> date:
    return date(today.year, 12, 31)


START_SHORTCUTS = {
    "today": start_today,
    "next_month": start_next_month,
    "plus_7": lambda today: start_plus_days(today, 7),
    "plus_14": lambda today: start_plus_days(today, 14),
}

END_SHORTCUTS = {
    "plus_30": lambda start, today: add_working_days(start, 30),
    "plus_120": lambda start, today: add_working_days(start, 120),
    "plus_180": lambda start, today: add_working_days(start, 180),
    "mid_year": lambda start, today: end_mid_year(today),
    "year_end": lambda start, today: end_year_end(today),
}


def apply_start_shortcut(name: str, today: date) -> date:
    return START_SHORTCUTS.get(name, start_today)(today)


def apply_end_shortcut(name: str, start: date, today: date) -> date:
    return END_SHORTCUTS.get(name, END_SHORTCUTS["plus_30"])(start, today)


def calculate_working_days(
    inputs: WorkingDaysInputs, public_holidays: Optional[List[PublicHoliday]] = None
) -> WorkingDaysResult:
    """Count working days, loading the state's public holidays when none are given."""
    fetch_error = None
    if public_holidays is None:
        from cm_calculators.services.holiday_service import get_public_holidays

        public_holidays, fetch_error = get_public_holidays(years_in_range(inputs.start, inputs.end), inputs.state)
    result = count_working_days(inputs, public_holidays)
    if fetch_error and not result.error:
        result.error = fetch_error
    return result
