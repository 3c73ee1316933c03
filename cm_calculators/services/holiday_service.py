"""Australian public holidays from the Nager.Date API, with a built-in fallback list."""

import asyncio
from typing import Iterable, List, Optional, Tuple

import httpx

from cm_calculators.config import FALLBACK_PUBLIC_HOLIDAYS, HOLIDAY_API_URL, HTTP_TIMEOUT_SECONDS
from cm_calculators.schemas.calculators import PublicHoliday
from cm_calculators.utils.date_parser import parse_iso_date
from cm_calculators.utils.logger import get_logger

logger = get_logger(__name__)

FALLBACK_MESSAGE = "Failed to fetch public holidays. Using built-in holiday data instead."


def applies_to_state(holiday: PublicHoliday, state: str) -> bool:
    """National holidays, or ones whose counties list the state ("VIC" or "AU-VIC")."""
    if not holiday.counties:
        return True
    state = state.upper()
    return any(c in ("National", state, f"AU-{state}") for c in holiday.counties)


def fallback_holidays() -> List[PublicHoliday]:
    return [PublicHoliday(day=parse_iso_date(d), name=name) for d, name in FALLBACK_PUBLIC_HOLIDAYS]


async def _fetch_year(client: httpx.AsyncClient, year: int) -> List[PublicHoliday]:
    response = await client.get(HOLIDAY_API_URL.format(year=year))
    response.raise_for_status()
    holidays = []
    for item in response.json():
        day = parse_iso_date(item["date"])
        if day is None:
            logger.debug("Skipping holiday with unreadable date %r", item["date"])
            continue
        holidays.append(
            PublicHoliday(day=day, name=item.get("localName") or item.get("name", ""), counties=item.get("counties"))
        )
    return holidays


async def fetch_public_holidays(
    years: Iterable[int],
    state: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Tuple[List[PublicHoliday], Optional[str]]:
    """
    Holidays for every year, fetched concurrently, filtered to the state.
    Returns (holidays, error); on any failure the fallback list is returned with an error message.
    """
    wanted = sorted(set(years))
    try:
        async with httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS, transport=transport) as client:
            per_year = await asyncio.gather(*[_fetch_year(client, y) for y in wanted])
    except (httpx.HTTPError, KeyError, ValueError, TypeError) as e:
        logger.warning("Public holiday fetch failed for %s: %s", wanted, e)
        holidays = [h for h in fallback_holidays() if applies_to_state(h, state)]
        return holidays, FALLBACK_MESSAGE
    holidays = [h for year_list in per_year for h in year_list if applies_to_state(h, state)]
    logger.info("Loaded %s public holidays for %s in %s", len(holidays), state, wanted)
    return holidays, None


def get_public_holidays(years: Iterable[int], state: str) -> Tuple[List[PublicHoliday], Optional[str]]:
    """Sync wrapper for Streamlit callers."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(fetch_public_holidays(years, state))
    finally:
        loop.close()
