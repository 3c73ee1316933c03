"""Local currency -> AUD exchange rates from the Frankfurter API, with fixed fallbacks."""

import asyncio
from typing import Optional

import httpx

from cm_calculators.config import EXCHANGE_RATE_API_URL, FALLBACK_EXCHANGE_RATES, HTTP_TIMEOUT_SECONDS
from cm_calculators.utils.logger import get_logger

logger = get_logger(__name__)


def fallback_rate(currency: str) -> Optional[float]:
    return FALLBACK_EXCHANGE_RATES.get(currency.upper())


async def fetch_exchange_rate(
    currency: str, transport: Optional[httpx.AsyncBaseTransport] = None
) -> Optional[float]:
    """
    Value of one unit of currency in AUD.
    The API quotes AUD -> currency, so the rate is inverted and rounded to 5 places.
    Falls back to the built-in table on any failure.
    """
    code = currency.upper()
    try:
        async with httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS, transport=transport) as client:
            response = await client.get(EXCHANGE_RATE_API_URL, params={"from": "AUD", "to": code})
            response.raise_for_status()
            quoted = response.json()["rates"][code]
            rate = round(1 / float(quoted), 5)
            logger.info("Exchange rate %s -> AUD: %s", code, rate)
            return rate
    except httpx.HTTPStatusError as e:
        logger.warning("Exchange rate API returned %s for %s", e.response.status_code, code)
    except (httpx.HTTPError, KeyError, ValueError, TypeError, ZeroDivisionError) as e:
        logger.warning("Exchange rate lookup failed for %s: %s", code, e)
    rate = fallback_rate(code)
    logger.info("Using fallback exchange rate for %s: %s", code, rate)
    return rate


def get_exchange_rate(currency: str) -> Optional[float]:
    """Sync wrapper for Streamlit callers."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(fetch_exchange_rate(currency))
    finally:
        loop.close()
