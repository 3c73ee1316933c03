"""Services: CV conversion collaborators and external data lookups."""

from cm_calculators.services.cv_converter import CVConverterService
from cm_calculators.services.exchange_rates import fetch_exchange_rate, get_exchange_rate
from cm_calculators.services.holiday_service import fetch_public_holidays, get_public_holidays

__all__ = [
    "CVConverterService",
    "fetch_exchange_rate",
    "get_exchange_rate",
    "fetch_public_holidays",
    "get_public_holidays",
]
