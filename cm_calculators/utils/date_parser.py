"""Date and year parsing for CV periods and calculator shortcuts."""

import re
from datetime import date
from typing import List, Optional

MONTH_ABBR = r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)"
YEAR = r"(?:19|20)\d{2}"
MONTH_YEAR = rf"{MONTH_ABBR}[a-z]*\.?\s*{YEAR}"
OPEN_END = r"(?:Present|Current|Now)"

# "2019", "Jan 2019", "2015 - 2019", "March 2020 – Present"
DATE_RANGE_PATTERN = re.compile(
    rf"(?:{YEAR}|{MONTH_YEAR})(?:\s*[-–—]\s*(?:{OPEN_END}|{YEAR}|{MONTH_YEAR}))?",
    re.IGNORECASE,
)

# Years only, as printed for study periods
YEAR_RANGE_PATTERN = re.compile(
    rf"{YEAR}(?:\s*[-–—]\s*(?:{OPEN_END}|{YEAR}))?",
    re.IGNORECASE,
)

_FOUR_DIGITS = re.compile(r"\d{4}")


def find_date_range(text: str) -> Optional[str]:
    """Return the first date or date range in text, verbatim, or None."""
    if not text:
        return None
    m = DATE_RANGE_PATTERN.search(text)
    return m.group(0) if m else None


def extract_years(text: str) -> List[int]:
    """All 4-digit numbers in text, in order."""
    if not text:
        return []
    return [int(y) for y in _FOUR_DIGITS.findall(text)]


def first_year(text: str) -> int:
    """First 4-digit number in text, or 0 when there is none."""
    years = extract_years(text)
    return years[0] if years else 0


def parse_iso_date(value: str) -> Optional[date]:
    """Parse YYYY-MM-DD, returning None for anything else."""
    try:
        return date.fromisoformat(value.strip()[:10])
    except (AttributeError, ValueError):
        return None
