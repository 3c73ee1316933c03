"""Work-experience records from the lines of experience sections."""

import re
from typing import List, Optional

from cm_calculators.schemas.cv_data import (
    COMPANY_NOT_SPECIFIED,
    NO_DESCRIPTION,
    PERIOD_NOT_SPECIFIED,
    ROLE_NOT_SPECIFIED,
    WorkExperience,
)
from cm_calculators.utils.date_parser import find_date_range
from cm_calculators.utils.logger import get_logger

logger = get_logger(__name__)

COMPANY_PATTERN = re.compile(
    r"^[A-Z\s&.]+$|(?:PTY|LTD|INC|LLC|CORPORATION|CONSULTING|TECHNOLOGIES|SOLUTIONS)\b",
    re.IGNORECASE,
)
BULLET_PREFIX = re.compile(r"^[•-]\s*")
SHORT_LINE = 100


def is_company_line(line: str) -> bool:
    return bool(COMPANY_PATTERN.search(line))


def _is_bullet(line: str) -> bool:
    return line.startswith("•") or line.startswith("-")


class _Draft:
    """Mutable record while a role is being read."""

    def __init__(self, period: str = "", title: str = "", company: str = ""):
        self.period = period
        self.title = title
        self.company = company
        self.description: List[str] = []

    def has_content(self) -> bool:
        return bool(self.period or self.title or self.company or self.description)

    def finish(self) -> WorkExperience:
        company = self.company
        if not company and " at " in self.title:
            company = self.title.split(" at ")[1].strip()
        return WorkExperience(
            period=self.period or PERIOD_NOT_SPECIFIED,
            title=self.title or ROLE_NOT_SPECIFIED,
            company=company or COMPANY_NOT_SPECIFIED,
            description=self.description or [NO_DESCRIPTION],
        )


def _start_record(line: str) -> _Draft:
    period = find_date_range(line)
    company_line = is_company_line(line)
    if period:
        title = line.replace(period, "", 1).strip()
    else:
        period = ""
        title = "" if company_line else line
    return _Draft(period=period, title=title, company=line if company_line else "")


def extract_work_experience(lines: List[str]) -> List[WorkExperience]:
    """
    Read roles line by line. Dates, company-shaped lines and short non-bullet
    lines open a new role; bullets and long lines become its description.
    """
    records: List[WorkExperience] = []
    current: Optional[_Draft] = None
    try:
        for line in lines:
            is_trigger = (
                find_date_range(line) is not None
                or is_company_line(line)
                or (len(line) < SHORT_LINE and not _is_bullet(line))
            )
            if is_trigger:
                if current is not None and current.has_content():
                    records.append(current.finish())
                current = _start_record(line)
                continue
            if current is not None:
                # Only bullets and long lines reach here
                current.description.append(BULLET_PREFIX.sub("", line).strip())
        if current is not None and current.has_content():
            records.append(current.finish())
    except Exception as e:
        logger.exception("Work experience extraction failed: %s", e)
    logger.info("Extracted %s work experience entries", len(records))
    return records
