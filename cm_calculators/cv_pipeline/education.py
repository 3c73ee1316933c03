"""Education records from the lines of education sections."""

import re
from typing import List, Optional

from cm_calculators.schemas.cv_data import (
    DEGREE_NOT_SPECIFIED,
    INSTITUTION_NOT_SPECIFIED,
    PERIOD_NOT_SPECIFIED,
    Education,
)
from cm_calculators.utils.date_parser import YEAR_RANGE_PATTERN, first_year
from cm_calculators.utils.helpers import title_case_words
from cm_calculators.utils.logger import get_logger

logger = get_logger(__name__)

_DEGREE_WORDS = (
    r"bachelor|master|phd|doctorate|diploma|certificate|degree|bsc|msc|mba|"
    r"btech|mtech|be|me|bcom|mcom|ba|ma|bs|ms"
)
_INSTITUTION_WORDS = r"university|college|institute|school|academy|polytechnic"

# A keyword, an optional joining word, then the words that follow it up to
# punctuation, a digit or the start of the other kind of phrase.
DEGREE_PATTERN = re.compile(
    rf"\b(?:{_DEGREE_WORDS})\b(?:\s+(?:of|in|with))?(?:\s+(?!(?:{_INSTITUTION_WORDS})\b)[a-z&]+)+",
    re.IGNORECASE,
)
INSTITUTION_PATTERN = re.compile(
    rf"\b(?:{_INSTITUTION_WORDS})\b(?:\s+(?:of|for|in))?(?:\s+(?!(?:{_DEGREE_WORDS})\b)[a-z&]+)+",
    re.IGNORECASE,
)
GRADE_PATTERN = re.compile(
    r"\b(?:first class|second class|distinction|merit|honors|gpa:?\s*\d+(?:\.\d+)?|pass)\b"
    r"|(?-i:\b[A-D][+-]?(?!\w))",
    re.IGNORECASE,
)


def _match_text(pattern: re.Pattern, line: str) -> Optional[str]:
    m = pattern.search(line)
    return m.group(0) if m else None


class _Draft:
    def __init__(self):
        self.degree = ""
        self.institution = ""
        self.period = ""
        self.grade = ""

    def has_content(self) -> bool:
        return bool(self.degree or self.institution or self.period)

    def finish(self) -> Education:
        return Education(
            degree=self.degree or DEGREE_NOT_SPECIFIED,
            institution=self.institution or INSTITUTION_NOT_SPECIFIED,
            period=self.period or PERIOD_NOT_SPECIFIED,
            grade=self.grade,
        )


def _start_record(line: str, degree: Optional[str], institution: Optional[str],
                  year: Optional[str], grade: Optional[str]) -> _Draft:
    draft = _Draft()
    if degree:
        draft.degree = title_case_words(degree)
    if institution:
        draft.institution = title_case_words(institution)
    if year:
        draft.period = year
    if grade:
        draft.grade = title_case_words(grade)

    remaining = line
    for matched in (degree, institution, year, grade):
        if matched:
            remaining = remaining.replace(matched, "", 1)
    remaining = remaining.strip()
    if remaining:
        if not draft.institution and INSTITUTION_PATTERN.search(remaining):
            draft.institution = remaining
        elif not draft.degree and DEGREE_PATTERN.search(remaining):
            draft.degree = remaining
    return draft


def extract_education(lines: List[str]) -> List[Education]:
    """
    Read qualifications line by line; a degree, institution or year opens a record.
    Output is sorted most recent first by the first year in each period.
    """
    drafts: List[_Draft] = []
    current: Optional[_Draft] = None
    try:
        for line in lines:
            degree = _match_text(DEGREE_PATTERN, line)
            institution = _match_text(INSTITUTION_PATTERN, line)
            year = _match_text(YEAR_RANGE_PATTERN, line)
            grade = _match_text(GRADE_PATTERN, line)

            if degree or institution or year:
                if current is not None and current.has_content():
                    drafts.append(current)
                current = _start_record(line, degree, institution, year, grade)
            elif current is not None:
                if grade and not current.grade:
                    current.grade = title_case_words(grade)
                elif not current.institution:
                    current.institution = line
                elif not current.degree:
                    current.degree = line
        if current is not None and current.has_content():
            drafts.append(current)
    except Exception as e:
        logger.exception("Education extraction failed: %s", e)

    records = [d.finish() for d in drafts]
    records = [
        r for r in records
        if r.degree != DEGREE_NOT_SPECIFIED or r.institution != INSTITUTION_NOT_SPECIFIED
    ]
    records.sort(key=lambda r: first_year(r.period), reverse=True)
    logger.info("Extracted %s education entries", len(records))
    return records
