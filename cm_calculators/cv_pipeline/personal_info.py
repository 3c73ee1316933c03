"""Personal details: name from page layout, contact fields from raw text."""

import re
from functools import cmp_to_key
from typing import Optional

from cm_calculators.schemas.cv_data import (
    EMAIL_NOT_FOUND,
    LOCATION_NOT_FOUND,
    NAME_NOT_FOUND,
    PHONE_NOT_FOUND,
    PersonalInfo,
)
from cm_calculators.schemas.document import ExtractedDocument, Span
from cm_calculators.utils.helpers import extract_emails
from cm_calculators.utils.logger import get_logger

logger = get_logger(__name__)

NAME_PATTERNS = [
    re.compile(r"^[A-Z][a-z]+(?:\s+[A-Z][a-z]+){1,2}$"),
    re.compile(r"^[A-Z][a-z]+(?:\s+[A-Z]\.?\s+[A-Z][a-z]+)$"),
    re.compile(r"^[A-Z][a-z]+(?:-[A-Z][a-z]+)?(?:\s+[A-Z][a-z]+){1,2}$"),
]
PHONE_PATTERN = re.compile(r"(\+?\d{1,3}[-.]?)?\s*\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")
LOCATION_PATTERN = re.compile(r"([A-Z][a-zA-Z ]+,[ \t]*[A-Z][a-zA-Z ]+)")
TITLE_LINE_PATTERN = re.compile(r"^(curriculum\s+vitae|resume|cv|profile)$", re.IGNORECASE)

TOP_OF_PAGE_RATIO = 0.75
SAME_LINE_TOLERANCE = 5
FALLBACK_LINE_COUNT = 10


def looks_like_name(text: str) -> bool:
    return any(p.match(text) for p in NAME_PATTERNS)


def _compare_spans(a: Span, b: Span) -> float:
    """Higher on the page first; within the tolerance, larger font first."""
    y_diff = b.bounding_box.y - a.bounding_box.y
    if abs(y_diff) > SAME_LINE_TOLERANCE:
        return y_diff
    return b.appearance.font_size - a.appearance.font_size


def extract_name(document: ExtractedDocument) -> str:
    """Candidate name from the top quarter of page 1, else from the first lines."""
    try:
        if document.pages:
            page = document.pages[0]
            threshold = page.bounding_box.height * TOP_OF_PAGE_RATIO
            top_spans = [s for s in page.spans if s.bounding_box.y >= threshold]
            for span in sorted(top_spans, key=cmp_to_key(_compare_spans)):
                text = span.content.strip()
                if not text or TITLE_LINE_PATTERN.match(text):
                    continue
                if looks_like_name(text):
                    return text
        for raw in (document.content or "").split("\n")[:FALLBACK_LINE_COUNT]:
            line = raw.strip()
            if not line or TITLE_LINE_PATTERN.match(line):
                continue
            if looks_like_name(line):
                return line
    except Exception as e:
        logger.exception("Name extraction failed: %s", e)
    return NAME_NOT_FOUND


def _first_match(pattern: re.Pattern, text: str) -> Optional[str]:
    m = pattern.search(text or "")
    return m.group(0).strip() if m else None


def extract_email(text: str) -> str:
    try:
        emails = extract_emails(text)
        return emails[0] if emails else EMAIL_NOT_FOUND
    except Exception as e:
        logger.exception("Email extraction failed: %s", e)
        return EMAIL_NOT_FOUND


def extract_phone(text: str) -> str:
    try:
        return _first_match(PHONE_PATTERN, text) or PHONE_NOT_FOUND
    except Exception as e:
        logger.exception("Phone extraction failed: %s", e)
        return PHONE_NOT_FOUND


def extract_location(text: str) -> str:
    try:
        return _first_match(LOCATION_PATTERN, text) or LOCATION_NOT_FOUND
    except Exception as e:
        logger.exception("Location extraction failed: %s", e)
        return LOCATION_NOT_FOUND


def extract_personal_info(document: ExtractedDocument) -> PersonalInfo:
    """Every field falls back to its sentinel; nothing here raises."""
    content = document.content or ""
    info = PersonalInfo(
        name=extract_name(document),
        email=extract_email(content),
        phone=extract_phone(content),
        location=extract_location(content),
    )
    logger.info("Extracted personal info for %s", info.name)
    return info
