"""Utility exports."""

from .date_parser import extract_years, find_date_range, first_year, parse_iso_date
from .helpers import (
    capitalize_words,
    extract_emails,
    format_currency,
    format_percent,
    sanitize_text,
    title_case_words,
)
from .logger import get_logger

__all__ = [
    "get_logger",
    "extract_emails",
    "capitalize_words",
    "title_case_words",
    "sanitize_text",
    "format_currency",
    "format_percent",
    "find_date_range",
    "extract_years",
    "first_year",
    "parse_iso_date",
]
