"""Helper utilities shared by the CV pipeline, renderers and calculators."""

import re
from typing import List

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

_TEXT_REPLACEMENTS = (
    (re.compile(r"[●•]"), "*"),
    (re.compile(r"[“”]"), '"'),
    (re.compile(r"[‘’]"), "'"),
    (re.compile(r"[–—]"), "-"),
    (re.compile(r"[^\x00-\x7F]"), ""),
)


def extract_emails(text: str) -> List[str]:
    """Extract email addresses from text using regex, first occurrence order."""
    if not text:
        return []
    return list(dict.fromkeys(EMAIL_PATTERN.findall(text)))


def capitalize_words(text: str) -> str:
    """Upper-case the first letter of each whitespace-separated word.

    The rest of each word is left untouched, so acronyms like "AWS" survive.
    """
    if not text:
        return ""
    return " ".join(w[:1].upper() + w[1:] for w in text.split())


def title_case_words(text: str) -> str:
    """Capitalise each word and lower-case the remainder ("bachelor OF" -> "Bachelor Of")."""
    if not text:
        return ""
    return " ".join(w[:1].upper() + w[1:].lower() for w in text.split())


def sanitize_text(text: str) -> str:
    """Reduce text to plain ASCII for branded documents.

    Bullets become "*", smart quotes are straightened, en/em dashes become "-"
    and any other non-ASCII character is dropped.
    """
    if not text:
        return ""
    out = str(text)
    for pattern, replacement in _TEXT_REPLACEMENTS:
        out = pattern.sub(replacement, out)
    return out.strip()


def format_currency(value: float, currency: str = "AUD") -> str:
    """Format money with thousands separators and two decimals ("AUD$ 1,234.50")."""
    amount = f"{value:,.2f}"
    if currency == "AUD":
        return f"AUD$ {amount}"
    if currency == "PHP":
        return f"₱{amount}"
    if currency:
        return f"{currency} {amount}"
    return amount


def format_percent(value: float, decimals: int = 2) -> str:
    """Format a percentage already expressed out of 100."""
    return f"{value:.{decimals}f}%"
