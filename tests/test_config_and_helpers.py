"""Tests for settings loading and shared text/date helpers."""

import pytest

from cm_calculators.config import ConverterSettings
from cm_calculators.exceptions import ConfigurationError
from cm_calculators.utils.date_parser import extract_years, find_date_range, first_year, parse_iso_date
from cm_calculators.utils.helpers import (
    capitalize_words,
    extract_emails,
    format_currency,
    format_percent,
    sanitize_text,
    title_case_words,
)


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("FORM_RECOGNIZER_ENDPOINT", "https://fr.example/")
    monkeypatch.setenv("FORM_RECOGNIZER_KEY", "key")
    monkeypatch.setenv("AZURE_STORAGE_CONNECTION_STRING", "conn")
    monkeypatch.setenv("APP_ENV", "development")
    monkeypatch.setenv("LOCAL_ANALYSIS", "no")
    settings = ConverterSettings.from_env()
    assert settings.missing_variables() == []
    assert settings.is_development
    assert not settings.local_analysis


def test_missing_settings_are_named():
    settings = ConverterSettings()
    assert settings.missing_variables() == [
        "FORM_RECOGNIZER_ENDPOINT",
        "FORM_RECOGNIZER_KEY",
        "AZURE_STORAGE_CONNECTION_STRING",
    ]
    with pytest.raises(ConfigurationError, match="FORM_RECOGNIZER_KEY"):
        settings.validate_required()


def test_local_analysis_needs_only_storage():
    assert ConverterSettings(local_analysis=True, storage_connection_string="conn").missing_variables() == []


def test_sanitize_text():
    assert sanitize_text(" • “Quoted” – done ") == '* "Quoted" - done'
    assert sanitize_text("Café") == "Caf"
    assert sanitize_text("") == ""


def test_word_casing():
    assert capitalize_words("aws cloud") == "Aws Cloud"
    assert capitalize_words("AWS cloud") == "AWS Cloud"
    assert title_case_words("bachelor OF science") == "Bachelor Of Science"


def test_extract_emails_keeps_first_occurrence_order():
    text = "a@example.com, b@example.org and a@example.com"
    assert extract_emails(text) == ["a@example.com", "b@example.org"]


def test_formatting():
    assert format_currency(1234.5) == "AUD$ 1,234.50"
    assert format_currency(1000, "PHP") == "₱1,000.00"
    assert format_currency(2.5, "LKR") == "LKR 2.50"
    assert format_percent(35) == "35.00%"


def test_date_helpers():
    assert find_date_range("Worked Mar 2020 – Present at Globex") == "Mar 2020 – Present"
    assert find_date_range("no dates") is None
    assert extract_years("2015 - 2019") == [2015, 2019]
    assert first_year("Period not specified") == 0
    assert parse_iso_date("2025-12-25").isoformat() == "2025-12-25"
    assert parse_iso_date("25/12/2025") is None


def test_logger_level_comes_from_settings():
    import logging

    from cm_calculators.config import LOG_LEVEL
    from cm_calculators.utils.logger import get_logger

    logger = get_logger("cm_calculators.tests.level_check")
    assert logger.level == getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    assert get_logger("cm_calculators.tests.level_check", logging.ERROR).level == logging.ERROR
