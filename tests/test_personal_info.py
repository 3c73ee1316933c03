"""Tests for name, email, phone and location extraction."""

from cm_calculators.cv_pipeline.personal_info import (
    extract_email,
    extract_location,
    extract_name,
    extract_personal_info,
    extract_phone,
    looks_like_name,
)
from cm_calculators.schemas.cv_data import (
    EMAIL_NOT_FOUND,
    LOCATION_NOT_FOUND,
    NAME_NOT_FOUND,
    PHONE_NOT_FOUND,
)
from cm_calculators.schemas.document import BoundingBox, ExtractedDocument, Page

from tests.conftest import make_span


def test_name_patterns():
    assert looks_like_name("John Smith")
    assert looks_like_name("John A. Smith")
    assert looks_like_name("Mary-Jane Watson")
    assert not looks_like_name("JOHN SMITH")
    assert not looks_like_name("john smith")
    assert not looks_like_name("Smith")


def test_name_from_top_of_first_page(sample_document):
    assert extract_name(sample_document) == "John A. Smith"


def test_same_line_spans_prefer_larger_font():
    page = Page(
        spans=[make_span("Acme Corp", 762, 10), make_span("John A. Smith", 760, 22)],
        bounding_box=BoundingBox(width=612, height=792),
    )
    assert extract_name(ExtractedDocument(content="", pages=[page])) == "John A. Smith"


def test_spans_below_top_quarter_are_ignored():
    page = Page(spans=[make_span("Jane Doe", 300, 20)], bounding_box=BoundingBox(width=612, height=792))
    document = ExtractedDocument(content="nothing useful here", pages=[page])
    assert extract_name(document) == NAME_NOT_FOUND


def test_title_banner_span_is_skipped():
    page = Page(
        spans=[make_span("Curriculum Vitae", 780, 24), make_span("Jane Doe", 760, 18)],
        bounding_box=BoundingBox(width=612, height=792),
    )
    assert extract_name(ExtractedDocument(content="", pages=[page])) == "Jane Doe"


def test_name_falls_back_to_leading_lines():
    document = ExtractedDocument(content="Curriculum Vitae\nJane Doe\njane@example.com")
    assert extract_name(document) == "Jane Doe"


def test_fallback_reads_only_the_first_ten_lines():
    document = ExtractedDocument(content="\n" * 10 + "Jane Doe")
    assert extract_name(document) == NAME_NOT_FOUND


def test_contact_fields(sample_text):
    assert extract_email(sample_text) == "john.smith@example.com"
    assert extract_phone(sample_text) == "(555) 123-4567"
    assert extract_location(sample_text) == "Sydney, NSW"


def test_missing_fields_use_fallback_values():
    info = extract_personal_info(ExtractedDocument(content="nothing to see"))
    assert info.name == NAME_NOT_FOUND
    assert info.email == EMAIL_NOT_FOUND
    assert info.phone == PHONE_NOT_FOUND
    assert info.location == LOCATION_NOT_FOUND


def test_first_email_is_used():
    assert extract_email("Work: a.smith@globex.com, personal: a.smith@example.org") == "a.smith@globex.com"
