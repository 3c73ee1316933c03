"""Shared fixtures: a small QA engineer CV and its analyzed form."""

import pytest

from cm_calculators.schemas.document import BoundingBox, ExtractedDocument, Page, Span, SpanAppearance

SAMPLE_CV_TEXT = "\n".join(
    [
        "Curriculum Vitae",
        "John A. Smith",
        "john.smith@example.com | Phone: (555) 123-4567",
        "Sydney, NSW",
        "SUMMARY",
        "Test automation engineer focused on web and API quality.",
        "WORK EXPERIENCE",
        "Senior Test Analyst Jan 2019 - Present",
        "• Built a Selenium and Java regression framework",
        "• Led API testing with Postman",
        "QA Engineer 2015 - 2018",
        "• Wrote automated tests for mobile apps",
        "EDUCATION",
        "Bachelor of Science University of Technology 2011-2014",
        "SKILLS",
        "Selenium, Java, Jira",
    ]
)


def make_span(text: str, y: float, font_size: float = 10.0) -> Span:
    return Span(
        content=text,
        bounding_box=BoundingBox(x=50, y=y, width=200, height=font_size),
        appearance=SpanAppearance(font_size=font_size),
    )


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_CV_TEXT


@pytest.fixture
def sample_document() -> ExtractedDocument:
    page = Page(
        spans=[
            make_span("Curriculum Vitae", 780, 10),
            make_span("John A. Smith", 760, 22),
            make_span("Senior Test Analyst", 740, 14),
            make_span("Jane Doe", 120, 10),
        ],
        bounding_box=BoundingBox(width=612, height=792),
    )
    return ExtractedDocument(content=SAMPLE_CV_TEXT, pages=[page])
