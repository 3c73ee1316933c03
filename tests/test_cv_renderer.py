"""Tests for the branded CV model and the DOCX/PDF writers."""

from io import BytesIO

import docx
import pdfplumber

from cm_calculators.config import DEFAULT_POSITION_TITLE
from cm_calculators.cv_pipeline.cv_extractor import extract_cv_data
from cm_calculators.schemas.cv_data import AccountManager, CVData, PersonalInfo
from cm_calculators.services.cv_renderer import build_branded_cv, group_flat_skills, render_docx, render_pdf

MANAGER = AccountManager(id="1", name="Sarah Mitchell", email="sarah@example.com", phone="+61 2 9000 1001")


def test_branded_cv_drops_placeholder_values(sample_document):
    branded = build_branded_cv(extract_cv_data(sample_document), MANAGER, "Lead Test Engineer")
    assert branded.name == "John A. Smith"
    assert branded.position_title == "Lead Test Engineer"
    assert "Sarah Mitchell" in branded.contact_line
    assert "sarah@example.com" in branded.contact_line
    assert branded.roles[0].company == ""
    assert branded.roles[0].period == "Jan 2019 - Present"
    assert branded.roles[0].responsibilities == [
        "Built a Selenium and Java regression framework",
        "Led API testing with Postman",
    ]
    assert branded.education[0].institution == "University Of Technology"


def test_default_position_title():
    branded = build_branded_cv(CVData(personal_info=PersonalInfo(name="Jane Doe")), MANAGER, "  ")
    assert branded.position_title == DEFAULT_POSITION_TITLE


def test_missing_name_is_left_blank():
    branded = build_branded_cv(CVData(), MANAGER)
    assert branded.name == ""


def test_contact_line_is_plain_ascii():
    branded = build_branded_cv(CVData(personal_info=PersonalInfo(name="Jane Doe")), MANAGER)
    assert "Sarah Mitchell - sarah@example.com +61 2 9000 1001" in branded.contact_line
    assert branded.contact_line.isascii()


def test_flat_skill_list_is_grouped():
    grouped = group_flat_skills(["Selenium WebDriver", "Python", "Jira", "Postman"])
    assert grouped == {
        "Automation Tools": ["Selenium WebDriver"],
        "Programming Languages": ["Python"],
        "Test Management Tools": ["Jira"],
        "Related Tools/Software": ["Postman"],
    }


def test_render_docx(sample_document):
    branded = build_branded_cv(extract_cv_data(sample_document), MANAGER)
    document = docx.Document(BytesIO(render_docx(branded)))
    text = "\n".join(p.text for p in document.paragraphs)
    assert "John A. Smith" in text
    assert "SUMMARY" in text
    assert "CAREER SUMMARY" in text
    assert "Automation Tools: Selenium" in text
    assert "Built a Selenium and Java regression framework" in text
    footer_text = "\n".join(p.text for p in document.sections[0].footer.paragraphs)
    assert "CloudMarc" in footer_text


def test_render_pdf(sample_document):
    branded = build_branded_cv(extract_cv_data(sample_document), MANAGER)
    data = render_pdf(branded)
    assert data.startswith(b"%PDF")
    assert len(data) > 1000


def test_long_cv_spans_pages(sample_document):
    branded = build_branded_cv(extract_cv_data(sample_document), MANAGER)
    branded.roles[0].responsibilities = [f"Responsibility number {i}" for i in range(120)]
    with pdfplumber.open(BytesIO(render_pdf(branded))) as pdf:
        assert len(pdf.pages) >= 2
