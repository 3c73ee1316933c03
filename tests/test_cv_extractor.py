"""Tests for the full CV classification pass and the profile summary."""

import pytest

from cm_calculators.cv_pipeline.cv_extractor import NO_SECTIONS_MESSAGE, extract_cv_data
from cm_calculators.cv_pipeline.summary import calculate_total_experience, generate_profile_summary
from cm_calculators.exceptions import CVFormatError
from cm_calculators.schemas.cv_data import CVData, PersonalInfo, WorkExperience
from cm_calculators.schemas.document import ExtractedDocument


def test_extract_cv_data(sample_document):
    cv = extract_cv_data(sample_document)
    assert cv.personal_info.name == "John A. Smith"
    assert cv.personal_info.email == "john.smith@example.com"
    assert [r.title for r in cv.work_experience] == ["Senior Test Analyst", "QA Engineer"]
    assert cv.education[0].degree == "Bachelor Of Science"
    assert cv.skills == {
        "Automation Tools": ["Selenium"],
        "Programming Languages": ["Java"],
        "Test Management Tools": ["Jira"],
    }


def test_camel_case_serialisation(sample_document):
    data = extract_cv_data(sample_document).model_dump(by_alias=True)
    assert set(data) == {"personalInfo", "workExperience", "education", "skills"}


def test_document_without_sections_is_rejected():
    with pytest.raises(CVFormatError) as exc_info:
        extract_cv_data(ExtractedDocument(content="Jane Doe\njust a cover letter"))
    assert exc_info.value.message == NO_SECTIONS_MESSAGE
    assert exc_info.value.status_code == 500


def test_skills_merged_across_sections():
    document = ExtractedDocument(content="SKILLS\nSelenium\nTECHNICAL SKILLS\nCypress, Python")
    cv = extract_cv_data(document)
    assert cv.skills["Automation Tools"] == ["Cypress", "Selenium"]
    assert cv.skills["Programming Languages"] == ["Python"]


def test_total_experience():
    roles = [
        WorkExperience(period="Jan 2019 - Present"),
        WorkExperience(period="2015 - 2018"),
        WorkExperience(period="Period not specified"),
    ]
    assert calculate_total_experience(roles, current_year=2024) == 8
    assert calculate_total_experience([], current_year=2024) == 0
    assert calculate_total_experience([WorkExperience(period="2024")], current_year=2024) == 1


def test_summary_mentions_current_role():
    cv = CVData(
        personal_info=PersonalInfo(name="Jane Doe"),
        work_experience=[WorkExperience(period="2018 - 2024", title="Test Lead", company="Globex Solutions")],
    )
    summary = generate_profile_summary(cv, current_year=2024)
    assert summary.startswith("Jane Doe is an accomplished Test Automation Engineer with over 6 years")
    assert "Currently serving as Test Lead at Globex Solutions" in summary


def test_summary_skips_placeholder_values():
    cv = CVData(work_experience=[WorkExperience(period="2020 - 2022")])
    summary = generate_profile_summary(cv, current_year=2024)
    assert summary.startswith("The candidate is")
    assert "Currently serving" not in summary
