"""Tests for work-experience extraction."""

from cm_calculators.cv_pipeline.experience import extract_work_experience, is_company_line
from cm_calculators.schemas.cv_data import COMPANY_NOT_SPECIFIED, NO_DESCRIPTION, PERIOD_NOT_SPECIFIED


def test_roles_split_on_date_lines():
    roles = extract_work_experience(
        [
            "Senior Test Analyst Jan 2019 - Present",
            "• Built a Selenium and Java regression framework",
            "- Led API testing with Postman",
            "QA Engineer 2015 - 2018",
            "• Wrote automated tests for mobile apps",
        ]
    )
    assert len(roles) == 2
    first, second = roles
    assert first.period == "Jan 2019 - Present"
    assert first.title == "Senior Test Analyst"
    assert first.company == COMPANY_NOT_SPECIFIED
    assert first.description == ["Built a Selenium and Java regression framework", "Led API testing with Postman"]
    assert second.period == "2015 - 2018"
    assert second.title == "QA Engineer"


def test_period_is_kept_verbatim():
    roles = extract_work_experience(["Automation Lead March 2020 – Present"])
    assert roles[0].period == "March 2020 – Present"


def test_company_taken_from_title_after_at():
    roles = extract_work_experience(["Test Lead at Acme 2012 - 2015"])
    assert roles[0].company == "Acme"


def test_company_line_opens_record():
    roles = extract_work_experience(["ACME TECHNOLOGIES PTY LTD", "• Owned the regression suite"])
    assert roles[0].company == "ACME TECHNOLOGIES PTY LTD"
    assert roles[0].period == PERIOD_NOT_SPECIFIED
    assert roles[0].description == ["Owned the regression suite"]


def test_role_without_bullets_gets_placeholder_description():
    roles = extract_work_experience(["QA Engineer 2015 - 2018"])
    assert roles[0].description == [NO_DESCRIPTION]


def test_bullets_before_first_role_are_dropped():
    assert extract_work_experience(["• orphan bullet"]) == []


def test_is_company_line():
    assert is_company_line("Globex Solutions")
    assert is_company_line("IBM")
    assert not is_company_line("• Wrote 40 test cases")
