"""Tests for education extraction."""

from cm_calculators.cv_pipeline.education import extract_education
from cm_calculators.schemas.cv_data import INSTITUTION_NOT_SPECIFIED, PERIOD_NOT_SPECIFIED


def test_degree_institution_and_years_on_one_line():
    records = extract_education(["Bachelor of Science University of Technology 2015-2019"])
    assert len(records) == 1
    record = records[0]
    assert record.degree == "Bachelor Of Science"
    assert record.institution == "University Of Technology"
    assert record.period == "2015-2019"
    assert record.grade == ""


def test_details_on_following_lines():
    records = extract_education(["Master of Information Technology 2010 - 2012", "Monash University", "Distinction"])
    assert len(records) == 1
    record = records[0]
    assert record.degree == "Master Of Information Technology"
    assert record.institution == "Monash University"
    assert record.period == "2010 - 2012"
    assert record.grade == "Distinction"


def test_sorted_most_recent_first():
    records = extract_education(
        [
            "Diploma of Software Testing 2008",
            "Bachelor of Computer Science 2012 - 2015",
        ]
    )
    assert [r.period for r in records] == ["2012 - 2015", "2008"]


def test_grade_on_record_line():
    records = extract_education(["Bachelor of Engineering 2004 - 2008 First Class"])
    assert records[0].grade == "First Class"


def test_records_without_degree_or_institution_are_dropped():
    assert extract_education(["2015 - 2019"]) == []


def test_defaults_for_missing_parts():
    records = extract_education(["Certificate in Agile Testing"])
    assert records[0].institution == INSTITUTION_NOT_SPECIFIED
    assert records[0].period == PERIOD_NOT_SPECIFIED


def test_records_without_year_sort_last():
    records = extract_education(["Certificate in Agile Testing", "Bachelor of Science 2015 - 2019"])
    assert [(r.degree, r.period) for r in records] == [
        ("Bachelor Of Science", "2015 - 2019"),
        ("Certificate In Agile Testing", PERIOD_NOT_SPECIFIED),
    ]
