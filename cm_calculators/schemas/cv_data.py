"""Structured CV data produced by the CV text classifier."""

from typing import Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field

NAME_NOT_FOUND = "Name Not Found"
EMAIL_NOT_FOUND = "Email Not Found"
PHONE_NOT_FOUND = "Phone Not Found"
LOCATION_NOT_FOUND = "Location Not Found"

PERIOD_NOT_SPECIFIED = "Period not specified"
ROLE_NOT_SPECIFIED = "Role not specified"
COMPANY_NOT_SPECIFIED = "Company not specified"
NO_DESCRIPTION = "No description provided"
DEGREE_NOT_SPECIFIED = "Degree not specified"
INSTITUTION_NOT_SPECIFIED = "Institution not specified"

SENTINEL_VALUES = frozenset(
    {
        NAME_NOT_FOUND,
        EMAIL_NOT_FOUND,
        PHONE_NOT_FOUND,
        LOCATION_NOT_FOUND,
        PERIOD_NOT_SPECIFIED,
        ROLE_NOT_SPECIFIED,
        COMPANY_NOT_SPECIFIED,
        NO_DESCRIPTION,
        DEGREE_NOT_SPECIFIED,
        INSTITUTION_NOT_SPECIFIED,
    }
)


def is_sentinel(value: str) -> bool:
    """True if value is one of the fixed fallback strings."""
    return value in SENTINEL_VALUES


class PersonalInfo(BaseModel):
    name: str = Field(default=NAME_NOT_FOUND)
    email: str = Field(default=EMAIL_NOT_FOUND)
    phone: str = Field(default=PHONE_NOT_FOUND)
    location: str = Field(default=LOCATION_NOT_FOUND)


class WorkExperience(BaseModel):
    """One role in the candidate's career history."""

    period: str = Field(default=PERIOD_NOT_SPECIFIED, description="Date text, kept verbatim")
    title: str = Field(default=ROLE_NOT_SPECIFIED)
    company: str = Field(default=COMPANY_NOT_SPECIFIED)
    description: List[str] = Field(default_factory=lambda: [NO_DESCRIPTION])


class Education(BaseModel):
    degree: str = Field(default=DEGREE_NOT_SPECIFIED)
    institution: str = Field(default=INSTITUTION_NOT_SPECIFIED)
    period: str = Field(default=PERIOD_NOT_SPECIFIED)
    grade: str = Field(default="")


SkillsData = Union[Dict[str, List[str]], List[str]]


class CVData(BaseModel):
    """Everything the classifier extracts from one CV."""

    model_config = ConfigDict(populate_by_name=True)

    personal_info: PersonalInfo = Field(default_factory=PersonalInfo, alias="personalInfo")
    work_experience: List[WorkExperience] = Field(default_factory=list, alias="workExperience")
    education: List[Education] = Field(default_factory=list)
    skills: SkillsData = Field(default_factory=dict, description="Category -> skills, or a flat list")


class AccountManager(BaseModel):
    """CloudMarc contact printed on the converted CV."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    name: str
    email: str = ""
    phone: str = ""


class ConversionResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = "CV converted successfully"
    docx_url: str = Field(..., alias="docxUrl")
    pdf_url: str = Field(..., alias="pdfUrl")
    file_name: str = Field(..., alias="fileName")
