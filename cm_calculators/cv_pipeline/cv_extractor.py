"""Classify analyzed CV text into structured CVData."""

from typing import Dict, List

from cm_calculators.cv_pipeline.education import extract_education
from cm_calculators.cv_pipeline.experience import extract_work_experience
from cm_calculators.cv_pipeline.personal_info import extract_personal_info
from cm_calculators.cv_pipeline.sections import segment_sections
from cm_calculators.cv_pipeline.skills import extract_skills, merge_skills
from cm_calculators.exceptions import CVFormatError
from cm_calculators.schemas.cv_data import CVData, Education, WorkExperience
from cm_calculators.schemas.document import ExtractedDocument
from cm_calculators.utils.logger import get_logger

logger = get_logger(__name__)

NO_SECTIONS_MESSAGE = "Failed to extract CV sections. Please check the format of your CV."


def extract_cv_data(document: ExtractedDocument) -> CVData:
    """
    Segment the document and run each section extractor.
    Raises CVFormatError when no experience, education or skills were found.
    """
    sections = segment_sections(document.content)
    personal_info = extract_personal_info(document)

    work_experience: List[WorkExperience] = []
    education: List[Education] = []
    skills: Dict[str, List[str]] = {}
    for section in sections:
        if section.type == "experience":
            work_experience.extend(extract_work_experience(section.content))
        elif section.type == "education":
            education.extend(extract_education(section.content))
        elif section.type == "skills":
            skills = merge_skills(skills, extract_skills("\n".join(section.content)))

    if not work_experience and not education and not skills:
        logger.warning("No CV sections extracted from %s characters of content", len(document.content or ""))
        raise CVFormatError(NO_SECTIONS_MESSAGE)

    logger.info(
        "CV extraction complete: %s roles, %s qualifications, %s skill categories",
        len(work_experience),
        len(education),
        len(skills),
    )
    return CVData(
        personal_info=personal_info,
        work_experience=work_experience,
        education=education,
        skills=skills,
    )
