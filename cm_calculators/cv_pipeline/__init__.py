"""CV text classifier: sections, personal info, experience, education and skills."""

from cm_calculators.cv_pipeline.cv_extractor import extract_cv_data
from cm_calculators.cv_pipeline.sections import segment_sections
from cm_calculators.cv_pipeline.summary import calculate_total_experience, generate_profile_summary

__all__ = [
    "extract_cv_data",
    "segment_sections",
    "calculate_total_experience",
    "generate_profile_summary",
]
