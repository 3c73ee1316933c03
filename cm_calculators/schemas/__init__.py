"""Schema exports."""

from .calculators import (
    CommissionInputs,
    CommissionResult,
    CustomHoliday,
    GPInputs,
    GPResult,
    PublicHoliday,
    WorkingDaysInputs,
    WorkingDaysResult,
)
from .cv_data import AccountManager, ConversionResult, CVData, Education, PersonalInfo, WorkExperience
from .document import BoundingBox, ExtractedDocument, Page, Section, Span, SpanAppearance

__all__ = [
    "BoundingBox",
    "SpanAppearance",
    "Span",
    "Page",
    "ExtractedDocument",
    "Section",
    "PersonalInfo",
    "WorkExperience",
    "Education",
    "CVData",
    "AccountManager",
    "ConversionResult",
    "GPInputs",
    "GPResult",
    "CommissionInputs",
    "CommissionResult",
    "CustomHoliday",
    "PublicHoliday",
    "WorkingDaysInputs",
    "WorkingDaysResult",
]
