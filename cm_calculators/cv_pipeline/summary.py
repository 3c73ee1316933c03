"""Profile summary narrative and experience totals for the branded CV."""

from datetime import date
from typing import List, Optional

from cm_calculators.schemas.cv_data import CVData, WorkExperience, is_sentinel
from cm_calculators.utils.date_parser import extract_years


def calculate_total_experience(work_experience: List[WorkExperience], current_year: Optional[int] = None) -> int:
    """
    Years of experience summed over all roles.
    A period with two years counts their difference; a single year counts up
    to the current year. At least 1 when there is any role.
    """
    if not work_experience:
        return 0
    year_now = current_year or date.today().year
    total = 0
    for role in work_experience:
        years = extract_years(role.period)
        if len(years) >= 2:
            total += years[1] - years[0]
        elif len(years) == 1:
            total += year_now - years[0]
    return max(1, round(total))


def generate_profile_summary(cv_data: CVData, current_year: Optional[int] = None) -> str:
    """Three-sentence summary: experience, current role, strengths."""
    name = cv_data.personal_info.name
    if is_sentinel(name):
        name = "The candidate"
    years = calculate_total_experience(cv_data.work_experience, current_year)
    parts = [
        f"{name} is an accomplished Test Automation Engineer with over {years} years of experience "
        "in designing, developing and maintaining automation frameworks across web, mobile and API platforms."
    ]
    if cv_data.work_experience:
        latest = cv_data.work_experience[0]
        if not is_sentinel(latest.title) and not is_sentinel(latest.company):
            parts.append(
                f"Currently serving as {latest.title} at {latest.company}, they lead quality engineering "
                "initiatives and drive continuous improvement in testing practices."
            )
    parts.append(
        "They excel in mentoring team members, collaborating with stakeholders and delivering "
        "high-quality software in Agile environments."
    )
    return " ".join(parts)
