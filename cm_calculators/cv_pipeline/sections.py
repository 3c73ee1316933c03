"""Split CV text into typed sections keyed off header lines."""

import re
from typing import List, Optional, Tuple

from cm_calculators.schemas.document import Section
from cm_calculators.utils.logger import get_logger

logger = get_logger(__name__)

# Checked in order; first match wins.
SECTION_HEADERS: List[Tuple[str, re.Pattern]] = [
    ("experience", re.compile(r"^(WORK\s+EXPERIENCE|EMPLOYMENT|PROFESSIONAL\s+EXPERIENCE|EXPERIENCE)", re.IGNORECASE)),
    ("education", re.compile(r"^(EDUCATION|ACADEMIC|QUALIFICATIONS)", re.IGNORECASE)),
    ("skills", re.compile(r"^(SKILLS|TECHNICAL\s+SKILLS|EXPERTISE|COMPETENCIES)", re.IGNORECASE)),
    ("summary", re.compile(r"^(SUMMARY|PROFILE|OBJECTIVE|ABOUT)", re.IGNORECASE)),
]


def split_lines(content: str) -> List[str]:
    """Trimmed, non-blank lines of content."""
    if not content:
        return []
    return [line.strip() for line in content.split("\n") if line.strip()]


def classify_header(line: str) -> Optional[str]:
    """Section type whose header pattern matches the start of line, or None."""
    for section_type, pattern in SECTION_HEADERS:
        if pattern.match(line):
            return section_type
    return None


def segment_sections(content: str) -> List[Section]:
    """
    Group lines under the most recent header.
    Lines before the first header are dropped; the last open section is emitted.
    """
    sections: List[Section] = []
    current: Optional[Section] = None
    for line in split_lines(content):
        section_type = classify_header(line)
        if section_type is not None:
            if current is not None:
                sections.append(current)
            current = Section(type=section_type, title=line, content=[])
        elif current is not None:
            current.content.append(line)
    if current is not None:
        sections.append(current)
    logger.info("Segmented CV into %s sections: %s", len(sections), [s.type for s in sections])
    return sections
