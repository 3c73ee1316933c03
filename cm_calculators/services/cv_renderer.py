"""Render CVData as a CloudMarc-branded DOCX (python-docx) and PDF (reportlab)."""

from io import BytesIO
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from cm_calculators.config import (
    BRAND_GREY,
    BRAND_NAME,
    BRAND_NAVY,
    BRAND_ORANGE,
    BRAND_TAGLINE,
    DEFAULT_POSITION_TITLE,
)
from cm_calculators.cv_pipeline.summary import generate_profile_summary
from cm_calculators.exceptions import RenderError
from cm_calculators.schemas.cv_data import AccountManager, CVData, is_sentinel
from cm_calculators.utils.helpers import sanitize_text
from cm_calculators.utils.logger import get_logger

logger = get_logger(__name__)

# Flat skill lists are grouped into these display categories; the last one catches the rest.
_FLAT_SKILL_GROUPS: List[Tuple[str, Tuple[str, ...]]] = [
    ("Automation Tools", ("selenium", "appium", "katalon", "nightwatch", "cypress", "playwright")),
    ("Programming Languages", ("java", "python", "javascript", "typescript", "html", "css", "sql", "xml")),
    ("Test Management Tools", ("jira", "confluence", "testlink", "qtest", "azure", "tfs")),
]
_OTHER_SKILLS = "Related Tools/Software"


class EducationBlock(BaseModel):
    degree: str = ""
    institution: str = ""
    period: str = ""


class RoleBlock(BaseModel):
    company: str = ""
    period: str = ""
    title: str = ""
    responsibilities: List[str] = Field(default_factory=list)


class BrandedCV(BaseModel):
    """Sanitised, render-ready content shared by the DOCX and PDF writers."""

    name: str
    position_title: str
    contact_line: str
    summary: str
    education: List[EducationBlock] = Field(default_factory=list)
    skills: Dict[str, List[str]] = Field(default_factory=dict)
    roles: List[RoleBlock] = Field(default_factory=list)


def group_flat_skills(skills: List[str]) -> Dict[str, List[str]]:
    """Bucket a flat skill list into the display categories."""
    grouped: Dict[str, List[str]] = {name: [] for name, _ in _FLAT_SKILL_GROUPS}
    grouped[_OTHER_SKILLS] = []
    for skill in skills:
        lowered = skill.lower()
        for name, keywords in _FLAT_SKILL_GROUPS:
            if any(k in lowered for k in keywords):
                grouped[name].append(skill)
                break
        else:
            grouped[_OTHER_SKILLS].append(skill)
    return {k: v for k, v in grouped.items() if v}


def _shown(value: str) -> str:
    """Sanitised value, or '' for fallback sentinels."""
    if not value or is_sentinel(value):
        return ""
    return sanitize_text(value)


def build_branded_cv(
    cv_data: CVData,
    account_manager: AccountManager,
    position_title: Optional[str] = None,
) -> BrandedCV:
    """Collect everything the writers print, with sentinel values removed."""
    skills = cv_data.skills
    if isinstance(skills, list):
        skills = group_flat_skills(skills)
    return BrandedCV(
        name=_shown(cv_data.personal_info.name),
        position_title=sanitize_text(position_title or "") or DEFAULT_POSITION_TITLE,
        contact_line=f"{BRAND_NAME} Contact: {account_manager.name} - {account_manager.email} {account_manager.phone}".strip(),
        summary=sanitize_text(generate_profile_summary(cv_data)),
        education=[
            EducationBlock(degree=_shown(e.degree), institution=_shown(e.institution), period=_shown(e.period))
            for e in cv_data.education
        ],
        skills={sanitize_text(k): [sanitize_text(s) for s in v] for k, v in skills.items() if v},
        roles=[
            RoleBlock(
                company=_shown(r.company),
                period=_shown(r.period),
                title=_shown(r.title),
                responsibilities=[sanitize_text(d) for d in r.description if not is_sentinel(d)],
            )
            for r in cv_data.work_experience
        ],
    )


# ---------------------------------------------------------------------------
# DOCX
# ---------------------------------------------------------------------------


def _shade_paragraph(paragraph, fill: str) -> None:
    from docx.oxml import OxmlElement
    from docx.oxml.ns import qn

    shd = OxmlElement("w:shd")
    shd.set(qn("w:val"), "clear")
    shd.set(qn("w:color"), "auto")
    shd.set(qn("w:fill"), fill)
    paragraph._p.get_or_add_pPr().append(shd)


def _add_run(paragraph, text: str, size: float, color: str, bold: bool = False):
    from docx.shared import Pt, RGBColor

    run = paragraph.add_run(text)
    run.font.size = Pt(size)
    run.font.color.rgb = RGBColor.from_string(color)
    run.bold = bold
    return run


def _add_heading(doc, text: str) -> None:
    from docx.shared import Pt

    p = doc.add_paragraph()
    p.paragraph_format.space_before = Pt(10)
    p.paragraph_format.space_after = Pt(10)
    _add_run(p, text, 12, BRAND_NAVY, bold=True)


def render_docx(branded: BrandedCV, logo_path: Optional[Path] = None) -> bytes:
    """Branded Word document as bytes."""
    try:
        from docx import Document
        from docx.enum.text import WD_ALIGN_PARAGRAPH
        from docx.shared import Inches, Pt, Twips

        doc = Document()
        section = doc.sections[0]
        section.top_margin = Twips(1000)
        section.bottom_margin = Twips(1000)
        section.left_margin = Twips(1200)
        section.right_margin = Twips(1200)

        if logo_path and Path(logo_path).is_file():
            logo = doc.add_paragraph()
            logo.add_run().add_picture(str(logo_path), width=Inches(1.6))
            logo.paragraph_format.space_after = Pt(10)

        name = doc.add_paragraph()
        name.alignment = WD_ALIGN_PARAGRAPH.RIGHT
        _add_run(name, branded.name, 14, BRAND_GREY)
        title = doc.add_paragraph()
        title.alignment = WD_ALIGN_PARAGRAPH.RIGHT
        title.paragraph_format.space_after = Pt(10)
        _add_run(title, branded.position_title, 12, BRAND_GREY)

        contact = doc.add_paragraph()
        contact.alignment = WD_ALIGN_PARAGRAPH.CENTER
        contact.paragraph_format.space_after = Pt(10)
        _add_run(contact, branded.contact_line, 10, "FFFFFF")
        _shade_paragraph(contact, BRAND_NAVY)

        _add_heading(doc, "SUMMARY")
        summary = doc.add_paragraph()
        summary.paragraph_format.space_after = Pt(10)
        _add_run(summary, branded.summary, 10, BRAND_GREY)

        _add_heading(doc, "EDUCATION AND TRAINING")
        for edu in branded.education:
            if edu.degree:
                _add_run(doc.add_paragraph(), edu.degree, 10, BRAND_GREY)
            if edu.institution:
                line = edu.institution + (f"  {edu.period}" if edu.period else "")
                p = doc.add_paragraph()
                p.paragraph_format.space_after = Pt(6)
                _add_run(p, line, 10, BRAND_GREY).italic = True

        _add_heading(doc, "SKILLS")
        for category, skills in branded.skills.items():
            p = doc.add_paragraph()
            _add_run(p, f"{category}: ", 10, BRAND_GREY, bold=True)
            _add_run(p, ", ".join(skills), 10, BRAND_GREY)

        _add_heading(doc, "CAREER SUMMARY")
        for role in branded.roles:
            header = doc.add_paragraph()
            header.paragraph_format.space_before = Pt(6)
            _add_run(header, role.company, 10, BRAND_ORANGE)
            if role.period:
                _add_run(header, "  " + role.period, 10, BRAND_GREY)
            if role.title:
                _add_run(doc.add_paragraph(), role.title, 10, BRAND_GREY, bold=True)
            if role.responsibilities:
                _add_run(doc.add_paragraph(), "Responsibilities:", 10, BRAND_GREY)
                for point in role.responsibilities:
                    _add_run(doc.add_paragraph(style="List Bullet"), point, 10, BRAND_GREY)

        footer = section.footer.paragraphs[0]
        footer.alignment = WD_ALIGN_PARAGRAPH.CENTER
        _add_run(footer, BRAND_NAME, 10, BRAND_NAVY, bold=True)
        tagline = section.footer.add_paragraph()
        tagline.alignment = WD_ALIGN_PARAGRAPH.CENTER
        _add_run(tagline, BRAND_TAGLINE, 8, BRAND_GREY)

        buffer = BytesIO()
        doc.save(buffer)
        logger.info("Rendered DOCX for %s (%s bytes)", branded.name, buffer.tell())
        return buffer.getvalue()
    except Exception as e:
        logger.exception("DOCX rendering failed: %s", e)
        raise RenderError(f"Failed to generate DOCX: {e}", cause=e) from e


# ---------------------------------------------------------------------------
# PDF
# ---------------------------------------------------------------------------

_PDF_MARGIN = 50
_BODY_SIZE = 10
_LINE_HEIGHT = _BODY_SIZE * 1.5


class _PdfCursor:
    """Top-down writer over a reportlab canvas that starts new pages as needed."""

    def __init__(self, canvas, width: float, height: float):
        self.canvas = canvas
        self.width = width
        self.height = height
        self.y = height - _PDF_MARGIN

    def ensure(self, needed: float) -> None:
        if self.y - needed < _PDF_MARGIN + 30:
            self.footer()
            self.canvas.showPage()
            self.y = self.height - _PDF_MARGIN

    def footer(self) -> None:
        from reportlab.lib.colors import HexColor

        c = self.canvas
        c.setFillColor(HexColor(f"#{BRAND_NAVY}"))
        c.setFont("Helvetica-Bold", 9)
        c.drawCentredString(self.width / 2, 32, BRAND_NAME)
        c.setFillColor(HexColor(f"#{BRAND_GREY}"))
        c.setFont("Helvetica", 7)
        c.drawCentredString(self.width / 2, 22, BRAND_TAGLINE)

    def text(self, value: str, font: str = "Helvetica", size: float = _BODY_SIZE,
             color: str = BRAND_GREY, indent: float = 0) -> None:
        from reportlab.lib.colors import HexColor
        from reportlab.lib.utils import simpleSplit

        max_width = self.width - 2 * _PDF_MARGIN - indent
        for line in simpleSplit(value, font, size, max_width) or [""]:
            self.ensure(_LINE_HEIGHT)
            self.canvas.setFillColor(HexColor(f"#{color}"))
            self.canvas.setFont(font, size)
            self.canvas.drawString(_PDF_MARGIN + indent, self.y, line)
            self.y -= _LINE_HEIGHT

    def heading(self, value: str) -> None:
        self.y -= _LINE_HEIGHT
        self.ensure(_LINE_HEIGHT * 3)
        self.text(value, font="Helvetica-Bold", size=14, color=BRAND_NAVY)
        self.y -= _LINE_HEIGHT / 2


def render_pdf(branded: BrandedCV, logo_path: Optional[Path] = None) -> bytes:
    """Branded A4 PDF as bytes, laid out like the DOCX."""
    try:
        from reportlab.lib.colors import HexColor, white
        from reportlab.lib.pagesizes import A4
        from reportlab.pdfgen import canvas

        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=A4)
        width, height = A4
        cursor = _PdfCursor(c, width, height)

        if logo_path and Path(logo_path).is_file():
            c.drawImage(str(logo_path), _PDF_MARGIN, height - 100, width=150, height=50,
                        mask="auto", preserveAspectRatio=True)
        cursor.y = height - 100

        c.setFillColor(HexColor(f"#{BRAND_GREY}"))
        c.setFont("Helvetica-Bold", 22)
        c.drawRightString(width - _PDF_MARGIN, cursor.y, branded.name)
        cursor.y -= _LINE_HEIGHT * 1.5
        c.setFont("Helvetica", 16)
        c.drawRightString(width - _PDF_MARGIN, cursor.y, branded.position_title)

        cursor.y -= _LINE_HEIGHT * 2
        c.setFillColor(HexColor(f"#{BRAND_NAVY}"))
        c.rect(_PDF_MARGIN, cursor.y - 8, width - 2 * _PDF_MARGIN, _LINE_HEIGHT * 1.5, fill=1, stroke=0)
        c.setFillColor(white)
        c.setFont("Helvetica", _BODY_SIZE)
        c.drawCentredString(width / 2, cursor.y, sanitize_text(branded.contact_line))
        cursor.y -= _LINE_HEIGHT * 2

        cursor.heading("SUMMARY")
        cursor.text(branded.summary)

        cursor.heading("EDUCATION AND TRAINING")
        for edu in branded.education:
            if edu.degree:
                cursor.text(edu.degree, font="Helvetica-Bold")
            if edu.institution:
                line = edu.institution + (f"  {edu.period}" if edu.period else "")
                cursor.text(line, font="Helvetica-Oblique")
            cursor.y -= _LINE_HEIGHT / 2

        cursor.heading("SKILLS")
        for category, skills in branded.skills.items():
            cursor.text(f"{category}: {', '.join(skills)}")

        cursor.heading("CAREER SUMMARY")
        for role in branded.roles:
            cursor.ensure(_LINE_HEIGHT * 3)
            header = role.company + (f"  {role.period}" if role.period else "")
            if header:
                cursor.text(header, color=BRAND_ORANGE)
            if role.title:
                cursor.text(role.title, font="Helvetica-Bold")
            if role.responsibilities:
                cursor.text("Responsibilities:")
                for point in role.responsibilities:
                    cursor.text(f"* {point}", indent=12)
            cursor.y -= _LINE_HEIGHT / 2

        cursor.footer()
        c.save()
        logger.info("Rendered PDF for %s (%s bytes)", branded.name, buffer.tell())
        return buffer.getvalue()
    except Exception as e:
        logger.exception("PDF rendering failed: %s", e)
        raise RenderError(f"Failed to generate PDF: {e}", cause=e) from e
