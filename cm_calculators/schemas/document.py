"""Document analysis output: raw content plus positioned text spans per page.

Coordinates are y-up: a larger ``y`` sits nearer the top of the page and a
span's ``y`` marks its top edge. Analyzer adapters convert into this frame.
"""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field


class BoundingBox(BaseModel):
    """Axis-aligned box in page units (points)."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


class SpanAppearance(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    font_size: float = Field(default=0.0, alias="fontSize")


class Span(BaseModel):
    """A run of text as laid out on the page."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    content: str = ""
    bounding_box: BoundingBox = Field(default_factory=BoundingBox, alias="boundingBox")
    appearance: SpanAppearance = Field(default_factory=SpanAppearance)


class Page(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    spans: List[Span] = Field(default_factory=list)
    bounding_box: BoundingBox = Field(default_factory=BoundingBox, alias="boundingBox")


class ExtractedDocument(BaseModel):
    """Text content and page layout returned by a document analyzer."""

    model_config = ConfigDict(frozen=True)

    content: str = ""
    pages: List[Page] = Field(default_factory=list)


SectionType = Literal["experience", "education", "skills", "summary"]


class Section(BaseModel):
    """A titled block of CV lines following a recognised header."""

    type: SectionType
    title: str
    content: List[str] = Field(default_factory=list)
