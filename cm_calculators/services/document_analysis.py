"""Document analysis backends producing ExtractedDocument.

AzureDocumentAnalyzer calls Form Recognizer's "prebuilt-document" model.
LocalDocumentAnalyzer reads PDFs with pdfplumber and DOCX with python-docx,
for development without Azure credentials.
"""

from io import BytesIO
from typing import List

from cm_calculators.exceptions import DocumentAnalysisError
from cm_calculators.schemas.document import BoundingBox, ExtractedDocument, Page, Span, SpanAppearance
from cm_calculators.utils.logger import get_logger

logger = get_logger(__name__)

ANALYSIS_MODEL = "prebuilt-document"
POINTS_PER_INCH = 72.0
LETTER_PAGE = BoundingBox(width=612.0, height=792.0)


def _require_content(document: ExtractedDocument) -> ExtractedDocument:
    if not (document.content or "").strip() or not document.pages:
        raise DocumentAnalysisError("Failed to extract content from the document")
    return document


def _azure_page(page) -> Page:
    """Map a Form Recognizer page (top-left origin) into y-up points."""
    scale = POINTS_PER_INCH if (page.unit or "").lower() == "inch" else 1.0
    page_height = (page.height or 0) * scale
    spans: List[Span] = []
    for line in page.lines or []:
        polygon = line.polygon or []
        if not polygon:
            continue
        xs = [p.x * scale for p in polygon]
        ys = [p.y * scale for p in polygon]
        top, bottom = min(ys), max(ys)
        spans.append(
            Span(
                content=line.content or "",
                bounding_box=BoundingBox(
                    x=min(xs),
                    y=page_height - top,
                    width=max(xs) - min(xs),
                    height=bottom - top,
                ),
                # Line height stands in for font size; the service does not report one.
                appearance=SpanAppearance(font_size=bottom - top),
            )
        )
    return Page(spans=spans, bounding_box=BoundingBox(width=(page.width or 0) * scale, height=page_height))


class AzureDocumentAnalyzer:
    """Form Recognizer client wrapper."""

    def __init__(self, endpoint: str, key: str, client=None):
        if client is None:
            from azure.ai.formrecognizer import DocumentAnalysisClient
            from azure.core.credentials import AzureKeyCredential

            client = DocumentAnalysisClient(endpoint=endpoint, credential=AzureKeyCredential(key))
        self.client = client

    def analyze(self, file_bytes: bytes) -> ExtractedDocument:
        logger.info("Analyzing document with %s (%s bytes)", ANALYSIS_MODEL, len(file_bytes))
        try:
            poller = self.client.begin_analyze_document(ANALYSIS_MODEL, document=file_bytes)
            result = poller.result()
        except Exception as e:
            logger.exception("Document analysis request failed")
            raise DocumentAnalysisError(f"Document analysis failed: {e}", cause=e) from e
        document = ExtractedDocument(
            content=result.content or "",
            pages=[_azure_page(p) for p in result.pages or []],
        )
        logger.info("Analysis returned %s pages, %s characters", len(document.pages), len(document.content))
        return _require_content(document)


def _pdf_document(file_bytes: bytes) -> ExtractedDocument:
    import pdfplumber

    parts: List[str] = []
    pages: List[Page] = []
    with pdfplumber.open(BytesIO(file_bytes)) as pdf:
        for pdf_page in pdf.pages:
            text = pdf_page.extract_text() or ""
            if text:
                parts.append(text)
            spans: List[Span] = []
            for line in pdf_page.extract_text_lines():
                sizes = [c.get("size", 0) for c in line.get("chars", [])]
                spans.append(
                    Span(
                        content=line["text"],
                        bounding_box=BoundingBox(
                            x=line["x0"],
                            y=pdf_page.height - line["top"],
                            width=line["x1"] - line["x0"],
                            height=line["bottom"] - line["top"],
                        ),
                        appearance=SpanAppearance(font_size=max(sizes) if sizes else 0.0),
                    )
                )
            pages.append(Page(spans=spans, bounding_box=BoundingBox(width=pdf_page.width, height=pdf_page.height)))
    return ExtractedDocument(content="\n".join(parts), pages=pages)


def _docx_document(file_bytes: bytes) -> ExtractedDocument:
    from docx import Document

    doc = Document(BytesIO(file_bytes))
    lines = [p.text for p in doc.paragraphs if p.text.strip()]
    # No layout information: a single page without spans, so name detection uses text lines.
    return ExtractedDocument(content="\n".join(lines), pages=[Page(bounding_box=LETTER_PAGE)])


class LocalDocumentAnalyzer:
    """Offline analyzer for PDF and DOCX bytes."""

    def analyze(self, file_bytes: bytes) -> ExtractedDocument:
        try:
            if file_bytes[:4] == b"%PDF":
                document = _pdf_document(file_bytes)
            else:
                document = _docx_document(file_bytes)
        except Exception as e:
            logger.exception("Local document analysis failed")
            raise DocumentAnalysisError(f"Document analysis failed: {e}", cause=e) from e
        logger.info("Local analysis returned %s pages, %s characters", len(document.pages), len(document.content))
        return _require_content(document)
