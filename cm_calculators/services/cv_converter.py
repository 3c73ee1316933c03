"""
CV conversion: uploaded CV -> analyzed text -> CVData -> branded DOCX/PDF -> signed URLs.
Collaborators are injected so the HTTP layer and tests can swap them.
"""

import time
from pathlib import Path
from typing import Callable, List, Optional

from cm_calculators.config import CONVERTED_SUFFIX, ConverterSettings
from cm_calculators.cv_pipeline.cv_extractor import extract_cv_data
from cm_calculators.schemas.cv_data import AccountManager, ConversionResult
from cm_calculators.services.account_managers import load_account_managers, resolve_account_manager
from cm_calculators.services.blob_storage import DOCX_CONTENT_TYPE, PDF_CONTENT_TYPE, BlobStorage
from cm_calculators.services.cv_renderer import build_branded_cv, render_docx, render_pdf
from cm_calculators.services.document_analysis import AzureDocumentAnalyzer, LocalDocumentAnalyzer
from cm_calculators.services.office_converter import OfficeConverter, is_word_document
from cm_calculators.utils.logger import get_logger

logger = get_logger(__name__)


def blob_base_name(filename: str, timestamp_ms: int) -> str:
    """Upload name prefix: <ms-timestamp>-<original name without extension>."""
    stem = Path(filename or "cv").stem or "cv"
    return f"{timestamp_ms}-{stem}"


class CVConverterService:
    """Runs one conversion per call; holds no per-request state."""

    def __init__(
        self,
        analyzer,
        storage,
        office_converter: OfficeConverter,
        account_managers: List[AccountManager],
        logo_path: Optional[Path] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.analyzer = analyzer
        self.storage = storage
        self.office_converter = office_converter
        self.account_managers = account_managers
        self.logo_path = logo_path
        self.clock = clock

    @classmethod
    def from_settings(cls, settings: ConverterSettings) -> "CVConverterService":
        """Wire Azure (or local) collaborators from settings; raises ConfigurationError if incomplete."""
        settings.validate_required()
        if settings.local_analysis:
            analyzer = LocalDocumentAnalyzer()
        else:
            analyzer = AzureDocumentAnalyzer(
                settings.form_recognizer_endpoint.strip(), settings.form_recognizer_key.strip()
            )
        return cls(
            analyzer=analyzer,
            storage=BlobStorage(settings.storage_connection_string.strip(), settings.container_name),
            office_converter=OfficeConverter(settings.soffice_binary),
            account_managers=load_account_managers(settings.account_managers_path),
            logo_path=settings.logo_path,
        )

    def convert(
        self,
        file_bytes: bytes,
        filename: str,
        position_title: Optional[str] = None,
        account_manager_id: Optional[str] = None,
    ) -> ConversionResult:
        """Convert one CV. Collaborator failures propagate as CVConverterError subclasses."""
        account_manager = resolve_account_manager(self.account_managers, account_manager_id)
        logger.info("Converting %s for account manager %s", filename, account_manager.id)

        document_bytes = file_bytes
        if is_word_document(filename):
            document_bytes = self.office_converter.to_pdf(file_bytes, filename)

        document = self.analyzer.analyze(document_bytes)
        cv_data = extract_cv_data(document)

        branded = build_branded_cv(cv_data, account_manager, position_title)
        docx_bytes = render_docx(branded, self.logo_path)
        pdf_bytes = render_pdf(branded, self.logo_path)

        base_name = blob_base_name(filename, int(self.clock() * 1000))
        docx_url = self.storage.upload(f"{base_name}-{CONVERTED_SUFFIX}.docx", docx_bytes, DOCX_CONTENT_TYPE)
        pdf_url = self.storage.upload(f"{base_name}-{CONVERTED_SUFFIX}.pdf", pdf_bytes, PDF_CONTENT_TYPE)
        logger.info("Conversion of %s complete as %s", filename, base_name)
        return ConversionResult(docx_url=docx_url, pdf_url=pdf_url, file_name=base_name)
