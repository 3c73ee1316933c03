"""Exception hierarchy for the CV converter.

Every error carries the HTTP status the API layer should answer with, so
handlers can map failures without inspecting exception types.
"""

from typing import Optional


class CVConverterError(Exception):
    """Base class for CV conversion failures."""

    status_code: int = 500

    def __init__(self, message: str, cause: Optional[BaseException] = None, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details

    @property
    def error_type(self) -> str:
        return type(self).__name__


class InvalidRequestError(CVConverterError):
    """The request was malformed (wrong content type, no file)."""

    status_code = 400


class ConfigurationError(CVConverterError):
    """Required settings or static configuration are missing or invalid."""


class DocumentAnalysisError(CVConverterError):
    """The document analysis service failed or returned no content."""


class OfficeConversionError(CVConverterError):
    """Converting a Word document to PDF failed."""


class StorageError(CVConverterError):
    """Uploading to blob storage or signing a URL failed."""


class RenderError(CVConverterError):
    """Generating the branded DOCX/PDF failed."""


class CVFormatError(CVConverterError):
    """No recognisable sections could be extracted from the CV."""


__all__ = [
    "CVConverterError",
    "InvalidRequestError",
    "ConfigurationError",
    "DocumentAnalysisError",
    "OfficeConversionError",
    "StorageError",
    "RenderError",
    "CVFormatError",
]
