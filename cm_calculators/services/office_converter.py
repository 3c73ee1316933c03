"""Convert Word uploads to PDF with a headless LibreOffice process."""

import subprocess
import tempfile
from pathlib import Path

from cm_calculators.exceptions import OfficeConversionError
from cm_calculators.utils.logger import get_logger

logger = get_logger(__name__)

WORD_EXTENSIONS = (".doc", ".docx")


def is_word_document(filename: str) -> bool:
    return (filename or "").lower().strip().endswith(WORD_EXTENSIONS)


class OfficeConverter:
    """Thin wrapper around `soffice --headless --convert-to pdf`."""

    def __init__(self, binary: str = "soffice"):
        self.binary = binary

    def to_pdf(self, file_bytes: bytes, filename: str) -> bytes:
        """Return PDF bytes for a .doc/.docx upload."""
        suffix = Path(filename).suffix.lower() or ".docx"
        with tempfile.TemporaryDirectory(prefix="cv-convert-") as workdir:
            source = Path(workdir) / f"input{suffix}"
            source.write_bytes(file_bytes)
            cmd = [self.binary, "--headless", "--convert-to", "pdf", "--outdir", workdir, str(source)]
            logger.info("Converting %s to PDF with %s", filename, self.binary)
            try:
                subprocess.run(cmd, check=True, capture_output=True)
            except FileNotFoundError as e:
                raise OfficeConversionError(f"LibreOffice executable not found: {self.binary}", cause=e) from e
            except subprocess.CalledProcessError as e:
                stderr = (e.stderr or b"").decode("utf-8", "replace").strip()
                raise OfficeConversionError(f"Failed to convert {filename} to PDF: {stderr}", cause=e) from e
            output = source.with_suffix(".pdf")
            if not output.is_file():
                raise OfficeConversionError(f"LibreOffice produced no PDF for {filename}")
            return output.read_bytes()
