import io

import pdfplumber

from docanalyzer.extraction.base import BasePdfExtractor
from docanalyzer.extraction.exceptions import PdfExtractionError
from docanalyzer.logging.logger import Log


class PdfPlumberAdapter(BasePdfExtractor):
    """Layout-aware extraction; the default engine."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                page_texts = [page.extract_text() for page in pdf.pages]
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber could not read PDF: {exc}") from exc
        Log.debug("PDF pages read", engine="pdfplumber", pages=len(page_texts))
        return self.join_pages(page_texts)
