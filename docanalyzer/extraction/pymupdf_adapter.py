import pymupdf

from docanalyzer.extraction.base import BasePdfExtractor
from docanalyzer.extraction.exceptions import PdfExtractionError
from docanalyzer.logging.logger import Log


class PyMuPdfAdapter(BasePdfExtractor):
    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                page_texts = [page.get_text("text") for page in doc]
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf could not read PDF: {exc}") from exc
        Log.debug("PDF pages read", engine="pymupdf", pages=len(page_texts))
        return self.join_pages(page_texts)
