from abc import ABC, abstractmethod
from collections.abc import Iterable


class BasePdfExtractor(ABC):
    """Contract for PDF text extraction adapters.

    Adapters read the pages with their library and hand the raw page texts
    to ``join_pages``, so every engine produces the same layout.
    """

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> str:
        """Return the text of every page that has any, one page per block.

        Raises:
            PdfExtractionError: if the library cannot parse the bytes.
        """

    @staticmethod
    def join_pages(pages: Iterable[str | None]) -> str:
        return "\n".join(text.strip() for text in pages if text and text.strip())
