from docanalyzer.config.exceptions import ConfigurationError
from docanalyzer.config.settings import Settings
from docanalyzer.extraction.base import BasePdfExtractor
from docanalyzer.extraction.pdfplumber_adapter import PdfPlumberAdapter
from docanalyzer.extraction.pymupdf_adapter import PyMuPdfAdapter
from docanalyzer.extraction.text_extractor import TextExtractor


class PdfExtractorFactory:
    """Creates the PDF adapter named by the PDF_ENGINE setting."""

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ConfigurationError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()


def build_text_extractor(settings: Settings) -> TextExtractor:
    return TextExtractor(pdf_extractor=PdfExtractorFactory.create(settings))
