import io
import json
import threading

import docx
import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from docanalyzer.config.settings import Settings
from docanalyzer.llm.client_base import BaseLlmClient


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_docx_bytes() -> bytes:
    """Generate a .docx with two paragraphs and a small table."""
    document = docx.Document()
    document.add_paragraph("Quarterly report")
    document.add_paragraph("Revenue grew in every region.")
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Region"
    table.rows[0].cells[1].text = "EMEA"
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


@pytest.fixture()
def test_settings(tmp_path) -> Settings:  # type: ignore[no-untyped-def]
    """Settings for the in-memory store and the offline provider."""
    return Settings(
        _env_file=None,
        document_store="memory",
        upload_dir=str(tmp_path / "uploads"),
        llm_provider="example",
        llm_timeout_seconds=1.0,
        llm_max_attempts=3,
    )


VALID_ANALYSIS = {
    "summary": "Invoice for consulting services.",
    "docType": "invoice",
    "metadata": {"sender": "ACME", "totalAmount": "1200 EUR"},
}

VALID_SUMMARY = {
    "summary": "A short story.",
    "title": "Story",
    "keywords": ["story", "fiction"],
    "language": "en",
    "domain": "literature",
    "sentiment": "positive",
}


class ScriptedClient(BaseLlmClient):
    """Test client that replays scripted responses and records every call.

    Each script item is either a string to return or an exception to raise.
    When ``gate`` is set, every call blocks until the gate is opened.
    """

    def __init__(self, *responses: object, gate: threading.Event | None = None) -> None:
        self._responses = list(responses)
        self._gate = gate
        self._lock = threading.Lock()
        self.calls: list[str] = []
        self.started = threading.Event()

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        with self._lock:
            self.calls.append(user_prompt)
            index = len(self.calls) - 1
        self.started.set()
        if self._gate is not None:
            self._gate.wait(timeout=5)
        response = self._responses[min(index, len(self._responses) - 1)]
        if isinstance(response, Exception):
            raise response
        return str(response)


@pytest.fixture()
def analysis_json() -> str:
    return json.dumps(VALID_ANALYSIS, separators=(",", ":"))


@pytest.fixture()
def summary_json() -> str:
    return json.dumps(VALID_SUMMARY, separators=(",", ":"))


@pytest.fixture()
def make_client() -> type[ScriptedClient]:
    return ScriptedClient
