import io

import docx

from docanalyzer.extraction.exceptions import CorruptDocumentError


def read_docx_text(docx_bytes: bytes) -> str:
    """Return paragraph and table text of a .docx file, one block per line.

    Raises:
        CorruptDocumentError: if python-docx cannot open the package.
    """
    try:
        document = docx.Document(io.BytesIO(docx_bytes))
    except Exception as exc:
        raise CorruptDocumentError("DOCX is corrupt or unreadable.") from exc

    blocks = [paragraph.text for paragraph in document.paragraphs if paragraph.text.strip()]
    for table in document.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if cells:
                blocks.append(" | ".join(cells))
    return "\n".join(blocks).strip()
