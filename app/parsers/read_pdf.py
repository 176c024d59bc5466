import logging
from typing import IO, List, Union

import fitz  # PyMuPDF

from app.errors import PdfExtractionError

logger = logging.getLogger(__name__)


def read_pdf_pages(source: Union[bytes, IO[bytes]]) -> List[str]:
    """Return the plain text of every page, in page order."""
    data = source if isinstance(source, (bytes, bytearray)) else source.read()
    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as e:
        logger.warning("PyMuPDF could not open PDF: %s", e)
        raise PdfExtractionError(f"Could not read PDF: {e}") from e

    pages: List[str] = []
    try:
        for page_num in range(len(doc)):
            page = doc.load_page(page_num)
            # Soft hyphens only mark optional line breaks.
            pages.append(page.get_text("text").replace("\u00ad", ""))
    except Exception as e:
        raise PdfExtractionError(f"Error extracting text from PDF: {e}") from e
    finally:
        doc.close()

    return pages


def extract_text_from_pdf(source: Union[bytes, IO[bytes]]) -> str:
    return "\n".join(read_pdf_pages(source))
