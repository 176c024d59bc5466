from app.parsers.read_pdf import extract_text_from_pdf, read_pdf_pages

__all__ = ["extract_text_from_pdf", "read_pdf_pages"]
