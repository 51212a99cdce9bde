from __future__ import annotations

import fitz  # PyMuPDF

from nysc_extract.models import FileData


def get_page_count(pdf_bytes: bytes) -> int:
    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        return doc.page_count


def render_pdf_page_png_bytes(pdf_bytes: bytes, page_number: int = 1, zoom: float = 1.5) -> bytes:
    """Return PNG bytes for the given PDF page (1-indexed)."""
    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        page_index = max(0, min(page_number - 1, doc.page_count - 1))
        page = doc.load_page(page_index)
        pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False)
        return pix.tobytes("png")


def preview_file(f: FileData, zoom: float = 1.5) -> bytes | None:
    """First-page PNG for PDFs, raw bytes for images, None for text."""
    if f.mime_type == "application/pdf":
        return render_pdf_page_png_bytes(f.payload_bytes(), 1, zoom=zoom)
    if f.mime_type.startswith("image/"):
        return f.payload_bytes()
    return None


def preview_caption(f: FileData) -> str:
    if f.mime_type == "application/pdf":
        return f"{f.name} • page 1 of {get_page_count(f.payload_bytes())}"
    return f.name
