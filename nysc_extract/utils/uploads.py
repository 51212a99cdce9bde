from __future__ import annotations

import base64
import mimetypes
from typing import Iterable, List

from nysc_extract.config import TEXT_MIME_TYPES
from nysc_extract.models import FileData

_EXT_MIME = {
    ".csv": "text/csv",
    ".txt": "text/plain",
    ".pdf": "application/pdf",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
}


def guess_mime_type(name: str, declared: str | None = None) -> str:
    """Browsers often send CSVs as application/vnd.ms-excel; trust the extension for those."""
    suffix = ("." + name.rsplit(".", 1)[1].lower()) if "." in name else ""
    if suffix in (".csv", ".txt"):
        return _EXT_MIME[suffix]
    if declared and declared != "application/octet-stream":
        return declared
    return _EXT_MIME.get(suffix) or mimetypes.guess_type(name)[0] or "application/octet-stream"


def to_file_data(name: str, raw: bytes, declared_type: str | None = None) -> FileData:
    """Text files are kept as text; everything else becomes a base64 data URL."""
    mime = guess_mime_type(name, declared_type)
    if mime in TEXT_MIME_TYPES:
        return FileData(name=name, mime_type=mime, data=raw.decode("utf-8", errors="replace"))
    encoded = base64.b64encode(raw).decode("ascii")
    return FileData(name=name, mime_type=mime, data=f"data:{mime};base64,{encoded}")


def read_uploaded_files(uploaded_files: Iterable) -> List[FileData]:
    """Convert Streamlit UploadedFile objects into FileData."""
    out: List[FileData] = []
    for uf in uploaded_files or []:
        name = getattr(uf, "name", "upload")
        out.append(to_file_data(name, uf.getvalue(), getattr(uf, "type", None)))
    return out


def total_size_bytes(files: Iterable[FileData]) -> int:
    total = 0
    for f in files:
        total += len(f.data.encode("utf-8")) if f.is_text else len(f.payload_bytes())
    return total


def format_bytes(n: int) -> str:
    units = ["B", "KB", "MB", "GB", "TB"]
    size = float(n)
    for u in units:
        if size < 1024.0 or u == units[-1]:
            return f"{size:.1f} {u}"
        size /= 1024.0
    return f"{n} B"
