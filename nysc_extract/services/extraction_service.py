from __future__ import annotations

import json
import logging
from typing import Any, Callable, List, Optional, Sequence

from google.genai import types

from nysc_extract.errors import ExtractionError
from nysc_extract.models import ExtractionResponse, FileData
from nysc_extract.post_processing import normalize_response
from nysc_extract.providers import RecordExtractor, get_provider
from nysc_extract.settings import get_settings

logger = logging.getLogger(__name__)

EXTRACTION_PROMPT = """
TASK: Extract list-based data from the provided documents.
CONTEXT: personnel lists or clearance documents.
Columns: Serial Number (SN), State Code, Full Name, Gender, Phone, and PPA.
Note: PPA name might appear once as a header above a table. Assign it to everyone in that group.
If the document header names a Local Government Area, batch, title or print date, return them in "metadata".
Return JSON with a "members" array.
""".strip()

_STR = types.Schema(type=types.Type.STRING)

MEMBER_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "id": _STR,
        "sn": types.Schema(type=types.Type.NUMBER),
        "stateCode": _STR,
        "fullName": _STR,
        "gender": _STR,
        "phone": _STR,
        "companyName": _STR,
    },
    required=["id", "sn", "stateCode", "fullName", "gender", "phone", "companyName"],
)

METADATA_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "lga": _STR,
        "batchInfo": _STR,
        "title": _STR,
        "datePrinted": _STR,
    },
)

RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "members": types.Schema(type=types.Type.ARRAY, items=MEMBER_SCHEMA),
        "metadata": METADATA_SCHEMA,
    },
    required=["members"],
)


def build_parts(files: Sequence[FileData]) -> List[types.Part]:
    """Text files go in as text; scans and PDFs go in as inline bytes."""
    parts: List[types.Part] = []
    for f in files:
        if f.is_text:
            parts.append(types.Part.from_text(text=f"File Name: {f.name}\nContent:\n{f.data}"))
        else:
            parts.append(types.Part.from_bytes(data=f.payload_bytes(), mime_type=f.mime_type))
    return parts


def parse_reply(text: Optional[str]) -> ExtractionResponse:
    """Decode the model's JSON reply and normalize the member list."""
    if not text or not text.strip():
        raise ExtractionError("AI returned empty content")
    try:
        payload: Any = json.loads(text)
    except json.JSONDecodeError as e:
        raise ExtractionError(f"AI returned malformed JSON: {e}") from e
    if not isinstance(payload, dict):
        raise ExtractionError("AI returned malformed JSON: expected an object")
    return normalize_response(payload)


def extract_corps_data(
    files: Sequence[FileData],
    provider: RecordExtractor | None = None,
    on_step: Callable[[str], None] | None = None,
) -> ExtractionResponse:
    """Send uploaded documents to the AI model and return normalized members.

    `on_step` is called with "scanning", "extracting" and "validating" as the
    request progresses. Any failure is logged and re-raised.
    """
    if not files:
        raise ExtractionError("No documents to extract")

    step = on_step or (lambda _s: None)
    try:
        step("scanning")
        parts = build_parts(files)
        parts.append(types.Part.from_text(text=EXTRACTION_PROMPT))

        if provider is None:
            settings = get_settings()
            provider = get_provider(settings.default_provider, **settings.model_dump())

        step("extracting")
        logger.info("Extracting members from %d file(s) with %s", len(files), provider.name)
        text = provider.generate_json(parts, RESPONSE_SCHEMA)

        step("validating")
        result = parse_reply(text)
    except Exception:
        logger.exception("Extraction failed")
        raise

    logger.info("Extracted %d member(s)", len(result.members))
    return result
