from __future__ import annotations

# ---------------------------
# Gemini Configuration
# ---------------------------
# Request options for the extraction call only. The model name and key come
# from settings.

GENERATION_OPTIONS = {
    "response_mime_type": "application/json",
}

# Upload types accepted by the file picker, and the mime types sent as text
UPLOAD_TYPES = ["pdf", "png", "jpg", "jpeg", "webp", "csv", "txt"]
TEXT_MIME_TYPES = {"text/csv", "text/plain"}


# ---------------------------
# Record Defaults
# ---------------------------
UNASSIGNED_PPA = "Unassigned"
DEFAULT_ATTENDANCE_TYPE = "Clearance"
DEFAULT_DAY = "Monday"
MANUAL_ID_PREFIX = "manual-"

DEFAULT_METADATA = {
    "lga": "Mani Local Government",
    "batch_info": "Batch B Stream 1 and 2, December 2025",
    "title": "Monthly Clearance",
    "date_printed": "December 22, 2025",
}


# ---------------------------
# PDF Templates
# ---------------------------
# RGB tuples (0-255). Converted to reportlab colors by the export service.
PLAIN_PDF = {
    "header_fill": (30, 41, 59),
    "header_text": (255, 255, 255),
    "stripe_fill": (241, 245, 249),
    "font_size": 10,
}

OFFICIAL_PDF = {
    "brand_green": (0, 104, 55),
    "rule_blue": (0, 0, 255),
    "date_grey": (80, 80, 80),
    "heading": "National Youth Service Corps",
    "font_size": 9,
}
