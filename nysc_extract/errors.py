from __future__ import annotations

import re
from typing import Pattern, Sequence, Tuple


class ExtractionError(RuntimeError):
    """Raised when documents cannot be turned into a member list."""


# First match wins; patterns are searched in the lowercased message.
# "rate" is matched as a word so "generate_content" does not count.
_MESSAGE_MAP: Sequence[Tuple[Pattern[str], str]] = (
    (
        re.compile(r"api[ _]key|permission|unauthenticated|401|403"),
        "The Gemini API key is missing or invalid. Set GEMINI_API_KEY and try again.",
    ),
    (
        re.compile(r"quota|429|resource[ _]exhausted|\brate\b|ratelimit"),
        "The AI service is rate limiting requests. Wait a minute and try again.",
    ),
    (
        re.compile(r"json|empty content|malformed"),
        "The AI reply could not be read as a member list. Try a clearer scan.",
    ),
    (
        re.compile(r"network|connection|timeout|timed out|fetch"),
        "Could not reach the AI service. Check your connection and try again.",
    ),
    (
        re.compile(r"too large|413|size"),
        "The upload is too large. Split the documents and try again.",
    ),
)


def describe_extraction_error(exc: BaseException) -> str:
    """Map an extraction failure to a message fit for the error banner."""
    message = str(exc) or exc.__class__.__name__
    lowered = message.lower()
    for pattern, friendly in _MESSAGE_MAP:
        if pattern.search(lowered):
            return friendly
    return f"Extraction failed: {message}"
