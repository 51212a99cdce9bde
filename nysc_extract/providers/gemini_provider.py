from __future__ import annotations
from typing import Any, Sequence
import os

from google import genai
from google.genai import types

from nysc_extract.config import GENERATION_OPTIONS
from nysc_extract.errors import ExtractionError
from nysc_extract.settings import get_settings


class GeminiProvider:
    name = "gemini"
    def __init__(self, api_key: str | None = None, model: str | None = None, client: Any = None):
        self.model = model or get_settings().gemini_model
        if client is not None:
            self.client = client
            return
        api_key = api_key or os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
        if not api_key:
            raise ExtractionError("GEMINI_API_KEY missing")
        self.client = genai.Client(api_key=api_key)

    def generate_json(self, parts: Sequence[Any], schema: Any) -> str:
        response = self.client.models.generate_content(
            model=self.model,
            contents=list(parts),
            config=types.GenerateContentConfig(response_schema=schema, **GENERATION_OPTIONS),
        )
        return response.text or ""
