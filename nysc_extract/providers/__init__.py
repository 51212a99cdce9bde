from __future__ import annotations
from typing import Dict, Callable
from .base import RecordExtractor
from .gemini_provider import GeminiProvider

REGISTRY: Dict[str, Callable[..., RecordExtractor]] = {
    "gemini": lambda **kw: GeminiProvider(api_key=kw.get("gemini_api_key"), model=kw.get("gemini_model")),
}

def get_provider(name: str, **kwargs) -> RecordExtractor:
    try:
        ctor = REGISTRY[name]
    except KeyError:
        raise ValueError(f"Unknown provider: {name}")
    return ctor(**kwargs)

__all__ = ["REGISTRY", "RecordExtractor", "GeminiProvider", "get_provider"]
