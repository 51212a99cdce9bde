from __future__ import annotations
from typing import Protocol, Any, Sequence

class RecordExtractor(Protocol):
    name: str
    def generate_json(self, parts: Sequence[Any], schema: Any) -> str:
        ...
