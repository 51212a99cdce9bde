from __future__ import annotations

import base64
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from nysc_extract.config import DEFAULT_METADATA, MANUAL_ID_PREFIX, TEXT_MIME_TYPES

Gender = Literal["M", "F"]
ProcessingStep = Literal["idle", "scanning", "extracting", "validating"]


class _CamelModel(BaseModel):
    # Accept both the AI's camelCase keys and our snake_case names
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CorpsMember(_CamelModel):
    id: str
    sn: int = 0
    state_code: str = ""
    surname: str = ""
    first_name: str = ""
    middle_name: str = ""
    gender: Gender = "M"
    phone: str = ""
    company_name: str = ""
    attendance_date: Optional[str] = None
    attendance_type: Optional[str] = None
    day: Optional[str] = None

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.surname, self.first_name, self.middle_name) if p)

    @property
    def is_manual(self) -> bool:
        return self.id.startswith(MANUAL_ID_PREFIX)


class ExtractionMetadata(_CamelModel):
    lga: Optional[str] = None
    batch_info: Optional[str] = None
    title: Optional[str] = None
    date_printed: Optional[str] = None

    def merged(self, other: Optional["ExtractionMetadata"]) -> "ExtractionMetadata":
        """Return a copy where the non-empty fields of `other` win."""
        if other is None:
            return self.model_copy()
        updates = {k: v for k, v in other.model_dump().items() if v}
        return self.model_copy(update=updates)

    @classmethod
    def defaults(cls) -> "ExtractionMetadata":
        return cls(**DEFAULT_METADATA)


class ExtractionResponse(_CamelModel):
    members: List[CorpsMember] = Field(default_factory=list)
    metadata: Optional[ExtractionMetadata] = None


class AppState(_CamelModel):
    is_processing: bool = False
    processing_step: ProcessingStep = "idle"
    data: List[CorpsMember] = Field(default_factory=list)
    metadata: ExtractionMetadata = Field(default_factory=ExtractionMetadata.defaults)
    error: Optional[str] = None
    selected_group: Optional[str] = None


class FileData(BaseModel):
    """An uploaded file ready for the extraction request.

    `data` is raw text for CSV/plain-text files and base64 (optionally a
    `data:<mime>;base64,` URL) for everything else.
    """

    data: str
    mime_type: str
    name: str

    @property
    def is_text(self) -> bool:
        return self.mime_type in TEXT_MIME_TYPES

    def payload_bytes(self) -> bytes:
        raw = self.data.split(",", 1)[1] if "," in self.data else self.data
        return base64.b64decode(raw)
