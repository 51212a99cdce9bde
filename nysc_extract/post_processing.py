from __future__ import annotations

import uuid
from typing import Any, Dict, Iterable, List, Optional, Tuple

from nysc_extract.config import UNASSIGNED_PPA
from nysc_extract.models import CorpsMember, ExtractionMetadata, ExtractionResponse

EMPTY_TOKENS = {"", "<empty>", "—", "-", "n/a", "N/A", "null", "None"}


def _clean(s: Any) -> str:
    if s is None: return ""
    s = " ".join(str(s).split())
    return "" if s in EMPTY_TOKENS else s


def to_int(v: Any) -> int:
    try:
        return int(float(str(v).strip()))
    except (TypeError, ValueError, OverflowError):
        return 0


def normalize_gender(v: Any) -> str:
    return "F" if (_clean(v) or "M").upper().startswith("F") else "M"


def split_full_name(full_name: str) -> Tuple[str, str, str]:
    """Lists are printed SURNAME FIRSTNAME MIDDLE...; extra tokens join the middle name."""
    parts = full_name.replace(",", " ").split()
    surname = parts[0] if parts else ""
    first = parts[1] if len(parts) > 1 else ""
    middle = " ".join(parts[2:])
    return surname, first, middle


def normalize_member(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Coerce one AI record into CorpsMember field values (without id)."""
    surname, first, middle = split_full_name(_clean(raw.get("fullName")).upper())
    # explicit name parts beat the split full name
    surname = _clean(raw.get("surname")).upper() or surname
    first = _clean(raw.get("firstName")).upper() or first
    middle = _clean(raw.get("middleName")).upper() or middle

    return {
        "sn": to_int(raw.get("sn")),
        "state_code": _clean(raw.get("stateCode")).upper(),
        "surname": surname,
        "first_name": first,
        "middle_name": middle,
        "gender": normalize_gender(raw.get("gender")),
        "phone": _clean(raw.get("phone")),
        "company_name": (_clean(raw.get("companyName")) or UNASSIGNED_PPA).upper(),
        "attendance_date": _clean(raw.get("attendanceDate")) or None,
        "attendance_type": _clean(raw.get("attendanceType")) or None,
        "day": _clean(raw.get("day")) or None,
    }


def normalize_members(raw_members: Iterable[Dict[str, Any]]) -> List[CorpsMember]:
    """Normalize AI records, give each a unique id and sort by serial number."""
    seen: set[str] = set()
    out: List[CorpsMember] = []
    for raw in raw_members:
        if not isinstance(raw, dict):
            continue
        member_id = _clean(raw.get("id"))
        if not member_id or member_id in seen:
            member_id = uuid.uuid4().hex[:12]
        seen.add(member_id)
        out.append(CorpsMember(id=member_id, **normalize_member(raw)))
    # sorted() is stable, so equal serials keep reading order
    return sorted(out, key=lambda m: m.sn)


def normalize_metadata(raw: Optional[Dict[str, Any]]) -> Optional[ExtractionMetadata]:
    if not isinstance(raw, dict):
        return None
    fields = {k: _clean(raw.get(k)) or None for k in ("lga", "batchInfo", "title", "datePrinted")}
    if not any(fields.values()):
        return None
    return ExtractionMetadata(**fields)


def normalize_response(payload: Dict[str, Any]) -> ExtractionResponse:
    members = payload.get("members") or []
    return ExtractionResponse(
        members=normalize_members(members if isinstance(members, list) else []),
        metadata=normalize_metadata(payload.get("metadata")),
    )
