from __future__ import annotations

import time
from typing import Any, Dict, List, Sequence

from nysc_extract.config import (
    DEFAULT_ATTENDANCE_TYPE,
    DEFAULT_DAY,
    MANUAL_ID_PREFIX,
    UNASSIGNED_PPA,
)
from nysc_extract.models import CorpsMember
from nysc_extract.post_processing import to_int, normalize_gender

EDITABLE_FIELDS = set(CorpsMember.model_fields) - {"id"}


def filter_members(members: Sequence[CorpsMember], search: str = "", ppa_search: str = "") -> List[CorpsMember]:
    """Case-insensitive match on names + state code, and on the PPA."""
    needle = search.strip().lower()
    ppa_needle = ppa_search.strip().lower()
    out: List[CorpsMember] = []
    for m in members:
        haystack = f"{m.surname} {m.first_name} {m.middle_name} {m.state_code}".lower()
        if needle and needle not in haystack:
            continue
        if ppa_needle and ppa_needle not in (m.company_name or "").lower():
            continue
        out.append(m)
    return out


def compute_stats(members: Sequence[CorpsMember]) -> Dict[str, int]:
    males = sum(1 for m in members if m.gender == "M")
    return {"total": len(members), "males": males, "females": len(members) - males}


def ppa_key(company_name: str | None) -> str:
    """Group key for a PPA; blanks and any casing of the unassigned label share one key."""
    name = (company_name or "").strip()
    if not name or name.casefold() == UNASSIGNED_PPA.casefold():
        return UNASSIGNED_PPA
    return name


def group_by_ppa(members: Sequence[CorpsMember]) -> Dict[str, List[CorpsMember]]:
    groups: Dict[str, List[CorpsMember]] = {}
    for m in members:
        groups.setdefault(ppa_key(m.company_name), []).append(m)
    return groups


def group_summaries(members: Sequence[CorpsMember]) -> List[Dict[str, Any]]:
    rows = []
    for name, group in group_by_ppa(members).items():
        rows.append({"ppa": name, **compute_stats(group)})
    return sorted(rows, key=lambda r: r["ppa"])


def next_sn(members: Sequence[CorpsMember]) -> int:
    return max((m.sn for m in members), default=0) + 1


def new_member(members: Sequence[CorpsMember], now: float | None = None) -> CorpsMember:
    stamp = int((time.time() if now is None else now) * 1000)
    return CorpsMember(
        id=f"{MANUAL_ID_PREFIX}{stamp}",
        sn=next_sn(members),
        gender="M",
        attendance_type=DEFAULT_ATTENDANCE_TYPE,
        day=DEFAULT_DAY,
    )


def add_member(members: Sequence[CorpsMember], now: float | None = None) -> List[CorpsMember]:
    # new rows go on top so they are easy to fill in
    return [new_member(members, now), *members]


def update_member(members: Sequence[CorpsMember], member_id: str, field: str, value: Any) -> List[CorpsMember]:
    if field not in EDITABLE_FIELDS:
        raise ValueError(f"Unknown member field: {field}")
    if field == "gender":
        value = normalize_gender(value)
    elif field == "sn":
        value = to_int(value)
    elif CorpsMember.model_fields[field].default == "":
        value = "" if value is None else str(value)
    elif value is not None:
        value = str(value)
    return [m.model_copy(update={field: value}) if m.id == member_id else m for m in members]


def remove_member(members: Sequence[CorpsMember], member_id: str) -> List[CorpsMember]:
    return [m for m in members if m.id != member_id]


# ---------------------------
# Table editor round-trip
# ---------------------------
TABLE_FIELDS = [
    "id", "sn", "state_code", "surname", "first_name", "middle_name",
    "gender", "company_name", "phone", "attendance_type", "day",
]


def to_rows(members: Sequence[CorpsMember]) -> List[Dict[str, Any]]:
    return [{f: getattr(m, f) for f in TABLE_FIELDS} for m in members]


def merge_edits(
    members: Sequence[CorpsMember],
    visible_ids: Sequence[str],
    edited_rows: Sequence[Dict[str, Any]],
    now: float | None = None,
) -> List[CorpsMember]:
    """Fold the rows of a (possibly filtered) table editor back into `members`.

    Rows hidden by the filter are untouched. A visible id missing from
    `edited_rows` was deleted in the editor. Rows without an id were added in
    the editor and become manual members on top of the list.
    """
    visible = set(visible_ids)
    by_id = {str(r.get("id")): r for r in edited_rows if _has_id(r)}
    out: List[CorpsMember] = []
    for m in members:
        if m.id not in visible:
            out.append(m)
        elif m.id in by_id:
            out.append(_apply_row(m, by_id[m.id]))

    added = []
    for row in edited_rows:
        if _has_id(row):
            continue
        fresh = new_member([*out, *added], now)
        fresh = fresh.model_copy(update={"id": f"{fresh.id}-{len(added)}"})
        added.append(_apply_row(fresh, {k: v for k, v in row.items() if k != "sn" or to_int(v)}))
    return [*added, *out]


def _has_id(row: Dict[str, Any]) -> bool:
    v = row.get("id")
    return isinstance(v, str) and bool(v.strip())


def _apply_row(member: CorpsMember, row: Dict[str, Any]) -> CorpsMember:
    members = [member]
    for field in TABLE_FIELDS:
        if field == "id" or field not in row:
            continue
        if getattr(member, field) != row[field]:
            members = update_member(members, member.id, field, _blank_nan(row[field]))
    return members[0]


def _blank_nan(v: Any) -> Any:
    # pandas hands back NaN for cleared cells
    return None if isinstance(v, float) and v != v else v
