from __future__ import annotations

import math

import pytest

from nysc_extract.post_processing import normalize_members
from nysc_extract.services import roster


def test_search_matches_names_and_state_code_case_insensitively(members):
    assert [m.id for m in roster.filter_members(members, search="bello")] == ["a2"]
    assert [m.id for m in roster.filter_members(members, search="kt/24b")] == ["a4"]
    assert [m.id for m in roster.filter_members(members, search="tolu grace")] == ["a1"]
    assert roster.filter_members(members) == members


def test_ppa_filter_combines_with_search(members):
    assert [m.id for m in roster.filter_members(members, ppa_search="secondary")] == ["a1", "a2"]
    assert [m.id for m in roster.filter_members(members, search="musa", ppa_search="secondary")] == ["a2"]
    assert roster.filter_members(members, search="musa", ppa_search="health") == []


def test_stats_count_everyone_not_male_as_female(members):
    assert roster.compute_stats(members) == {"total": 4, "males": 2, "females": 2}
    assert roster.compute_stats([]) == {"total": 0, "males": 0, "females": 0}


def test_group_by_ppa_keeps_first_seen_order(members):
    groups = roster.group_by_ppa(members)
    assert list(groups) == ["GOVT SECONDARY SCHOOL MANI", "MANI LGA SECRETARIAT", "PRIMARY HEALTH CENTRE"]
    assert [m.id for m in groups["GOVT SECONDARY SCHOOL MANI"]] == ["a1", "a2"]


def test_blank_ppa_groups_under_unassigned(members):
    blank = members[0].model_copy(update={"company_name": ""})
    assert list(roster.group_by_ppa([blank])) == ["Unassigned"]


def test_extracted_and_manual_rows_without_ppa_share_one_group():
    extracted = normalize_members([{"sn": 1, "fullName": "BELLO MUSA", "gender": "M", "companyName": ""}])
    assert extracted[0].company_name == "UNASSIGNED"

    groups = roster.group_by_ppa(roster.add_member(extracted, now=1.0))

    assert list(groups) == ["Unassigned"]
    assert len(groups["Unassigned"]) == 2
    assert roster.group_summaries(extracted)[0]["ppa"] == "Unassigned"


def test_group_summaries_are_sorted_with_counts(members):
    rows = roster.group_summaries(members)
    assert [r["ppa"] for r in rows] == sorted(r["ppa"] for r in rows)
    school = rows[0]
    assert school == {"ppa": "GOVT SECONDARY SCHOOL MANI", "total": 2, "males": 1, "females": 1}


def test_new_member_goes_on_top_with_next_serial(members):
    out = roster.add_member(members, now=1_700_000_000.5)
    fresh = out[0]
    assert fresh.id == "manual-1700000000500"
    assert fresh.is_manual
    assert fresh.sn == 5
    assert fresh.gender == "M"
    assert fresh.attendance_type == "Clearance"
    assert fresh.day == "Monday"
    assert out[1:] == members


def test_first_manual_member_gets_serial_one():
    assert roster.new_member([], now=0).sn == 1


def test_update_member_coerces_values(members):
    out = roster.update_member(members, "a2", "gender", "female")
    assert out[1].gender == "F"
    out = roster.update_member(out, "a2", "sn", "12")
    assert out[1].sn == 12
    out = roster.update_member(out, "a2", "phone", None)
    assert out[1].phone == ""
    assert members[1].gender == "M"  # original untouched


def test_update_member_rejects_unknown_fields(members):
    with pytest.raises(ValueError):
        roster.update_member(members, "a1", "id", "x")
    with pytest.raises(ValueError):
        roster.update_member(members, "a1", "salary", 1)


def test_remove_member(members):
    assert [m.id for m in roster.remove_member(members, "a3")] == ["a1", "a2", "a4"]
    assert roster.remove_member(members, "missing") == members


def test_merge_edits_applies_changes_and_deletions_to_visible_rows(members):
    visible = members[:2]
    rows = roster.to_rows(visible)
    rows[0]["phone"] = "09011112222"
    del rows[1]  # a2 deleted in the editor

    out = roster.merge_edits(members, [m.id for m in visible], rows)

    assert [m.id for m in out] == ["a1", "a3", "a4"]
    assert out[0].phone == "09011112222"
    assert out[1:] == members[2:]


def test_merge_edits_turns_new_editor_rows_into_manual_members(members):
    rows = roster.to_rows(members)
    rows.append({"id": None, "sn": math.nan, "surname": "EZE", "gender": "F", "phone": math.nan})

    out = roster.merge_edits(members, [m.id for m in members], rows, now=10)

    added = out[0]
    assert added.is_manual
    assert added.surname == "EZE"
    assert added.gender == "F"
    assert added.sn == 5
    assert added.phone == ""
    assert out[1:] == members


def test_merge_edits_without_changes_is_identity(members):
    out = roster.merge_edits(members, [m.id for m in members], roster.to_rows(members))
    assert out == members
