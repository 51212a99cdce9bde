from __future__ import annotations

from nysc_extract.post_processing import (
    normalize_gender,
    normalize_members,
    normalize_metadata,
    normalize_response,
    split_full_name,
)


def test_gender_coercion_defaults_to_male():
    assert normalize_gender("female") == "F"
    assert normalize_gender("f") == "F"
    assert normalize_gender("Male") == "M"
    assert normalize_gender("") == "M"
    assert normalize_gender(None) == "M"
    assert normalize_gender("unknown") == "M"


def test_split_full_name_keeps_extra_tokens_in_middle_name():
    assert split_full_name("OKAFOR CHIDI JAMES PAUL") == ("OKAFOR", "CHIDI", "JAMES PAUL")
    assert split_full_name("OKAFOR") == ("OKAFOR", "", "")
    assert split_full_name("") == ("", "", "")
    assert split_full_name("OKAFOR, CHIDI") == ("OKAFOR", "CHIDI", "")


def test_members_are_uppercased_defaulted_and_sorted():
    raw = [
        {"id": "x2", "sn": 2, "stateCode": " ta/24b/0002 ", "fullName": "bello musa",
         "gender": "male", "phone": " 0803 ", "companyName": ""},
        {"id": "x1", "sn": "1", "stateCode": "TA/24B/0001", "fullName": "adeyemi tolu grace",
         "gender": "Female", "phone": "0802", "companyName": "mani lga"},
    ]
    out = normalize_members(raw)

    assert [m.id for m in out] == ["x1", "x2"]
    first, second = out
    assert (first.surname, first.first_name, first.middle_name) == ("ADEYEMI", "TOLU", "GRACE")
    assert first.gender == "F"
    assert first.company_name == "MANI LGA"
    assert second.company_name == "UNASSIGNED"
    assert second.state_code == "TA/24B/0002"
    assert second.phone == "0803"


def test_explicit_name_parts_win_over_full_name():
    out = normalize_members([
        {"id": "1", "sn": 1, "fullName": "A B C", "surname": "Okoro", "firstName": "Ada"},
    ])
    assert (out[0].surname, out[0].first_name, out[0].middle_name) == ("OKORO", "ADA", "C")


def test_missing_and_duplicate_ids_are_replaced():
    out = normalize_members([
        {"id": "dup", "sn": 1, "fullName": "A"},
        {"id": "dup", "sn": 2, "fullName": "B"},
        {"sn": 3, "fullName": "C"},
    ])
    ids = [m.id for m in out]
    assert ids[0] == "dup"
    assert len(set(ids)) == 3
    assert all(ids)


def test_bad_serials_become_zero_and_sort_first():
    out = normalize_members([
        {"id": "a", "sn": 5, "fullName": "A"},
        {"id": "b", "sn": "n/a", "fullName": "B"},
        {"id": "c", "fullName": "C"},
    ])
    assert [m.id for m in out] == ["b", "c", "a"]
    assert out[0].sn == 0


def test_non_dict_entries_are_skipped():
    out = normalize_members([None, "junk", {"id": "a", "sn": 1, "fullName": "A"}])
    assert [m.id for m in out] == ["a"]


def test_metadata_is_none_when_empty():
    assert normalize_metadata(None) is None
    assert normalize_metadata({"lga": "", "title": "-"}) is None
    meta = normalize_metadata({"lga": "Mani", "batchInfo": "Batch A"})
    assert meta.lga == "Mani"
    assert meta.batch_info == "Batch A"
    assert meta.title is None


def test_response_tolerates_missing_members():
    resp = normalize_response({"metadata": {"title": "Clearance"}})
    assert resp.members == []
    assert resp.metadata.title == "Clearance"
