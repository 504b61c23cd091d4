"""
Test the mass correction tag table.
"""

import pytest

from phrp_utils.constants import DEFAULT_MASS_CORRECTION_TAGS, MASS_CORRECTION_TAG_LENGTH
from phrp_utils.modifications import MassCorrectionTagTable
from phrp_utils.modifications.tags import format_unknown_tag_name, parse_unknown_tag_number


def test_default_tags_loaded():
    tags = MassCorrectionTagTable()
    assert len(tags) == len(DEFAULT_MASS_CORRECTION_TAGS)
    assert tags.get_mass("Phosph") == pytest.approx(79.966331)
    assert "Acetyl" in tags


def test_lookup_known_mass():
    tags = MassCorrectionTagTable()
    assert tags.lookup_or_create(79.9663) == "Phosph"


def test_lookup_same_unknown_mass_is_stable():
    tags = MassCorrectionTagTable(tags={})
    first = tags.lookup_or_create(123.4567)
    second = tags.lookup_or_create(123.4567)
    assert first == "UnkMod01"
    assert second == first
    assert len(tags) == 1


def test_unknown_name_escalation():
    tags = MassCorrectionTagTable(tags={})
    names = [tags.lookup_or_create(1000.0 + i) for i in range(100)]

    assert names[0] == "UnkMod01"
    assert names[98] == "UnkMod99"
    assert names[99] == "Unk00100"
    assert len(set(names)) == 100
    assert all(len(name) == MASS_CORRECTION_TAG_LENGTH for name in names)


def test_next_name_follows_largest_number():
    tags = MassCorrectionTagTable(tags={"UnkMod05": 500.0})
    assert tags.lookup_or_create(600.0) == "UnkMod06"


def test_format_and_parse_unknown_names():
    assert format_unknown_tag_name(7) == "UnkMod07"
    assert format_unknown_tag_name(100000) == "U0100000"
    assert parse_unknown_tag_number("Unk00123") == 123
    assert parse_unknown_tag_number("Phosph") is None


def test_mass_tolerance_boundary():
    tags = MassCorrectionTagTable(tags={"Phosph": 79.966331})
    shifted = 79.966331 + 0.001

    assert tags.lookup_or_create(shifted, precision=3, create_if_missing=False, loose_precision=3) == ""
    assert tags.lookup_or_create(shifted, precision=2, create_if_missing=False, loose_precision=2) == "Phosph"


def test_loose_precision_fallback():
    tags = MassCorrectionTagTable(tags={"Phosph": 79.966331})
    assert tags.lookup_or_create(79.99, precision=3, create_if_missing=False) == "Phosph"
    # Clamped to at least one digit
    assert tags.lookup_or_create(80.2, precision=3, create_if_missing=False, loose_precision=0) == ""


def test_no_match_without_create():
    tags = MassCorrectionTagTable(tags={})
    assert tags.lookup_or_create(10.0, create_if_missing=False) == ""
    assert len(tags) == 0


def test_duplicate_name_keeps_first_mass():
    tags = MassCorrectionTagTable(tags={})
    assert tags.store("Phosph", 79.966331)
    assert not tags.store("Phosph", 1.0)
    assert tags.get_mass("Phosph") == pytest.approx(79.966331)


def test_read_file(tmp_path):
    path = tmp_path / "tags.txt"
    path.write_text(
        "Phosph\t79.966331\nBadLine\nPlus1Oxy\tabc\nAcetyl\t42.010567\nPhosph\t1.0\n",
        encoding="utf-8",
    )
    tags = MassCorrectionTagTable()
    success, file_not_found = tags.read_file(str(path))

    assert success
    assert not file_not_found
    assert len(tags) == 2
    assert tags.get_mass("Phosph") == pytest.approx(79.966331)


def test_read_missing_file_restores_defaults(tmp_path):
    tags = MassCorrectionTagTable(tags={})
    success, file_not_found = tags.read_file(str(tmp_path / "missing.txt"))

    assert not success
    assert file_not_found
    assert len(tags) == len(DEFAULT_MASS_CORRECTION_TAGS)


def test_read_empty_file_restores_defaults(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("", encoding="utf-8")
    tags = MassCorrectionTagTable.from_file(str(path))
    assert len(tags) == len(DEFAULT_MASS_CORRECTION_TAGS)


def test_read_undecodable_file_restores_defaults(tmp_path):
    path = tmp_path / "tags_cp1252.txt"
    path.write_bytes("Caf\xe9\t1.0\n".encode("cp1252"))
    tags = MassCorrectionTagTable(tags={})
    success, file_not_found = tags.read_file(str(path))

    assert not success
    assert not file_not_found
    assert len(tags) == len(DEFAULT_MASS_CORRECTION_TAGS)
