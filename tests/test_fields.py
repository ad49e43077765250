"""Tests for the storage/wire field codec."""

import pytest

from starship_sheets.domain.errors import InvalidFieldError
from starship_sheets.domain.fields import (
    SHEET_FIELDS,
    STORAGE_FIELDS,
    WIRE_FIELDS,
    from_wire,
    storage_name_of,
    to_wire,
    wire_name_of,
)
from starship_sheets.domain.sheets import SheetRecord


def test_every_field_round_trips_and_mapping_is_injective() -> None:
    for storage_name in STORAGE_FIELDS:
        assert storage_name_of(wire_name_of(storage_name)) == storage_name

    assert len(set(WIRE_FIELDS)) == len(SHEET_FIELDS) == 18
    assert len(set(STORAGE_FIELDS)) == len(SHEET_FIELDS)


def test_known_names_translate() -> None:
    assert storage_name_of("shipName") == "ship_name"
    assert storage_name_of("magicOfficer") == "magic_officer"
    assert wire_name_of("hit_points") == "hitPoints"


def test_unknown_names_raise_invalid_field() -> None:
    with pytest.raises(InvalidFieldError) as excinfo:
        storage_name_of("warpCoreStatus")
    assert excinfo.value.field == "warpCoreStatus"

    with pytest.raises(InvalidFieldError):
        wire_name_of("warp_core_status")


def test_to_wire_includes_every_field() -> None:
    record = SheetRecord(uuid="r1", captain="Kirk", science_officer="Spock")

    wire = to_wire(record)

    assert set(wire) == set(WIRE_FIELDS)
    assert wire["captain"] == "Kirk"
    assert wire["scienceOfficer"] == "Spock"
    assert wire["shipName"] == ""


def test_from_wire_blanks_missing_and_null_values_and_drops_unknown_keys() -> None:
    fields = from_wire({"shipName": "Enterprise", "pilot": None, "warpCore": "x"})

    assert set(fields) == set(STORAGE_FIELDS)
    assert fields["ship_name"] == "Enterprise"
    assert fields["pilot"] == ""
    assert fields["notes"] == ""
