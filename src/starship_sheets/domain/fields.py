"""Field codec between storage (snake_case) and wire (camelCase) names.

Both lookup directions are derived from the single ``SHEET_FIELDS`` table.
Changing an entry is a breaking protocol change for connected clients.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from starship_sheets.domain.errors import InvalidFieldError
from starship_sheets.domain.sheets import SheetRecord


@dataclass(frozen=True)
class SheetField:
    """One form field known to both the store and the wire protocol."""

    storage_name: str
    wire_name: str


SHEET_FIELDS: tuple[SheetField, ...] = (
    SheetField("ship_name", "shipName"),
    SheetField("ship_class", "shipClass"),
    SheetField("ship_desc", "shipDesc"),
    SheetField("armor_class", "armorClass"),
    SheetField("hit_points", "hitPoints"),
    SheetField("shields", "shields"),
    SheetField("reflex_save", "reflexSave"),
    SheetField("fort_save", "fortSave"),
    SheetField("captain", "captain"),
    SheetField("engineer", "engineer"),
    SheetField("gunner", "gunner"),
    SheetField("magic_officer", "magicOfficer"),
    SheetField("pilot", "pilot"),
    SheetField("science_officer", "scienceOfficer"),
    SheetField("medical_officer", "medicalOfficer"),
    SheetField("bonuses", "bonuses"),
    SheetField("description", "description"),
    SheetField("notes", "notes"),
)

STORAGE_FIELDS: tuple[str, ...] = tuple(field.storage_name for field in SHEET_FIELDS)
WIRE_FIELDS: tuple[str, ...] = tuple(field.wire_name for field in SHEET_FIELDS)

_BY_WIRE = {field.wire_name: field.storage_name for field in SHEET_FIELDS}
_BY_STORAGE = {field.storage_name: field.wire_name for field in SHEET_FIELDS}

if len(_BY_WIRE) != len(SHEET_FIELDS) or len(_BY_STORAGE) != len(SHEET_FIELDS):
    raise RuntimeError("Sheet field table must be one-to-one")


def storage_name_of(wire_name: str) -> str:
    """Return the storage column for a wire field name."""
    try:
        return _BY_WIRE[wire_name]
    except KeyError:
        raise InvalidFieldError(wire_name) from None


def wire_name_of(storage_name: str) -> str:
    """Return the wire field name for a storage column."""
    try:
        return _BY_STORAGE[storage_name]
    except KeyError:
        raise InvalidFieldError(storage_name) from None


def to_wire(record: SheetRecord) -> dict[str, str]:
    """Translate a stored sheet into the full wire-named field mapping."""
    return {
        field.wire_name: getattr(record, field.storage_name) or ""
        for field in SHEET_FIELDS
    }


def from_wire(payload: Mapping[str, object]) -> dict[str, str]:
    """Translate a wire payload into a complete storage-named mapping.

    Missing or null values become empty strings; unknown keys are dropped.
    """
    fields: dict[str, str] = {}
    for field in SHEET_FIELDS:
        value = payload.get(field.wire_name)
        fields[field.storage_name] = "" if value is None else str(value)
    return fields


def empty_fields() -> dict[str, str]:
    """Return the default storage mapping with every field blank."""
    return dict.fromkeys(STORAGE_FIELDS, "")
