"""Domain models for starship sheets."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SheetRecord:
    """Represents a persisted starship sheet.

    Every form field is a string and defaults to empty; a field is never
    absent, only blank.
    """

    uuid: str
    ship_name: str = ""
    ship_class: str = ""
    ship_desc: str = ""
    armor_class: str = ""
    hit_points: str = ""
    shields: str = ""
    reflex_save: str = ""
    fort_save: str = ""
    captain: str = ""
    engineer: str = ""
    gunner: str = ""
    magic_officer: str = ""
    pilot: str = ""
    science_officer: str = ""
    medical_officer: str = ""
    bonuses: str = ""
    description: str = ""
    notes: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
