"""Sheet persistence business logic."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol
from uuid import uuid4

from starship_sheets.domain.errors import SheetNotFoundError
from starship_sheets.domain.fields import (
    empty_fields,
    from_wire,
    storage_name_of,
    to_wire,
)
from starship_sheets.domain.sheets import SheetRecord

_logger = logging.getLogger(__name__)


class SheetRepository(Protocol):
    """Persistence interface for starship sheets."""

    def get_sheet(self, sheet_id: str) -> SheetRecord | None:
        """Return a sheet by id, if present."""

    def create_sheet(self, sheet_id: str, fields: dict[str, str]) -> SheetRecord:
        """Create a sheet row with the given storage-named fields."""

    def replace_sheet(
        self, sheet_id: str, fields: dict[str, str]
    ) -> SheetRecord | None:
        """Overwrite every field of a sheet and return it, if present."""

    def update_field(self, sheet_id: str, storage_field: str, value: str) -> bool:
        """Update one column; return false when no row matched."""


@dataclass
class SheetService:
    """Application service for sheet lifecycle and field edits.

    Public methods take and return wire-named fields; the repository only
    ever sees storage names.
    """

    repository: SheetRepository

    def create_sheet(self, defaults: Mapping[str, object] | None = None) -> SheetRecord:
        """Create a sheet under a fresh identifier."""
        fields = from_wire(defaults) if defaults else empty_fields()
        sheet = self.repository.create_sheet(str(uuid4()), fields)
        _logger.info("Created sheet %s", sheet.uuid)
        return sheet

    def ensure_sheet(self, sheet_id: str) -> SheetRecord:
        """Return the sheet for an id, creating an empty one on a miss.

        Two callers may miss on the same id at once; the one whose insert
        loses reads back the row the other created.
        """
        existing = self.repository.get_sheet(sheet_id)
        if existing:
            return existing
        _logger.info("Creating missing sheet %s with defaults", sheet_id)
        try:
            return self.repository.create_sheet(sheet_id, empty_fields())
        except Exception:
            created = self.repository.get_sheet(sheet_id)
            if created is None:
                raise
            _logger.info("Sheet %s was created concurrently", sheet_id)
            return created

    def get_sheet(self, sheet_id: str) -> SheetRecord:
        """Return a sheet or raise when the id is unknown."""
        sheet = self.repository.get_sheet(sheet_id)
        if sheet is None:
            raise SheetNotFoundError(sheet_id)
        return sheet

    def get_wire_sheet(self, sheet_id: str) -> dict[str, str]:
        """Return the wire-named snapshot of a sheet."""
        return to_wire(self.get_sheet(sheet_id))

    def replace_sheet(
        self, sheet_id: str, payload: Mapping[str, object]
    ) -> dict[str, str]:
        """Overwrite all fields from a wire payload and return the result."""
        self.get_sheet(sheet_id)
        updated = self.repository.replace_sheet(sheet_id, from_wire(payload))
        if updated is None:
            raise SheetNotFoundError(sheet_id)
        return to_wire(updated)

    def update_field(self, sheet_id: str, wire_field: str, value: str) -> None:
        """Persist a single wire-named field edit."""
        storage_field = storage_name_of(wire_field)
        if not self.repository.update_field(sheet_id, storage_field, value):
            raise SheetNotFoundError(sheet_id)
