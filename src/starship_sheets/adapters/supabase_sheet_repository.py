"""Supabase-backed sheet repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from starship_sheets.domain.fields import STORAGE_FIELDS
from starship_sheets.domain.sheets import SheetRecord
from starship_sheets.services.sheets import SheetRepository

_SHEET_COLUMNS = ", ".join(("uuid", *STORAGE_FIELDS, "created_at", "updated_at"))


@dataclass
class SupabaseSheetRepository(SheetRepository):
    """Supabase implementation for starship sheets."""

    client: Client
    table_name: str = "starship_sheets"

    def get_sheet(self, sheet_id: str) -> SheetRecord | None:
        """Return a sheet by id, if present."""
        response = (
            self.client.table(self.table_name)
            .select(_SHEET_COLUMNS)
            .eq("uuid", sheet_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def create_sheet(self, sheet_id: str, fields: dict[str, str]) -> SheetRecord:
        """Insert a sheet row and return it."""
        response = (
            self.client.table(self.table_name)
            .insert({"uuid": sheet_id, **_column_values(fields)})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create sheet")
        return _parse_row(response.data[0])

    def replace_sheet(
        self, sheet_id: str, fields: dict[str, str]
    ) -> SheetRecord | None:
        """Overwrite every field of a sheet."""
        response = (
            self.client.table(self.table_name)
            .update(
                {
                    **_column_values(fields),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("uuid", sheet_id)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def update_field(self, sheet_id: str, storage_field: str, value: str) -> bool:
        """Update one column and the updated_at timestamp."""
        if storage_field not in STORAGE_FIELDS:
            raise ValueError(f"Unknown sheet column: {storage_field}")
        response = (
            self.client.table(self.table_name)
            .update(
                {
                    storage_field: value,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("uuid", sheet_id)
            .execute()
        )
        return bool(response.data)


def _column_values(fields: dict[str, str]) -> dict[str, str]:
    return {column: fields.get(column) or "" for column in STORAGE_FIELDS}


def _parse_timestamp(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def _parse_row(row: dict[str, object]) -> SheetRecord:
    values = {column: str(row.get(column) or "") for column in STORAGE_FIELDS}
    return SheetRecord(
        uuid=str(row["uuid"]),
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
        **values,
    )
