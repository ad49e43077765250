"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from starship_sheets.adapters.supabase_sheet_repository import SupabaseSheetRepository
from starship_sheets.config import Settings
from starship_sheets.services.registry import SessionRegistry
from starship_sheets.services.sheets import SheetService
from starship_sheets.services.sync import SheetSyncService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    sheet_service: SheetService
    session_registry: SessionRegistry
    sync_service: SheetSyncService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    sheet_repository = SupabaseSheetRepository(
        supabase_client, table_name=resolved_settings.sheets_table
    )
    sheet_service = SheetService(sheet_repository)
    session_registry = SessionRegistry()
    sync_service = SheetSyncService(
        registry=session_registry,
        sheet_service=sheet_service,
        persistence_timeout_seconds=resolved_settings.persistence_timeout_seconds,
    )
    return AppContainer(
        settings=resolved_settings,
        sheet_service=sheet_service,
        session_registry=session_registry,
        sync_service=sync_service,
    )
