"""REST endpoints for reading and writing whole sheets."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Body, HTTPException, Request, status
from pydantic import BaseModel

from starship_sheets.domain.errors import InvalidFieldError, SheetNotFoundError

if TYPE_CHECKING:
    from starship_sheets.containers import AppContainer

router = APIRouter(prefix="/api/sheet", tags=["sheets"])


class FieldPatch(BaseModel):
    """Single field edit submitted over HTTP."""

    field: str
    value: str


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sheet not found")


@router.get("/{sheet_id}")
def get_sheet(sheet_id: str, request: Request) -> dict[str, str]:
    """Return the wire-named fields of a sheet."""
    container: AppContainer = request.app.state.container
    try:
        return container.sheet_service.get_wire_sheet(sheet_id)
    except SheetNotFoundError:
        raise _not_found() from None


@router.put("/{sheet_id}")
def replace_sheet(
    sheet_id: str,
    request: Request,
    payload: dict[str, str | None] = Body(...),
) -> dict[str, str]:
    """Overwrite every field of a sheet; omitted fields become blank."""
    container: AppContainer = request.app.state.container
    try:
        return container.sheet_service.replace_sheet(sheet_id, payload)
    except SheetNotFoundError:
        raise _not_found() from None


@router.patch("/{sheet_id}")
def patch_field(
    sheet_id: str, patch: FieldPatch, request: Request
) -> dict[str, bool]:
    """Persist one field edit."""
    container: AppContainer = request.app.state.container
    try:
        container.sheet_service.get_sheet(sheet_id)
        container.sheet_service.update_field(sheet_id, patch.field, patch.value)
    except SheetNotFoundError:
        raise _not_found() from None
    except InvalidFieldError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from None
    return {"success": True}
