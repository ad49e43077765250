"""Per-connection sync protocol for live sheet editing.

Each connection moves UNJOINED -> JOINED -> CLOSED. An edit is persisted
before it is relayed, so any peer that re-reads the sheet after seeing a
relayed edit observes it in the store.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from starship_sheets.domain.errors import (
    InvalidFieldError,
    MalformedMessageError,
    PersistenceError,
    SheetError,
    SheetNotFoundError,
)
from starship_sheets.domain.fields import storage_name_of, to_wire
from starship_sheets.domain.messages import (
    ErrorMessage,
    InitMessage,
    JoinMessage,
    UpdateMessage,
    parse_client_message,
)
from starship_sheets.domain.sheets import SheetRecord
from starship_sheets.services.registry import (
    ChannelState,
    SessionRegistry,
    SheetConnection,
    SheetSession,
)
from starship_sheets.services.sheets import SheetService

_logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class SheetSyncService:
    """Runs the join/update protocol for connected clients."""

    registry: SessionRegistry
    sheet_service: SheetService
    persistence_timeout_seconds: float = 5.0

    def open(self, connection: SheetConnection) -> SheetSession:
        """Start tracking a freshly opened connection."""
        return SheetSession(connection=connection)

    async def handle_text(self, session: SheetSession, raw: str | bytes) -> None:
        """Process one raw frame; failures never close the connection."""
        if session.state is ChannelState.CLOSED:
            return
        try:
            message = parse_client_message(raw)
            if isinstance(message, JoinMessage):
                await self.join(session, message.uuid)
            else:
                await self.update(session, message.field, message.value)
        except MalformedMessageError as exc:
            _logger.warning("Ignoring malformed sync message: %s", exc)
        except Exception:
            _logger.exception(
                "Sync message handling failed", extra={"sheet_id": session.sheet_id}
            )

    async def join(self, session: SheetSession, sheet_id: str) -> None:
        """Attach a session to a sheet and push the current snapshot."""
        if session.state is ChannelState.CLOSED:
            return
        previous = session.sheet_id
        if previous is not None and previous != sheet_id:
            await self.registry.unregister(previous, session)
            _logger.info("Client moved from sheet %s to %s", previous, sheet_id)

        sheet: SheetRecord | None = None
        try:
            sheet = await self._call_store(self.sheet_service.ensure_sheet, sheet_id)
        except PersistenceError as exc:
            _logger.warning("Loading sheet %s failed: %s", sheet_id, exc)

        await self.registry.register(sheet_id, session)
        session.sheet_id = sheet_id
        session.state = ChannelState.JOINED
        _logger.info("Client joined sheet: %s", sheet_id)

        if sheet is None:
            await self._send_error(
                session, "persistence_failed", None, "Sheet could not be loaded"
            )
            return
        await self._send(session, InitMessage(data=to_wire(sheet)).model_dump())

    async def update(self, session: SheetSession, field: str, value: str) -> None:
        """Persist a field edit, then relay it to the other viewers."""
        if session.state is not ChannelState.JOINED or session.sheet_id is None:
            _logger.debug("Ignoring update on a connection that has not joined")
            return
        sheet_id = session.sheet_id

        try:
            storage_name_of(field)
            await self._call_store(
                self.sheet_service.update_field, sheet_id, field, value
            )
        except InvalidFieldError as exc:
            _logger.warning("Rejected update on sheet %s: %s", sheet_id, exc)
            await self._send_error(session, "invalid_field", field, str(exc))
            return
        except SheetNotFoundError as exc:
            _logger.warning("Update for missing sheet %s dropped", sheet_id)
            await self._send_error(session, "not_found", field, str(exc))
            return
        except PersistenceError as exc:
            _logger.warning(
                "Persisting %s on sheet %s failed: %s", field, sheet_id, exc
            )
            await self._send_error(session, "persistence_failed", field, str(exc))
            return

        message = UpdateMessage(type="update", field=field, value=value)
        await self.registry.broadcast(sheet_id, session, message.model_dump())

    async def close(self, session: SheetSession) -> None:
        """Detach a session for good."""
        if session.state is ChannelState.CLOSED:
            return
        if session.sheet_id is not None:
            await self.registry.unregister(session.sheet_id, session)
            _logger.info("Client left sheet: %s", session.sheet_id)
        session.state = ChannelState.CLOSED

    async def _call_store(self, func: Callable[..., T], *args: object) -> T:
        """Run a blocking store call with a timeout."""
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(func, *args),
                timeout=self.persistence_timeout_seconds,
            )
        except TimeoutError as exc:
            raise PersistenceError(
                f"Store call timed out after {self.persistence_timeout_seconds}s"
            ) from exc
        except SheetError:
            raise
        except Exception as exc:
            raise PersistenceError(f"{type(exc).__name__}: {exc}") from exc

    async def _send(self, session: SheetSession, payload: dict[str, object]) -> None:
        if session.connection.is_open:
            await session.connection.send_json(payload)

    async def _send_error(
        self, session: SheetSession, code: str, field: str | None, message: str
    ) -> None:
        error = ErrorMessage(code=code, field=field, message=message)
        await self._send(session, error.model_dump())
