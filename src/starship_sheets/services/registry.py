"""In-process registry of live sessions per sheet."""

import asyncio
import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

_logger = logging.getLogger(__name__)


class SheetConnection(Protocol):
    """Transport handle for one connected client."""

    @property
    def is_open(self) -> bool:
        """Return true while messages can be sent."""

    async def send_json(self, payload: dict[str, object]) -> None:
        """Send one JSON message to the client."""


class ChannelState(StrEnum):
    """Lifecycle of a sync channel."""

    UNJOINED = "UNJOINED"
    JOINED = "JOINED"
    CLOSED = "CLOSED"


@dataclass(eq=False)
class SheetSession:
    """Association between one connection and the sheet it is viewing."""

    connection: SheetConnection
    sheet_id: str | None = None
    state: ChannelState = ChannelState.UNJOINED


class SessionRegistry:
    """Tracks which sessions are viewing which sheet and fans out messages.

    Presence is not persisted; a restart begins with an empty registry.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._sessions: dict[str, set[SheetSession]] = {}

    async def register(self, sheet_id: str, session: SheetSession) -> None:
        """Add a session to the set for a sheet."""
        async with self._lock:
            self._sessions.setdefault(sheet_id, set()).add(session)

    async def unregister(self, sheet_id: str, session: SheetSession) -> None:
        """Remove a session, dropping the sheet entry once it is empty."""
        async with self._lock:
            sessions = self._sessions.get(sheet_id)
            if not sessions:
                return
            sessions.discard(session)
            if not sessions:
                self._sessions.pop(sheet_id, None)

    async def broadcast(
        self,
        sheet_id: str,
        exclude: SheetSession | None,
        message: dict[str, object],
    ) -> int:
        """Send a message to every other open session on a sheet.

        Closed peers and peers whose send fails simply miss the message.
        Returns the number of sessions the message was delivered to.
        """
        async with self._lock:
            targets = list(self._sessions.get(sheet_id, ()))

        delivered = 0
        for session in targets:
            if session is exclude or not session.connection.is_open:
                continue
            try:
                await session.connection.send_json(message)
            except Exception:
                _logger.warning(
                    "Broadcast to a peer on sheet %s failed", sheet_id, exc_info=True
                )
                continue
            delivered += 1
        return delivered

    async def count(self, sheet_id: str) -> int:
        """Return the number of sessions registered for a sheet."""
        async with self._lock:
            return len(self._sessions.get(sheet_id, ()))

    async def snapshot(self) -> dict[str, int]:
        """Return session counts for every sheet with live viewers."""
        async with self._lock:
            return {
                sheet_id: len(sessions) for sheet_id, sessions in self._sessions.items()
            }
