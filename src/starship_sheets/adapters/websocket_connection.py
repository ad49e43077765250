"""WebSocket transport adapter for sync sessions."""

from dataclasses import dataclass

from fastapi import WebSocket
from fastapi.websockets import WebSocketState

from starship_sheets.services.registry import SheetConnection


@dataclass(eq=False)
class WebSocketConnection(SheetConnection):
    """Sheet connection backed by a Starlette WebSocket."""

    websocket: WebSocket

    @property
    def is_open(self) -> bool:
        """Return true while both sides of the socket are connected."""
        return (
            self.websocket.client_state == WebSocketState.CONNECTED
            and self.websocket.application_state == WebSocketState.CONNECTED
        )

    async def send_json(self, payload: dict[str, object]) -> None:
        """Send a JSON text frame."""
        await self.websocket.send_json(payload)
