"""Tests for the WebSocket transport adapter."""

import asyncio
from dataclasses import dataclass, field

from fastapi.websockets import WebSocketState

from starship_sheets.adapters.websocket_connection import WebSocketConnection


@dataclass
class FakeWebSocket:
    client_state: WebSocketState = WebSocketState.CONNECTED
    application_state: WebSocketState = WebSocketState.CONNECTED
    sent: list[object] = field(default_factory=list)

    async def send_json(self, payload: object) -> None:
        self.sent.append(payload)


def test_connection_reports_open_state() -> None:
    websocket = FakeWebSocket()
    connection = WebSocketConnection(websocket)  # type: ignore[arg-type]

    assert connection.is_open

    websocket.client_state = WebSocketState.DISCONNECTED
    assert not connection.is_open


def test_connection_sends_json() -> None:
    websocket = FakeWebSocket()
    connection = WebSocketConnection(websocket)  # type: ignore[arg-type]

    asyncio.run(connection.send_json({"type": "update"}))

    assert websocket.sent == [{"type": "update"}]
