"""FastAPI application factory."""

import logging

from fastapi import FastAPI, HTTPException, Request, WebSocket, status
from fastapi.responses import HTMLResponse, RedirectResponse

from starship_sheets.adapters.websocket_connection import WebSocketConnection
from starship_sheets.api.sheets import router as sheets_router
from starship_sheets.app_logging import configure_logging
from starship_sheets.containers import AppContainer
from starship_sheets.domain.errors import SheetNotFoundError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Starship Sheets")
    app.state.container = container

    app.include_router(sheets_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/health/sessions")
    async def session_counts(request: Request) -> dict[str, object]:
        """Return live viewer counts per sheet."""
        state_container: AppContainer = request.app.state.container
        return {"sheets": await state_container.session_registry.snapshot()}

    # Store-backed routes stay synchronous: the Supabase client blocks.
    @app.get("/")
    def new_sheet(request: Request) -> RedirectResponse:
        """Create an empty sheet and send the browser to it."""
        state_container: AppContainer = request.app.state.container
        sheet = state_container.sheet_service.create_sheet()
        return RedirectResponse(
            url=f"/sheet/{sheet.uuid}", status_code=status.HTTP_302_FOUND
        )

    @app.get("/sheet/{sheet_id}", response_class=HTMLResponse)
    def sheet_page(sheet_id: str, request: Request) -> HTMLResponse:
        """Serve the live editing page for an existing sheet."""
        state_container: AppContainer = request.app.state.container
        try:
            state_container.sheet_service.get_sheet(sheet_id)
        except SheetNotFoundError:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Sheet not found"
            ) from None
        return HTMLResponse(_SHEET_PAGE_HTML)

    @app.websocket("/ws")
    async def sheet_channel(websocket: WebSocket) -> None:
        """Live sync channel: join a sheet, then exchange field updates."""
        state_container: AppContainer = websocket.app.state.container
        sync_service = state_container.sync_service
        await websocket.accept()
        session = sync_service.open(WebSocketConnection(websocket))
        try:
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    logger.debug("Sync channel closed (code=%s)", message.get("code"))
                    break
                raw = message.get("text")
                if raw is None:
                    raw = message.get("bytes") or b""
                await sync_service.handle_text(session, raw)
        finally:
            await sync_service.close(session)

    return app


_SHEET_PAGE_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Starship Sheet</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      label { display: block; margin-top: 0.6rem; font-weight: 600; }
      input, textarea { padding: 0.4rem 0.6rem; width: 420px; }
      #status { color: #666; }
    </style>
  </head>
  <body>
    <h1>Starship Sheet</h1>
    <p id="status">Connecting...</p>
    <form id="sheet"></form>
    <script>
      const uuid = window.location.pathname.split('/').pop();
      const form = document.getElementById('sheet');
      const status = document.getElementById('status');
      const scheme = window.location.protocol === 'https:' ? 'wss' : 'ws';
      const socket = new WebSocket(`${scheme}://${window.location.host}/ws`);

      function fieldInput(name) {
        let input = document.getElementById(name);
        if (input) return input;
        const label = document.createElement('label');
        label.textContent = name;
        label.htmlFor = name;
        input = document.createElement('input');
        input.id = name;
        input.addEventListener('input', () => {
          socket.send(JSON.stringify({ type: 'update', field: name, value: input.value }));
        });
        form.appendChild(label);
        form.appendChild(input);
        return input;
      }

      socket.addEventListener('open', () => {
        socket.send(JSON.stringify({ type: 'join', uuid }));
      });
      socket.addEventListener('message', (event) => {
        const message = JSON.parse(event.data);
        if (message.type === 'init') {
          for (const [name, value] of Object.entries(message.data)) {
            fieldInput(name).value = value;
          }
          status.textContent = 'Live';
        } else if (message.type === 'update') {
          fieldInput(message.field).value = message.value;
        } else if (message.type === 'error') {
          status.textContent = 'Error: ' + message.message;
        }
      });
      socket.addEventListener('close', () => {
        status.textContent = 'Disconnected';
      });
    </script>
  </body>
</html>
"""
