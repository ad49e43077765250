"""ASGI entrypoint for the starship sheets server."""

from starship_sheets.api.app import create_app
from starship_sheets.containers import build_container

app = create_app(build_container())
