"""Pydantic models for sync channel messages."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from starship_sheets.domain.errors import MalformedMessageError


class JoinMessage(BaseModel):
    """Client request to start viewing a sheet."""

    type: Literal["join"]
    uuid: str = Field(min_length=1)


class UpdateMessage(BaseModel):
    """Single field edit, sent by a client and relayed to its peers."""

    type: Literal["update"]
    field: str
    value: str


class InitMessage(BaseModel):
    """Full snapshot pushed to a client that just joined."""

    type: Literal["init"] = "init"
    data: dict[str, str]


class ErrorMessage(BaseModel):
    """Failure notice sent only to the client whose request failed."""

    type: Literal["error"] = "error"
    code: Literal["invalid_field", "persistence_failed", "not_found"]
    field: str | None = None
    message: str


ClientMessage = Annotated[JoinMessage | UpdateMessage, Field(discriminator="type")]

_CLIENT_MESSAGE = TypeAdapter(ClientMessage)


def parse_client_message(raw: str | bytes) -> JoinMessage | UpdateMessage:
    """Parse a raw channel frame into a client message."""
    try:
        return _CLIENT_MESSAGE.validate_json(raw)
    except ValidationError as exc:
        raise MalformedMessageError(str(exc)) from exc
