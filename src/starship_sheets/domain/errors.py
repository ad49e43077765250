"""Error taxonomy shared by the sheet store, codec and sync channel."""


class SheetError(RuntimeError):
    """Base class for sheet-related failures."""


class SheetNotFoundError(SheetError):
    """Raised when a sheet identifier is unknown to the store."""

    def __init__(self, sheet_id: str) -> None:
        super().__init__(f"Sheet not found: {sheet_id}")
        self.sheet_id = sheet_id


class InvalidFieldError(SheetError):
    """Raised when a field name is outside the fixed sheet field set."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Invalid field name: {field}")
        self.field = field


class PersistenceError(SheetError):
    """Raised when the store fails or does not answer in time."""


class MalformedMessageError(SheetError):
    """Raised when a channel message cannot be parsed."""
