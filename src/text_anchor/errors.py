"""Error taxonomy for anchor capture and resolution."""


class AnchorError(Exception):
    """Base class for every error raised by text_anchor."""


class InvalidInputError(AnchorError):
    """A selection cannot be anchored (e.g. it holds several ranges)."""


class IndexOutOfRangeError(AnchorError, IndexError):
    """A structural path, text offset or occurrence ordinal is out of range."""


class NotFoundError(AnchorError, LookupError):
    """A root identifier or an anchored text could not be located."""


class MalformedRecordError(AnchorError, ValueError):
    """A persisted anchor record is missing fields or violates an invariant."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.field = field
        if field:
            message = f"{message} (field {field!r})"
        super().__init__(message)
