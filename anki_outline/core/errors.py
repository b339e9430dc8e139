# Path: anki_outline/core/errors.py
__all__ = [
    "AnkiOutlineError",
    "NoDeckSpecified",
    "MissingNoteType",
    "MissingFields",
    "DuplicateField",
    "InvalidNoteId",
    "RpcError",
    "TransportError",
]

class AnkiOutlineError(Exception):
    """Base class for every error raised while turning an outline into notes."""
    pass

class NoDeckSpecified(AnkiOutlineError):
    """A note heading appeared before any deck heading."""

    def __init__(self, note_title: str):
        self.note_title = note_title
        super().__init__(f"No deck specified for note '{note_title}'")

class MissingNoteType(AnkiOutlineError):
    def __init__(self, note_title: str):
        self.note_title = note_title
        super().__init__(f"Missing note type for note '{note_title}'")

class MissingFields(AnkiOutlineError):
    def __init__(self, note_title: str):
        self.note_title = note_title
        super().__init__(f"No fields found for note '{note_title}'")

class DuplicateField(AnkiOutlineError):
    def __init__(self, note_title: str, field_name: str):
        self.note_title = note_title
        self.field_name = field_name
        super().__init__(f"Field '{field_name}' appears more than once in note '{note_title}'")

class InvalidNoteId(AnkiOutlineError):
    def __init__(self, note_title: str, raw_value: str):
        self.note_title = note_title
        self.raw_value = raw_value
        super().__init__(f"Invalid note id '{raw_value}' for note '{note_title}'")

class RpcError(AnkiOutlineError):
    """Logical error returned by AnkiConnect (the 'error' field of the response)."""
    pass

class TransportError(AnkiOutlineError):
    """AnkiConnect could not be reached or answered with a malformed response."""
    pass
