# Path: anki_outline/models/__init__.py
from .note import NoteRecord, UNSET_NOTE_ID
from .fragment import FragmentKind, ProtectedFragment, FragmentTable
from .outline import Heading, OutlineDocument

__all__ = [
    "NoteRecord",
    "UNSET_NOTE_ID",
    "FragmentKind",
    "ProtectedFragment",
    "FragmentTable",
    "Heading",
    "OutlineDocument",
]
