# Path: anki_outline/services/note_mapper.py
from typing import Any, Dict

from anki_outline.models import NoteRecord

__all__ = ["to_wire_payload"]

def to_wire_payload(record: NoteRecord) -> Dict[str, Any]:
    """
    Map NoteRecord sang format note của AnkiConnect.
    'tags' luôn là list (kể cả rỗng): AnkiConnect không chấp nhận null.
    """
    return {
        "id": record.identifier,
        "deckName": record.deck,
        "modelName": record.note_type,
        "fields": record.field_map(),
        "tags": sorted(record.tags),
    }
