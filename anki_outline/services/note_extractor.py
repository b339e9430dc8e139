# Path: anki_outline/services/note_extractor.py
import logging
from typing import List, Optional, Tuple

from anki_outline.core.errors import DuplicateField, InvalidNoteId, MissingFields, MissingNoteType
from anki_outline.models import Heading, NoteRecord, UNSET_NOTE_ID
from anki_outline.services.content_renderer import ContentRenderer
from anki_outline.utils.text_utils import split_tags

__all__ = [
    "NoteExtractor",
    "NOTE_TYPE_PROPERTY",
    "TAGS_PROPERTY",
    "NOTE_ID_PROPERTY",
    "FAILURE_REASON_PROPERTY",
]

logger = logging.getLogger(__name__)

NOTE_TYPE_PROPERTY = "ANKI_NOTE_TYPE"
TAGS_PROPERTY = "ANKI_TAGS"
NOTE_ID_PROPERTY = "ANKI_NOTE_ID"
FAILURE_REASON_PROPERTY = "ANKI_FAILURE_REASON"

class NoteExtractor:
    """Dựng NoteRecord từ một heading note và các heading con trực tiếp (fields)."""

    def __init__(self, renderer: Optional[ContentRenderer] = None):
        self.renderer = renderer or ContentRenderer()

    def extract(self, heading: Heading, deck: str) -> NoteRecord:
        note_type = (heading.get_property(NOTE_TYPE_PROPERTY) or "").strip()
        if not note_type:
            raise MissingNoteType(heading.title)

        fields = self._extract_fields(heading)
        if not fields:
            raise MissingFields(heading.title)

        record = NoteRecord(
            identifier=self._read_identifier(heading),
            deck=deck,
            note_type=note_type,
            tags=split_tags(heading.get_property(TAGS_PROPERTY)),
            fields=fields,
        )
        logger.debug(f"Extracted note '{heading.title}' ({note_type}, {len(fields)} fields)")
        return record

    def _extract_fields(self, heading: Heading) -> List[Tuple[str, str]]:
        fields: List[Tuple[str, str]] = []
        seen = set()
        # Chỉ lấy heading con trực tiếp; cháu chắt là một phần nội dung của field
        for child in heading.children:
            name = child.title
            if name in seen:
                raise DuplicateField(heading.title, name)
            seen.add(name)
            fields.append((name, self.renderer.render(child.source_text())))
        return fields

    @staticmethod
    def _read_identifier(heading: Heading) -> int:
        raw = (heading.get_property(NOTE_ID_PROPERTY) or "").strip()
        if not raw:
            return UNSET_NOTE_ID
        try:
            return int(raw)
        except ValueError:
            raise InvalidNoteId(heading.title, raw)
