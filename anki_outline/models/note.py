# Path: anki_outline/models/note.py
from typing import List, Set, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ["NoteRecord", "UNSET_NOTE_ID"]

# Note chưa được tạo trên Anki
UNSET_NOTE_ID = -1

class NoteRecord(BaseModel):
    """
    Một note được dựng từ heading trong outline, sẵn sàng để gửi lên Anki.
    Object này chỉ sống trong một lượt push, không được lưu lại.
    """

    model_config = ConfigDict(frozen=True)

    identifier: int = Field(
        default=UNSET_NOTE_ID,
        description="Anki Note ID. -1 for notes that do not exist in Anki yet."
    )

    deck: str = Field(
        ...,
        min_length=1,
        description="Target Deck name in Anki (e.g. 'Spanish::Greetings')"
    )

    note_type: str = Field(
        ...,
        min_length=1,
        description="Anki Note Type (Model) name, e.g. 'Basic'"
    )

    tags: Set[str] = Field(
        default_factory=set,
        description="Tags associated with the note"
    )

    # Giữ đúng thứ tự field như trong tài liệu
    fields: List[Tuple[str, str]] = Field(
        ...,
        description="Ordered (field name, rendered HTML) pairs"
    )

    @field_validator('fields')
    @classmethod
    def check_fields(cls, v: List[Tuple[str, str]]) -> List[Tuple[str, str]]:
        if not v:
            raise ValueError('Fields cannot be empty')
        names = [name for name, _ in v]
        if len(names) != len(set(names)):
            raise ValueError('Field names must be unique')
        return v

    @property
    def is_new(self) -> bool:
        return self.identifier == UNSET_NOTE_ID

    def field_map(self) -> dict:
        """Fields dạng dict (dict giữ thứ tự chèn)."""
        return dict(self.fields)
