import json

from anki_outline.models import NoteRecord
from anki_outline.services.note_mapper import to_wire_payload

def test_wire_payload_shape():
    """Test the payload has exactly the AnkiConnect note keys."""
    record = NoteRecord(
        identifier=42,
        deck="Spanish",
        note_type="Basic",
        tags={"verbs", "a1"},
        fields=[("Front", "<p>ser</p>"), ("Back", "<p>to be</p>")],
    )
    assert to_wire_payload(record) == {
        "id": 42,
        "deckName": "Spanish",
        "modelName": "Basic",
        "fields": {"Front": "<p>ser</p>", "Back": "<p>to be</p>"},
        "tags": ["a1", "verbs"],
    }

def test_empty_tags_serialize_as_list():
    """Test a note without tags sends an empty list."""
    record = NoteRecord(deck="Spanish", note_type="Basic", fields=[("Front", "x")])
    payload = to_wire_payload(record)

    assert payload["tags"] == []
    assert '"tags": []' in json.dumps(payload)
    assert payload["id"] == -1

def test_field_order_is_preserved():
    """Test fields keep their document order in the payload."""
    record = NoteRecord(deck="D", note_type="T", fields=[("Z", "1"), ("A", "2"), ("M", "3")])
    assert list(to_wire_payload(record)["fields"]) == ["Z", "A", "M"]
