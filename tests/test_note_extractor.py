import pytest
from pydantic import ValidationError

from anki_outline.adapters.outline_parser import parse_outline
from anki_outline.core.errors import DuplicateField, InvalidNoteId, MissingFields, MissingNoteType
from anki_outline.models import NoteRecord, UNSET_NOTE_ID
from anki_outline.services.note_extractor import NoteExtractor

def _note(text):
    return parse_outline(text).headings[0]

def test_spanish_scenario(spanish_outline):
    """Test extracting the Spanish deck note."""
    document = parse_outline(spanish_outline)
    deck = document.headings[0]
    record = NoteExtractor().extract(deck.children[0], deck.title)

    assert record.deck == "Spanish"
    assert record.note_type == "Basic"
    assert record.fields == [("Front", "<p>Hola</p>"), ("Back", "<p>Hello</p>")]
    assert record.identifier == UNSET_NOTE_ID
    assert record.is_new
    assert record.tags == set()

def test_tags_and_identifier(identity_extractor):
    """Test tags are split into a set and the note id is read."""
    heading = _note(
        "# Card  :note:\n:PROPERTIES:\n:ANKI_NOTE_TYPE: Basic\n"
        ":ANKI_TAGS: verbs  spanish verbs\n:ANKI_NOTE_ID: 1596\n:END:\n## Front\nser\n"
    )
    record = identity_extractor.extract(heading, "Spanish")
    assert record.tags == {"verbs", "spanish"}
    assert record.identifier == 1596
    assert not record.is_new

def test_missing_note_type(identity_extractor):
    """Test a note without a note type is rejected."""
    heading = _note("# Card  :note:\n## Front\nx\n")
    with pytest.raises(MissingNoteType):
        identity_extractor.extract(heading, "Deck")

def test_blank_note_type_counts_as_missing(identity_extractor):
    """Test a blank note type is treated as missing."""
    heading = _note("# Card\n:PROPERTIES:\n:ANKI_NOTE_TYPE:   \n:END:\n## Front\nx\n")
    with pytest.raises(MissingNoteType):
        identity_extractor.extract(heading, "Deck")

def test_missing_fields(identity_extractor):
    """Test a note without child headings is rejected."""
    heading = _note("# Card\n:PROPERTIES:\n:ANKI_NOTE_TYPE: Basic\n:END:\nJust text\n")
    with pytest.raises(MissingFields):
        identity_extractor.extract(heading, "Deck")

def test_duplicate_field(identity_extractor):
    """Test two fields with the same name are rejected."""
    heading = _note("# Card\n:PROPERTIES:\n:ANKI_NOTE_TYPE: Basic\n:END:\n## Front\na\n## Front\nb\n")
    with pytest.raises(DuplicateField):
        identity_extractor.extract(heading, "Deck")

def test_invalid_identifier(identity_extractor):
    """Test a non-integer note id is rejected."""
    heading = _note("# Card\n:PROPERTIES:\n:ANKI_NOTE_TYPE: Basic\n:ANKI_NOTE_ID: abc\n:END:\n## Front\na\n")
    with pytest.raises(InvalidNoteId):
        identity_extractor.extract(heading, "Deck")

def test_only_direct_children_are_fields(identity_extractor):
    """Test grandchildren belong to their field body, not to new fields."""
    heading = _note(
        "# Card\n:PROPERTIES:\n:ANKI_NOTE_TYPE: Basic\n:END:\n"
        "## Front\nQ\n## Back\nHello\n### Detail\nMore $x$\n"
    )
    record = identity_extractor.extract(heading, "Deck")
    assert record.fields == [
        ("Front", "Q\n"),
        ("Back", "Hello\n### Detail\nMore [$]x[/$]\n"),
    ]

def test_empty_field_renders_empty(identity_extractor):
    """Test an empty field body renders to an empty string."""
    heading = _note("# Card\n:PROPERTIES:\n:ANKI_NOTE_TYPE: Basic\n:END:\n## Front\nQ\n## Back\n")
    record = identity_extractor.extract(heading, "Deck")
    assert record.fields[1] == ("Back", "")

def test_note_record_validates_on_construction():
    """Test an invalid NoteRecord cannot be built."""
    with pytest.raises(ValidationError):
        NoteRecord(deck="Deck", note_type="", fields=[("Front", "x")])
    with pytest.raises(ValidationError):
        NoteRecord(deck="Deck", note_type="Basic", fields=[])
    with pytest.raises(ValidationError):
        NoteRecord(deck="Deck", note_type="Basic", fields=[("Front", "a"), ("Front", "b")])
    with pytest.raises(ValidationError):
        NoteRecord(deck="", note_type="Basic", fields=[("Front", "a")])
