import pytest

from anki_outline.core.errors import RpcError
from anki_outline.services.content_renderer import ContentRenderer
from anki_outline.services.note_extractor import NoteExtractor

SPANISH_OUTLINE = """# Spanish  :deck:

## Hola  :note:
:PROPERTIES:
:ANKI_NOTE_TYPE: Basic
:END:

### Front
Hola

### Back
Hello
"""

class FakeAnkiAdapter:
    """Stand-in for AnkiConnectAdapter that records calls instead of doing HTTP."""

    def __init__(self, create_results=None, update_errors=None):
        # Each entry is either a note id or an exception to raise
        self.create_results = list(create_results or [])
        self.update_errors = dict(update_errors or {})
        self.created = []
        self.updated = []
        self._next_id = 1000

    def create_note(self, note):
        self.created.append(note)
        if self.create_results:
            result = self.create_results.pop(0)
        else:
            self._next_id += 1
            result = self._next_id
        if isinstance(result, Exception):
            raise result
        return result

    def update_note_fields(self, note):
        self.updated.append(note)
        error = self.update_errors.get(note["id"])
        if error is not None:
            raise error


def identity(text):
    return text


@pytest.fixture
def spanish_outline():
    return SPANISH_OUTLINE

@pytest.fixture
def fake_adapter():
    return FakeAnkiAdapter()

@pytest.fixture
def identity_renderer():
    return ContentRenderer(renderer=identity)

@pytest.fixture
def identity_extractor(identity_renderer):
    return NoteExtractor(renderer=identity_renderer)

@pytest.fixture
def duplicate_error():
    return RpcError("cannot create note because it is a duplicate")
