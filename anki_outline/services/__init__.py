# Path: anki_outline/services/__init__.py
from .latex_guard import LatexGuard
from .content_renderer import ContentRenderer, RenderResult
from .note_extractor import NoteExtractor
from .note_mapper import to_wire_payload
from .submission_service import SubmissionService, SubmissionReport

__all__ = [
    "LatexGuard",
    "ContentRenderer",
    "RenderResult",
    "NoteExtractor",
    "to_wire_payload",
    "SubmissionService",
    "SubmissionReport",
]
