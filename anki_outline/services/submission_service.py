# Path: anki_outline/services/submission_service.py
import logging
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError
from rich.console import Console
from rich.markup import escape

from anki_outline.adapters import AnkiConnectAdapter
from anki_outline.core.errors import AnkiOutlineError, NoDeckSpecified
from anki_outline.models import Heading, NoteRecord, OutlineDocument
from anki_outline.services.note_extractor import (
    FAILURE_REASON_PROPERTY,
    NOTE_ID_PROPERTY,
    NoteExtractor,
)
from anki_outline.services.note_mapper import to_wire_payload

__all__ = ["SubmissionService", "SubmissionReport", "DECK_TAG", "NOTE_TAG"]

logger = logging.getLogger(__name__)

DECK_TAG = "deck"
NOTE_TAG = "note"

class SubmissionReport(BaseModel):
    total: int = 0
    failed: int = 0
    created: int = 0
    updated: int = 0
    # Note đã tồn tại có tags nhưng tags không được đẩy lên (chưa hỗ trợ)
    tags_not_updated: int = 0
    failures: List[Tuple[str, str]] = Field(default_factory=list)
    # Chỉ có dữ liệu khi dry_run
    payloads: List[Dict[str, Any]] = Field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return self.total - self.failed


class SubmissionService:
    """
    Đẩy toàn bộ note trong một outline lên Anki (CREATE/UPDATE).
    Lỗi của từng note được ghi vào property ANKI_FAILURE_REASON của heading đó,
    không làm dừng cả lượt push.
    """

    def __init__(
        self,
        adapter: AnkiConnectAdapter,
        extractor: Optional[NoteExtractor] = None,
        console: Optional[Console] = None,
    ):
        self.adapter = adapter
        self.extractor = extractor or NoteExtractor()
        self.console = console or Console()

    def push_document(self, document: OutlineDocument, dry_run: bool = False) -> SubmissionReport:
        report = SubmissionReport()
        deck: Optional[str] = None

        for heading in self._iter_deck_and_note_headings(document.headings):
            if heading.has_tag(DECK_TAG):
                deck = heading.title
                logger.debug(f"Current deck: {deck}")
                continue

            report.total += 1
            try:
                if deck is None:
                    raise NoDeckSpecified(heading.title)
                record = self.extractor.extract(heading, deck)
                if dry_run:
                    report.payloads.append(to_wire_payload(record))
                    continue
                self._submit(heading, record, report)
            except (AnkiOutlineError, ValidationError) as e:
                logger.error(f"Failed to push note '{heading.title}': {e}")
                self._record_failure(heading, e, report, dry_run)
            except Exception as e:
                # Lỗi ngoài dự kiến (renderer, bug...) cũng chỉ dừng note hiện tại
                logger.exception(f"Unexpected error while pushing note '{heading.title}'")
                self._record_failure(heading, e, report, dry_run)
            else:
                if not dry_run:
                    heading.remove_property(FAILURE_REASON_PROPERTY)

        logger.info(
            f"Pushed {report.total} note(s): {report.created} created, "
            f"{report.updated} updated, {report.failed} failed"
        )
        return report

    def _record_failure(self, heading: Heading, error: Exception, report: SubmissionReport, dry_run: bool) -> None:
        # Property chỉ chứa một dòng
        reason = " ".join(str(error).split()) or type(error).__name__
        report.failed += 1
        report.failures.append((heading.title, reason))
        if not dry_run:
            heading.set_property(FAILURE_REASON_PROPERTY, reason)

    def _iter_deck_and_note_headings(self, headings: List[Heading]):
        """
        Duyệt theo thứ tự tài liệu, trả về heading deck và heading note.
        Không tìm note lồng bên trong một note (con của note là field).
        """
        for heading in headings:
            if heading.has_tag(NOTE_TAG):
                yield heading
                continue
            if heading.has_tag(DECK_TAG):
                yield heading
            yield from self._iter_deck_and_note_headings(heading.children)

    def _submit(self, heading: Heading, record: NoteRecord, report: SubmissionReport) -> None:
        payload = to_wire_payload(record)

        if record.is_new:
            note_id = self.adapter.create_note(payload)
            heading.set_property(NOTE_ID_PROPERTY, str(note_id))
            report.created += 1
            logger.info(f"Created note '{heading.title}' with id {note_id}")
            return

        self.adapter.update_note_fields(payload)
        report.updated += 1
        logger.info(f"Updated fields of note {record.identifier} ('{heading.title}')")
        if record.tags:
            # TODO: push tag changes of existing notes (AnkiConnect updateNoteTags)
            report.tags_not_updated += 1
            logger.warning(f"Tags of existing note {record.identifier} were not updated")

    def print_report(self, report: SubmissionReport) -> None:
        self.console.print(
            f"Notes: {report.total}  "
            f"[green]created: {report.created}[/green]  "
            f"[cyan]updated: {report.updated}[/cyan]  "
            f"[red]failed: {report.failed}[/red]"
        )
        for title, reason in report.failures:
            self.console.print(f"  [red]✗[/red] {escape(title)}: {escape(reason)}", highlight=False)
        if report.tags_not_updated:
            self.console.print(
                f"[yellow]⚠️  Tag changes of {report.tags_not_updated} existing note(s) were not pushed.[/yellow]"
            )
