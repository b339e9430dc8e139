# Path: anki_outline/main.py
#!/usr/bin/env python3
import json
import logging
import typer
from rich.console import Console
from rich.markup import escape
from pathlib import Path
from anki_outline.core.config import settings
from anki_outline.core.errors import AnkiOutlineError
from anki_outline.core.logging_config import setup_logging
from anki_outline.adapters import AnkiConnectAdapter, load_outline, save_outline
from anki_outline.services.submission_service import SubmissionService

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="anki-outline",
    help="Push notes written as Markdown outlines to Anki via AnkiConnect",
    add_completion=False,
)
console = Console()

# --- Helpers ---

def _initialize_app(verbose: bool) -> None:
    """Common setup for all commands."""
    log_level = "DEBUG" if verbose else "INFO"
    setup_logging(log_level)
    logger.debug(f"App initialized with log level: {log_level}")

def _load(file: Path):
    try:
        return load_outline(file)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[bold red]❌ Could not read {file}:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)

# --- Commands ---

@app.command()
def push(
    file: Path = typer.Argument(..., help="Outline file (.md) containing deck/note headings"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Extract notes without pushing to Anki"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmations"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logs")
) -> None:
    """[PUSH] Create or update every note of FILE in Anki, writing ids back into FILE."""
    _initialize_app(verbose)
    console.print(f"[bold blue]🚀 Pushing notes from {escape(str(file))}[/bold blue]")

    document = _load(file)

    if not dry_run and not yes:
        if not typer.confirm(f"Push notes to Anki at {settings.ANKI_CONNECT_URL}?"):
            raise typer.Exit()

    service = SubmissionService(AnkiConnectAdapter(), console=console)
    try:
        report = service.push_document(document, dry_run=dry_run)
    except AnkiOutlineError as e:
        logger.exception("Push failed")
        console.print(f"[bold red]❌ Error during push:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)
    finally:
        # Luôn ghi lại ID mới và lý do lỗi vào file, kể cả khi lượt push bị ngắt giữa chừng
        if not dry_run:
            save_outline(document, file)

    if dry_run:
        console.print(f"[yellow]Dry run: {len(report.payloads)} note(s) extracted, nothing pushed.[/yellow]")

    service.print_report(report)
    if report.failed:
        raise typer.Exit(code=1)
    console.print(f"\n[bold green]✅ Push completed successfully![/bold green]")

@app.command()
def render(
    file: Path = typer.Argument(..., help="Outline file (.md) containing deck/note headings"),
    verbose: bool = typer.Option(False, "--verbose", "-v")
) -> None:
    """Print the AnkiConnect payload of every note in FILE without contacting Anki."""
    _initialize_app(verbose)
    document = _load(file)

    service = SubmissionService(AnkiConnectAdapter(), console=console)
    report = service.push_document(document, dry_run=True)

    console.print_json(json.dumps(report.payloads, ensure_ascii=False))
    if report.failed:
        service.print_report(report)
        raise typer.Exit(code=1)

@app.command()
def info(
    verbose: bool = typer.Option(False, "--verbose", "-v")
) -> None:
    """Show AnkiConnect connection status, decks and note types."""
    _initialize_app(verbose)

    console.print(f"[bold]Project:[/bold] {settings.PROJECT_NAME}")
    console.print(f"[bold]AnkiConnect:[/bold] {settings.ANKI_CONNECT_URL}")

    adapter = AnkiConnectAdapter()
    try:
        version = adapter.ping()
        console.print(f"✅ [bold green]Connected:[/bold green] {version}")

        decks = adapter.get_deck_names()
        console.print(f"[bold]Available Decks ({len(decks)}):[/bold]")
        for deck in decks[:10]:
            console.print(f"  - {escape(deck)}")

        models = adapter.get_model_names()
        console.print(f"[bold]Note Types ({len(models)}):[/bold]")
        for model in models[:10]:
            console.print(f"  - {escape(model)}")

    except AnkiOutlineError as e:
        logger.exception("Failed to connect to Anki")
        console.print(f"❌ [bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)

def main() -> None:
    app()

if __name__ == "__main__":
    main()
