"""
CLI for doc-assist-ai.

Provides commands for translating documents, resolving addresses, reading
text aloud and browsing the translation history.
"""

from __future__ import annotations

import asyncio
import base64
import mimetypes
from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from doc_assist_ai.config import Settings, create_default_config, load_config
from doc_assist_ai.errors import ConfigurationError, DocAssistError, SpeechSynthesisError
from doc_assist_ai.history import HistoryStore
from doc_assist_ai.logging_setup import setup_logging
from doc_assist_ai.models import (
    SUPPORTED_LANGUAGES,
    AppStatus,
    AudioSamples,
    HistoryItem,
    LocationInfo,
    TranslationMode,
    UploadedFile,
    find_language,
)

if TYPE_CHECKING:
    from doc_assist_ai.service import DocumentAssistant

app = typer.Typer(
    name="doc-assist",
    help="Translate, summarize and read aloud documents with a hosted AI model.",
    add_completion=False,
)

console = Console()

_STATUS_TEXT = {
    AppStatus.TRANSLATING: "Translating document...",
    AppStatus.RESOLVING_LOCATION: "Finding location...",
    AppStatus.GENERATING_AUDIO: "Generating audio...",
}


def get_settings(config_path: Path | None = None) -> Settings:
    """Load settings and configure logging."""
    settings = load_config(config_path)
    setup_logging(settings.logging, Console(stderr=True))
    return settings


def get_assistant(settings: Settings) -> DocumentAssistant:
    """Create the document assistant, exiting on configuration errors."""
    from doc_assist_ai.service import DocumentAssistant

    try:
        return DocumentAssistant.from_settings(settings)
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        console.print("Set GEMINI_API_KEY (or OPENAI_API_KEY) or add the key to the config file")
        raise typer.Exit(1) from None


def get_store(settings: Settings) -> HistoryStore | None:
    """Get history store if enabled."""
    if not settings.history.enabled:
        return None
    return HistoryStore(settings.history.database_path)


def _resolve_language(value: str) -> str:
    option = find_language(value)
    return option.name if option else value


def _write_audio(audio: AudioSamples, out: Path) -> None:
    from doc_assist_ai.audio.decoder import encode_wav

    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(encode_wav(audio))
    console.print(f"[green]Audio saved to {out} ({audio.duration:.1f}s)[/green]")


def _location_table(location: LocationInfo) -> Table:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_row("Address", location.address)
    if location.has_coordinates:
        table.add_row("Coordinates", f"{location.latitude}, {location.longitude}")
    else:
        table.add_row("Coordinates", "[yellow]not found[/yellow]")
    if location.map_uri:
        table.add_row("Map", location.map_uri)
    return table


def _display_item(item: HistoryItem) -> None:
    """Render a translated document."""
    console.print(
        Panel(Markdown(item.text), title=f"[bold blue]{item.file_name}[/bold blue]", border_style="blue")
    )

    if item.summary:
        console.print(Panel(item.summary, title="[bold]Summary[/bold]", border_style="green"))

    if item.action_items:
        actions = Table(show_header=False, box=None)
        actions.add_column("", style="bold yellow")
        actions.add_column("")
        for idx, action in enumerate(item.action_items, start=1):
            actions.add_row(f"{idx}.", action)
        console.print(Panel(actions, title="[bold]Action Items[/bold]", border_style="yellow"))

    if item.official_info:
        info = item.official_info
        official = Table(show_header=False, box=None, padding=(0, 2))
        official.add_column("Key", style="cyan")
        official.add_column("Value")
        official.add_row("GO Number", info.go_number or "-")
        official.add_row("Department", info.department or "-")
        official.add_row("Date", info.date or "-")
        official.add_row("Subject", info.subject or "-")
        console.print(Panel(official, title="[bold]Official Document[/bold]", border_style="magenta"))

    if item.location:
        console.print(Panel(_location_table(item.location), title="[bold]Location[/bold]"))


@app.command()
def translate(
    file: Path = typer.Argument(..., help="Image or PDF to translate", exists=True, dir_okay=False),
    target: str | None = typer.Option(
        None, "--target", "-t", help="Target language (default: from config)"
    ),
    mode: TranslationMode | None = typer.Option(
        None, "--mode", "-m", help="speed or detailed (default: from config)"
    ),
    locate: bool = typer.Option(
        True, "--locate/--no-locate", help="Resolve coordinates for a detected address"
    ),
    speak: bool = typer.Option(False, "--speak", "-s", help="Read the summary aloud"),
    audio_out: Path = typer.Option(
        Path("summary.wav"), "--audio-out", "-o", help="Where to write the audio"
    ),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Translate a document and extract its summary, action items and address."""
    from doc_assist_ai.service import AssistantSession

    settings = get_settings(config)
    target_language = _resolve_language(target or settings.translation.target_language)
    translation_mode = mode or settings.translation.mode
    resolve_location = locate and settings.translation.resolve_location

    mime_type, _ = mimetypes.guess_type(str(file))
    upload = UploadedFile(
        name=file.name,
        mime_type=mime_type or "application/octet-stream",
        data=base64.b64encode(file.read_bytes()).decode("ascii"),
    )

    assistant = get_assistant(settings)
    store = get_store(settings)
    session = AssistantSession(assistant, store=store)
    speech_errors: list[SpeechSynthesisError] = []

    async def run() -> HistoryItem:
        try:
            with Progress(
                SpinnerColumn(),
                TextColumn("[bold blue]{task.description}"),
                console=console,
                transient=True,
            ) as progress:
                task = progress.add_task(_STATUS_TEXT[AppStatus.TRANSLATING])

                async def watch() -> None:
                    while True:
                        text = _STATUS_TEXT.get(session.status)
                        if text:
                            progress.update(task, description=text)
                        await asyncio.sleep(0.1)

                watcher = asyncio.create_task(watch())
                try:
                    item = await session.process_document(
                        upload,
                        target_language,
                        translation_mode,
                        resolve_location=resolve_location,
                    )
                    if speak:
                        try:
                            await session.read_aloud()
                        except SpeechSynthesisError as e:
                            speech_errors.append(e)
                finally:
                    watcher.cancel()
            return item
        finally:
            await assistant.close()

    try:
        item = asyncio.run(run())
    except DocAssistError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None
    finally:
        if store is not None:
            store.close()

    _display_item(item)
    for error in speech_errors:
        console.print(f"[yellow]Warning: {error}[/yellow]")
    if session.audio is not None:
        _write_audio(session.audio, audio_out)


@app.command()
def speak(
    text: str = typer.Argument(..., help="Text to read aloud"),
    out: Path = typer.Option(Path("speech.wav"), "--out", "-o", help="Where to write the audio"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Synthesize speech for a piece of text."""
    settings = get_settings(config)
    assistant = get_assistant(settings)

    async def run():
        try:
            return await assistant.read_aloud(text)
        finally:
            await assistant.close()

    try:
        with console.status("Generating audio..."):
            audio = asyncio.run(run())
    except DocAssistError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    _write_audio(audio, out)


@app.command()
def locate(
    address: str = typer.Argument(..., help="Address to look up"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Resolve an address to coordinates and a map link."""
    settings = get_settings(config)
    assistant = get_assistant(settings)

    async def run() -> LocationInfo:
        try:
            return await assistant.resolver.resolve(address)
        finally:
            await assistant.close()

    with console.status("Finding location..."):
        location = asyncio.run(run())

    console.print(Panel(_location_table(location), title="[bold]Location[/bold]"))


@app.command()
def history(
    limit: int = typer.Option(20, "--limit", "-n", help="Number of entries to show"),
    show: str | None = typer.Option(None, "--show", help="Show a full entry by ID"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Show previously translated documents."""
    settings = get_settings(config)
    store = get_store(settings)
    if store is None:
        console.print("[yellow]History is disabled[/yellow]")
        return

    try:
        if show:
            item = store.get(show)
            if item is None:
                console.print(f"[red]History entry {show} not found[/red]")
                raise typer.Exit(1)
            _display_item(item)
            return

        items = store.list(limit)
    finally:
        store.close()

    if not items:
        console.print("[yellow]No history yet[/yellow]")
        return

    from datetime import datetime

    table = Table(title="History")
    table.add_column("ID", style="dim")
    table.add_column("When")
    table.add_column("File", style="cyan")
    table.add_column("Language", style="magenta")
    table.add_column("Actions", justify="right")
    table.add_column("Official", justify="center")

    for item in items:
        table.add_row(
            item.id,
            datetime.fromtimestamp(item.timestamp / 1000).strftime("%Y-%m-%d %H:%M"),
            item.file_name[:40],
            item.target_language,
            str(len(item.action_items)),
            "[green]yes[/green]" if item.official_info else "",
        )

    console.print(table)


@app.command()
def languages() -> None:
    """List supported target languages."""
    table = Table(title="Languages")
    table.add_column("Code", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Native")

    for option in SUPPORTED_LANGUAGES:
        table.add_row(option.code, option.name, option.native_name)

    console.print(table)


@app.command()
def init(
    path: Path = typer.Argument(Path("config.yaml"), help="Where to write the config"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
) -> None:
    """Create a default configuration file."""
    if path.exists() and not force:
        console.print(f"[yellow]{path} already exists (use --force to overwrite)[/yellow]")
        raise typer.Exit(1)

    create_default_config(path)
    console.print(f"[green]Created {path}[/green]")


def main() -> None:
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
