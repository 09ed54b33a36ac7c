"""
podscribe.cli - Typer CLI entry point.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from podscribe import __version__
from podscribe.config import OUTPUT_FORMATS, apply_overrides, load_config
from podscribe.logging import configure_logging

app = typer.Typer(
    name="podscribe",
    help="Transcribe long-form audio with a remote speech-recognition model.\n\n"
    "Audio is split into chunks, transcribed in parallel, and reassembled into "
    "a single transcript or SRT subtitle file.",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"podscribe {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Podscribe - chunked parallel transcription."""
    pass


@app.command("transcribe")
def transcribe(
    source: str = typer.Argument(..., help="Local audio file or direct audio URL"),
    language: str | None = typer.Option(
        None, "--language", "-l", help="Language code (auto, en, zh, ...)"
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Output file (stdout if not set)"
    ),
    output_format: str | None = typer.Option(
        None, "--output-format", "-f", help="Output format: text, json, markdown, srt"
    ),
    summary: bool = typer.Option(
        False, "--summary/--no-summary", help="Generate an AI summary after transcription"
    ),
    chunk_duration: float | None = typer.Option(
        None, "--chunk-duration", help="Chunk length in seconds (default 300)"
    ),
    concurrency: int | None = typer.Option(
        None, "--concurrency", "-c", help="Maximum parallel transcription requests (default 3)"
    ),
    config_file: Path | None = typer.Option(None, "--config", help="YAML config file"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress progress output"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """Transcribe an audio file or URL."""
    from podscribe.download import download_audio, is_supported_extension, is_url
    from podscribe.export.formats import format_output
    from podscribe.io import write_text
    from podscribe.llm.client import create_client_from_config
    from podscribe.llm.summary import generate_summary
    from podscribe.progress import ProgressReporter
    from podscribe.transcribe.pipeline import transcribe_bytes, transcribe_file
    from podscribe.utils import format_bytes

    configure_logging(verbose)
    progress = ProgressReporter(err_console, quiet=quiet)

    if output_format is not None and output_format not in OUTPUT_FORMATS:
        err_console.print(
            f"Error: --output-format must be one of: {', '.join(sorted(OUTPUT_FORMATS))}",
            style="red",
            markup=False,
        )
        raise typer.Exit(1)

    try:
        config = apply_overrides(
            load_config(config_file),
            language=language,
            output_format=output_format,
            chunk_duration=chunk_duration,
            max_concurrency=concurrency,
        )
        client = create_client_from_config(config)

        if is_url(source):
            progress.start("Downloading audio...")
            downloaded = download_audio(source, timeout=config.request_timeout)
            progress.succeed(f"Audio downloaded ({format_bytes(len(downloaded.data))})")
        else:
            downloaded = None
            path = Path(source).resolve()
            if path.is_file():
                progress.info(f"File: {path} ({format_bytes(path.stat().st_size)})")
                if not is_supported_extension(path.suffix):
                    progress.warn(f"Unrecognized audio extension '{path.suffix}', trying anyway")

        progress.start("Transcribing audio...")
        if downloaded is not None:
            result = transcribe_bytes(
                downloaded.data,
                downloaded.extension,
                config,
                client=client,
                on_progress=progress.progress,
                on_status=progress.update,
            )
        else:
            result = transcribe_file(
                path,
                config,
                client=client,
                on_progress=progress.progress,
                on_status=progress.update,
            )
        progress.succeed("Transcription complete")

        summary_text = None
        if summary and config.wants_subtitles:
            progress.warn("Summary is not available for SRT output")
        elif summary:
            progress.start("Generating AI summary...")
            summary_text = generate_summary(client, result.text, config.language)
            progress.succeed("Summary generated")

        rendered = format_output(result.text, summary_text, config.output_format, result.subtitles)

        if output:
            write_text(output, rendered)
            if not quiet:
                err_console.print(f"\n[green]Output saved to: {output}[/green]")
        else:
            typer.echo(rendered)

    except Exception as e:
        progress.fail("Operation failed")
        err_console.print(f"Error: {e}", style="red", markup=False)
        raise typer.Exit(1)


@app.command("doctor")
def run_doctor(
    config_file: Path | None = typer.Option(None, "--config", help="YAML config file"),
) -> None:
    """Check dependencies and API configuration."""
    from podscribe.exceptions import ConfigError, DependencyError
    from podscribe.validation import check_api_config, check_ffmpeg

    console.print("[cyan]Running preflight checks...[/cyan]\n")

    table = Table(title="Dependency Status")
    table.add_column("Component", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Version/Details")

    all_passed = True

    try:
        versions = check_ffmpeg()
        table.add_row("FFmpeg", "✓ Installed", versions["ffmpeg_version"])
        table.add_row("FFprobe", "✓ Installed", versions["ffprobe_version"])
    except DependencyError as e:
        table.add_row(e.dependency, "✗ Missing", e.install_hint or "")
        all_passed = False

    try:
        api = check_api_config(load_config(config_file))
        if api["configured"]:
            table.add_row("API", "✓ Configured", f"{api['endpoint']} ({api['models']})")
        else:
            table.add_row("API", "✗ No API key", "Set API_KEY in the environment or a .env file")
            all_passed = False
    except ConfigError as e:
        table.add_row("Config", "✗ Invalid", str(e))
        all_passed = False

    console.print(table)

    if all_passed:
        console.print("\n[green]✓ All checks passed[/green]")
    else:
        console.print("\n[yellow]⚠ Some checks failed[/yellow]")
        raise typer.Exit(1)
