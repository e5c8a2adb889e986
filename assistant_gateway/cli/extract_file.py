"""CLI utility for running the upload extractors on local files."""
import asyncio
import json
import mimetypes
from pathlib import Path

import click

from assistant_gateway.extractors import extract_file_content
from assistant_gateway.schemas.chat import UploadedFile
from assistant_gateway.schemas.extraction import ExtractionResult


def format_bytes(num_bytes: int) -> str:
    """Format bytes as human-readable string."""
    size = float(num_bytes)
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024.0:
            return f"{size:.1f}{unit}"
        size /= 1024.0
    return f"{size:.1f}TB"


def load_upload(path: Path) -> UploadedFile:
    """Read a local file into the same shape the browser client uploads."""
    data = path.read_bytes()
    mime_type, _ = mimetypes.guess_type(path.name)
    return UploadedFile(name=path.name, mime_type=mime_type or "", size=len(data), content=data)


def print_result(result: ExtractionResult) -> None:
    """Print one extraction result with a short header."""
    click.echo("\n" + "=" * 70)
    click.echo(f"FILE: {result.name}")
    click.echo("=" * 70)
    click.echo(f"  Type:       {result.mime_type or 'unknown'}")
    click.echo(f"  Size:       {format_bytes(result.size)}")
    click.echo(f"  Extractor:  {result.extractor}")
    click.echo(f"  Duration:   {result.duration_ms} ms")
    status = "OK" if result.success else "FAILED (placeholder returned)"
    click.echo(f"  Status:     {status}")
    if result.truncated:
        click.echo("  Note:       content truncated")
    click.echo("-" * 70)
    click.echo(result.content)


def print_json_output(results: list[ExtractionResult]) -> None:
    """Print results as JSON."""
    output = [
        {
            "name": result.name,
            "type": result.mime_type,
            "size": result.size,
            "extractor": result.extractor,
            "success": result.success,
            "truncated": result.truncated,
            "duration_ms": result.duration_ms,
            "content": result.content,
        }
        for result in results
    ]
    click.echo(json.dumps(output, indent=2, ensure_ascii=False))


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output results as JSON instead of formatted text",
)
@click.option(
    "--max-chars",
    type=click.IntRange(min=1),
    default=None,
    help="Limit extracted characters per file (defaults to 5000)",
)
def extract_files(paths: tuple[str, ...], output_json: bool, max_chars: int | None) -> None:
    """
    Show the text the chat assistant would see for each uploaded file.

    Examples:

        # Formatted output
        assist-extract report.pdf budget.xlsx

        # JSON output for automation
        assist-extract --json notes.docx
    """
    uploads = [load_upload(Path(path)) for path in paths]

    async def process() -> list[ExtractionResult]:
        return [await extract_file_content(upload, max_chars=max_chars) for upload in uploads]

    results = asyncio.run(process())

    if output_json:
        print_json_output(results)
    else:
        for result in results:
            print_result(result)

    if not all(result.success for result in results):
        raise click.exceptions.Exit(1)


if __name__ == "__main__":
    extract_files()
