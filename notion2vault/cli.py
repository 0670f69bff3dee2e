from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from .notion.api_adapter import NotionFetchError
from .runner import run_import, run_render, run_search
from .utils.env import load_env_file
from .utils.logging import WarningLogger

app = typer.Typer(
    name="notion2vault",
    help="Import Notion pages into an Obsidian vault as Markdown.",
    add_completion=True,
)

console = Console()
err_console = Console(stderr=True)


@app.callback()
def configure(
    env_file: Path = typer.Option(
        Path(".env"),
        "--env-file",
        help="KEY=VALUE file loaded before running (NOTION_TOKEN, NOTION_VERSION).",
    ),
) -> None:
    """Load configuration shared by every command."""
    load_env_file(env_file)


@app.command("search")
def search(
    query: str = typer.Argument(..., help="Text to look for in page titles."),
) -> None:
    """
    Search Notion pages the integration can see, newest edits first.

    Example:
        notion2vault search "meeting notes"
    """
    try:
        pages = run_search(query)
    except (NotionFetchError, RuntimeError) as exc:
        console.print(f"❌ Error searching Notion: {escape(str(exc))}")
        raise typer.Exit(code=1)

    if not pages:
        console.print("No pages found.")
        return

    for page in pages:
        icon = page.icon or "📄"
        console.print(
            f"{icon} {escape(page.title)}  [dim]{page.id}  last edited {_format_date(page.last_edited_time)}[/dim]"
        )


@app.command("render")
def render(
    page_id: str = typer.Argument(..., help="Notion page ID or URL."),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        dir_okay=False,
        help="Write the Markdown to this file instead of stdout.",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit non-zero when unsupported blocks were skipped.",
    ),
) -> None:
    """
    Render a Notion page as Markdown without touching the vault.

    Examples:
        notion2vault render <PAGE_ID>
        notion2vault render <PAGE_URL> --output page.md
    """
    logger = WarningLogger("render")
    try:
        markdown = run_render(page_id, logger=logger)
    except (NotionFetchError, RuntimeError) as exc:
        console.print(f"❌ Failed to render page: {escape(str(exc))}")
        raise typer.Exit(code=1)

    if output:
        output.write_text(markdown, encoding="utf-8")
        console.print(f"✅ Wrote {escape(str(output))}")
    else:
        typer.echo(markdown)

    if logger.has_warnings():
        err_console.print(logger.summary())
    if strict and logger.has_warnings():
        raise typer.Exit(code=1)


@app.command("import")
def import_page(
    page_id: str = typer.Argument(..., help="Notion page ID or URL."),
    vault: Path = typer.Option(
        ...,
        "--vault",
        "-v",
        exists=True,
        file_okay=False,
        dir_okay=True,
        help="Root directory of the Obsidian vault.",
    ),
    folder: Optional[str] = typer.Option(
        None,
        "--folder",
        "-f",
        help="Vault folder for new notes (overrides NOTION2VAULT_FOLDER).",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit non-zero when warnings were recorded during the import.",
    ),
) -> None:
    """
    Import a Notion page into the vault.

    A note that already carries the page's notion_id in its frontmatter is
    updated in place; otherwise a new note named after the page is created.

    Examples:
        notion2vault import <PAGE_ID> --vault ~/Notes
        notion2vault import <PAGE_ID> --vault ~/Notes --folder Inbox
    """
    logger = WarningLogger("import")
    try:
        with console.status("Fetching page from Notion…"):
            page, result = run_import(page_id, vault, folder=folder, logger=logger)
    except (NotionFetchError, RuntimeError) as exc:
        console.print(f"❌ Failed to import page: {escape(str(exc))}")
        raise typer.Exit(code=1)

    verb = "Imported" if result.created else "Updated"
    console.print(f"✅ {verb} {escape(page.title)} → {escape(str(result.path))}")
    if logger.has_warnings():
        console.print(logger.summary())
    if strict and logger.has_warnings():
        raise typer.Exit(code=1)


def _format_date(timestamp: str) -> str:
    if not timestamp:
        return "unknown"
    try:
        return datetime.fromisoformat(timestamp.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return timestamp


def main() -> None:
    """Entry point for Python -m execution."""
    app()


if __name__ == "__main__":
    main()
