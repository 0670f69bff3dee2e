"""Write rendered pages into an Obsidian vault folder."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from notion2vault.notion.api_adapter import PageSummary
from notion2vault.utils.logging import NullLogger, WarningLogger

DEFAULT_FOLDER = "Notion_Search"
UNTITLED_NOTE = "Untitled Notion Page"

_INVALID_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|]')
_NOTION_ID_PATTERN = re.compile(r"^---[\s\S]*?notion_id:\s*(.+?)\s[\s\S]*?---")


@dataclass(frozen=True)
class WriteResult:
    """Outcome of writing a page into the vault."""

    path: Path
    created: bool


def sanitize_filename(title: str) -> str:
    """Replace characters that are invalid in vault file names with ``-``."""

    return _INVALID_FILENAME_CHARS.sub("-", title).strip() or UNTITLED_NOTE


def build_frontmatter(url: str, page_id: str) -> str:
    """Return the YAML header recording where a note came from."""

    return f"---\nnotion_url: {url}\nnotion_id: {page_id}\n---\n\n"


def unique_note_path(folder: Path, name: str) -> Path:
    """Return ``folder/name.md``, or ``name (n).md`` when that is taken."""

    candidate = folder / f"{name}.md"
    counter = 1
    while candidate.exists():
        candidate = folder / f"{name} ({counter}).md"
        counter += 1
    return candidate


def read_notion_id(content: str) -> str | None:
    """Return the ``notion_id`` recorded in a note's frontmatter, if any."""

    match = _NOTION_ID_PATTERN.match(content)
    if not match:
        return None
    return match.group(1).strip()


def find_note_by_notion_id(
    vault_root: Path, notion_id: str, logger: WarningLogger | None = None
) -> Path | None:
    """Locate an already imported note carrying ``notion_id``.

    Args:
        vault_root: Directory scanned recursively for Markdown notes. Dot-prefixed
            files and folders such as ``.trash`` are skipped.
        notion_id: Page ID to look for.
        logger: Receives a ``file-io-warning`` for every unreadable note.

    Returns:
        Path | None: The first matching note, in sorted path order.
    """

    active_logger = logger or NullLogger()
    if not vault_root.is_dir():
        return None
    for note in sorted(vault_root.rglob("*.md")):
        if _is_hidden(note.relative_to(vault_root)):
            continue
        try:
            content = note.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            active_logger.warn(
                source=note.as_posix(),
                element_type="Note",
                message=f"Could not read note while looking for notion_id: {exc}",
                code="file-io-warning",
            )
            continue
        if read_notion_id(content) == notion_id:
            return note
    return None


def _is_hidden(relative: Path) -> bool:
    return any(part.startswith(".") for part in relative.parts)


class VaultWriter:
    """Create or refresh notes for imported Notion pages."""

    def __init__(
        self,
        vault_root: Path,
        folder: str = DEFAULT_FOLDER,
        logger: WarningLogger | None = None,
    ) -> None:
        self.vault_root = vault_root
        self.folder = vault_root / folder
        self.logger = logger or NullLogger()

    def write_page(self, page: PageSummary, markdown: str) -> WriteResult:
        """Write ``markdown`` for ``page`` with its frontmatter header.

        A note that already records the page's ``notion_id`` is overwritten in
        place; otherwise a new note named after the page title is created.
        """

        content = build_frontmatter(page.url, page.id) + markdown
        existing = find_note_by_notion_id(self.vault_root, page.id, self.logger)
        if existing is not None:
            existing.write_text(content, encoding="utf-8")
            return WriteResult(path=existing, created=False)

        self.folder.mkdir(parents=True, exist_ok=True)
        target = unique_note_path(self.folder, sanitize_filename(page.title))
        target.write_text(content, encoding="utf-8")
        return WriteResult(path=target, created=True)


__all__ = [
    "DEFAULT_FOLDER",
    "VaultWriter",
    "WriteResult",
    "build_frontmatter",
    "find_note_by_notion_id",
    "read_notion_id",
    "sanitize_filename",
    "unique_note_path",
]
