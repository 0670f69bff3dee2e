"""Entry points for running notion2vault operations."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from .markdown.renderer import MarkdownRenderer
from .notion.api_adapter import (
    BlockSource,
    NotionClientSource,
    PageSummary,
    get_default_source,
)
from .utils.logging import WarningLogger
from .vault.writer import DEFAULT_FOLDER, VaultWriter, WriteResult


def default_folder() -> str:
    """Return the vault folder for imports (``NOTION2VAULT_FOLDER`` or the default)."""

    return os.getenv("NOTION2VAULT_FOLDER") or DEFAULT_FOLDER


def run_render(
    page_id: str,
    *,
    source: BlockSource | None = None,
    logger: WarningLogger | None = None,
) -> str:
    """Render a Notion page to Markdown.

    Args:
        page_id: Notion page ID or URL.
        source: Block source to read from; defaults to the Notion API.
        logger: Warning logger that records unsupported blocks.

    Returns:
        str: The rendered Markdown document.

    Raises:
        NotionFetchError: If any part of the page cannot be fetched.
    """

    active_source = source or get_default_source()
    return MarkdownRenderer(active_source, logger).render(page_id)


def run_import(
    page_id: str,
    vault_path: Path,
    *,
    folder: Optional[str] = None,
    source: NotionClientSource | None = None,
    logger: WarningLogger | None = None,
) -> tuple[PageSummary, WriteResult]:
    """Render a Notion page and file it into the vault.

    Args:
        page_id: Notion page ID or URL.
        vault_path: Root of the Obsidian vault.
        folder: Folder inside the vault for new notes.
        source: Notion source used for page metadata and blocks.
        logger: Warning logger shared by rendering and writing.

    Returns:
        tuple[PageSummary, WriteResult]: The imported page and where it landed.

    Raises:
        NotionFetchError: If the page or any of its blocks cannot be fetched.
    """

    active_source = source or get_default_source()
    page = active_source.get_page(page_id)
    if page.title == "Untitled" and logger is not None:
        logger.warn(
            source=page.id,
            element_type="Page",
            message="Page has no title; the note will use a placeholder name.",
            code="untitled-page",
        )

    markdown = MarkdownRenderer(active_source, logger).render(page.id or page_id)
    writer = VaultWriter(vault_path, folder or default_folder(), logger)
    return page, writer.write_page(page, markdown)


def run_search(
    query: str, *, source: NotionClientSource | None = None
) -> list[PageSummary]:
    """Search Notion pages whose title matches ``query``."""

    if not query:
        return []
    active_source = source or get_default_source()
    return active_source.search_pages(query)


__all__ = ["run_render", "run_import", "run_search", "default_folder"]
