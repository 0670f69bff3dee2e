"""Standalone Markdown for a single Notion block, ignoring its children."""

from __future__ import annotations

import re
from typing import Callable, Mapping
from urllib.parse import unquote, urlparse

from notion2vault.markdown.rich_text import plain_text, rich_text_to_markdown
from notion2vault.notion.blocks import BlockNode, BlockType
from notion2vault.utils.logging import NullLogger, WarningLogger

CALLOUT_TYPES: dict[str, str] = {
    "💡": "tip",
    "⚠️": "warning",
    "❗": "important",
    "📝": "note",
    "✅": "success",
    "❌": "failure",
    "🚨": "danger",
    "❓": "question",
    "💬": "quote",
    "📋": "abstract",
    "🐛": "bug",
    "📖": "example",
    "ℹ️": "info",
}
DEFAULT_CALLOUT_TYPE = "note"

IMAGE_PLACEHOLDER = "image"
FILE_PLACEHOLDER = "file"

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def callout_type_for_icon(icon: str | None) -> str:
    """Map a callout emoji to an Obsidian callout keyword (exact match only)."""

    if not icon:
        return DEFAULT_CALLOUT_TYPE
    return CALLOUT_TYPES.get(icon, DEFAULT_CALLOUT_TYPE)


def format_block(block: BlockNode, diagnostics: WarningLogger | None = None) -> str:
    """Return the Markdown for ``block`` alone.

    Args:
        block: Block to render.
        diagnostics: Receives an ``unsupported-block`` warning for unknown
            types. Defaults to an in-memory logger.

    Returns:
        str: The block's own Markdown, possibly multi-line, or ``""`` when the
        block carries no standalone text.
    """

    kind = block.kind
    if kind is None:
        (diagnostics or NullLogger()).warn(
            source=block.id,
            element_type=block.type or "<missing>",
            message=f"Unsupported block type: {block.type or '<missing>'}",
            code="unsupported-block",
        )
        return ""
    return _FORMATTERS[kind](block)


def derive_name_from_url(url: str) -> str:
    """Return the percent-decoded last path segment of ``url``.

    Returns ``""`` when ``url`` is not absolute or its last segment is empty
    or badly escaped.
    """

    if not url:
        return ""
    try:
        parsed = urlparse(url)
    except ValueError:
        return ""
    if not parsed.scheme:
        return ""
    name = parsed.path.split("/")[-1].split("?")[0]
    if _BAD_ESCAPE.search(name):
        return ""
    try:
        return unquote(name, errors="strict")
    except UnicodeDecodeError:
        return ""


def _text(block: BlockNode) -> str:
    return rich_text_to_markdown(block.rich_text)


def _paragraph(block: BlockNode) -> str:
    return _text(block)


def _heading(level: int) -> Callable[[BlockNode], str]:
    def render(block: BlockNode) -> str:
        return f"{'#' * level} {_text(block)}"

    return render


def _bulleted(block: BlockNode) -> str:
    return f"- {_text(block)}"


def _numbered(block: BlockNode) -> str:
    return f"1. {_text(block)}"


def _to_do(block: BlockNode) -> str:
    mark = "x" if block.payload.get("checked") else " "
    return f"- [{mark}] {_text(block)}"


def _toggle(block: BlockNode) -> str:
    return f"> [!info]- {_text(block)}"


def _quote(block: BlockNode) -> str:
    return "\n".join(f"> {line}" for line in _text(block).split("\n"))


def _callout(block: BlockNode) -> str:
    icon = block.payload.get("icon")
    emoji = icon.get("emoji") if isinstance(icon, Mapping) else None
    callout_type = callout_type_for_icon(emoji if isinstance(emoji, str) else None)
    return f"> [!{callout_type}]\n> {_text(block)}"


def _code(block: BlockNode) -> str:
    language = block.text_field("language")
    if language == "plain text":
        language = ""
    return f"```{language}\n{plain_text(block.rich_text)}\n```"


def _divider(block: BlockNode) -> str:
    return "---"


def _image(block: BlockNode) -> str:
    url = block.nested_field("file", "url") or block.nested_field("external", "url")
    name = _caption_or(block, derive_name_from_url(url) or IMAGE_PLACEHOLDER)
    return f"![{name}]({url})"


def _bookmark(block: BlockNode) -> str:
    url = block.text_field("url")
    return f"[{_caption_or(block, url)}]({url})"


def _link_preview(block: BlockNode) -> str:
    url = block.text_field("url")
    return f"[{url}]({url})"


def _equation(block: BlockNode) -> str:
    return f"$$\n{block.text_field('expression')}\n$$"


def _child_page(block: BlockNode) -> str:
    return f"📄 [[{block.text_field('title') or 'Untitled'}]]"


def _child_database(block: BlockNode) -> str:
    return f"📊 [[{block.text_field('title') or 'Untitled Database'}]]"


def _attachment(block: BlockNode) -> str:
    url = (
        block.nested_field("file", "url")
        or block.nested_field("external", "url")
        or block.text_field("url")
    )
    name = block.text_field("name") or derive_name_from_url(url) or FILE_PLACEHOLDER
    return f"[{name}]({url})"


def _empty(block: BlockNode) -> str:
    return ""


def _caption_or(block: BlockNode, fallback: str) -> str:
    caption = block.caption
    if caption:
        return rich_text_to_markdown(caption)
    return fallback


_FORMATTERS: dict[BlockType, Callable[[BlockNode], str]] = {
    BlockType.PARAGRAPH: _paragraph,
    BlockType.HEADING_1: _heading(1),
    BlockType.HEADING_2: _heading(2),
    BlockType.HEADING_3: _heading(3),
    BlockType.BULLETED_LIST_ITEM: _bulleted,
    BlockType.NUMBERED_LIST_ITEM: _numbered,
    BlockType.TO_DO: _to_do,
    BlockType.TOGGLE: _toggle,
    BlockType.QUOTE: _quote,
    BlockType.CALLOUT: _callout,
    BlockType.CODE: _code,
    BlockType.DIVIDER: _divider,
    BlockType.IMAGE: _image,
    BlockType.BOOKMARK: _bookmark,
    BlockType.LINK_PREVIEW: _link_preview,
    BlockType.EQUATION: _equation,
    BlockType.TABLE_OF_CONTENTS: _empty,
    BlockType.CHILD_PAGE: _child_page,
    BlockType.CHILD_DATABASE: _child_database,
    BlockType.EMBED: _attachment,
    BlockType.VIDEO: _attachment,
    BlockType.FILE: _attachment,
    BlockType.PDF: _attachment,
    BlockType.COLUMN_LIST: _empty,
    BlockType.COLUMN: _empty,
    BlockType.SYNCED_BLOCK: _empty,
}


__all__ = [
    "CALLOUT_TYPES",
    "DEFAULT_CALLOUT_TYPE",
    "callout_type_for_icon",
    "derive_name_from_url",
    "format_block",
]
