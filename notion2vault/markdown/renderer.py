"""Recursive conversion of a Notion block tree into Markdown."""

from __future__ import annotations

from typing import Sequence

from notion2vault.markdown.formatter import format_block
from notion2vault.notion.api_adapter import BlockSource
from notion2vault.notion.blocks import BlockNode, BlockRole
from notion2vault.utils.logging import NullLogger, WarningLogger

INDENT = "    "
GROUP_SEPARATOR = "\n\n"


class MarkdownRenderer:
    """Walk a block tree depth-first and assemble Obsidian Markdown.

    Children are fetched from ``source`` only when the walk reaches their
    parent. Siblings are rendered strictly in order; a failing fetch aborts
    the whole render.
    """

    def __init__(
        self, source: BlockSource, diagnostics: WarningLogger | None = None
    ) -> None:
        self.source = source
        self.diagnostics = diagnostics or NullLogger()

    def render(self, document_id: str) -> str:
        """Render a whole page.

        Args:
            document_id: Notion page (or block) whose children form the document.

        Returns:
            str: The Markdown document without any frontmatter.

        Raises:
            NotionFetchError: If any child listing cannot be fetched.
        """

        blocks = self.source.fetch_root_blocks(document_id)
        return self.render_blocks(blocks)

    def render_blocks(self, blocks: Sequence[BlockNode], depth: int = 0) -> str:
        """Render a sibling sequence at the given list depth."""

        groups: list[str] = []
        for block in blocks:
            own = format_block(block, self.diagnostics)
            if own:
                groups.append(indent_lines(own, depth))

            if block.has_children:
                children = self._render_children(block, depth)
                if children:
                    groups.append(children)

        return GROUP_SEPARATOR.join(groups)

    def _render_children(self, block: BlockNode, depth: int) -> str:
        children = self.source.fetch_children(block.id)
        role = block.role

        if role is BlockRole.LIST_ITEM:
            return self.render_blocks(children, depth + 1)

        if role is BlockRole.QUOTE_CONTAINER:
            inner = self.render_blocks(children, 0)
            if not inner:
                return ""
            return indent_lines(quote_lines(inner), depth)

        return self.render_blocks(children, depth)


def render_page(
    source: BlockSource, document_id: str, diagnostics: WarningLogger | None = None
) -> str:
    """Shortcut for ``MarkdownRenderer(source, diagnostics).render(document_id)``."""

    return MarkdownRenderer(source, diagnostics).render(document_id)


def indent_lines(text: str, depth: int) -> str:
    """Prefix every line with four spaces per depth level."""

    if depth <= 0:
        return text
    prefix = INDENT * depth
    return "\n".join(f"{prefix}{line}" for line in text.split("\n"))


def quote_lines(text: str) -> str:
    """Prefix every line with ``> ``; empty lines become a bare ``>``."""

    return "\n".join(f"> {line}" if line else ">" for line in text.split("\n"))


__all__ = [
    "MarkdownRenderer",
    "render_page",
    "indent_lines",
    "quote_lines",
    "INDENT",
]
