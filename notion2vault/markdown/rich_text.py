"""Render Notion rich-text runs as inline Markdown."""

from __future__ import annotations

from typing import Iterable

from notion2vault.notion.blocks import RichTextSpan


def rich_text_to_markdown(spans: Iterable[RichTextSpan]) -> str:
    """Concatenate spans, each rendered on its own, in input order.

    Args:
        spans: Styled runs as returned by the Notion API.

    Returns:
        str: Inline Markdown; empty when there are no spans.
    """

    return "".join(render_span(span) for span in spans)


def plain_text(spans: Iterable[RichTextSpan]) -> str:
    """Return the literal text of the spans with no markers."""

    return "".join(span.text for span in spans)


def render_span(span: RichTextSpan) -> str:
    """Wrap one span's text in its style markers.

    Markers nest in a fixed order, innermost first: code, bold, italic,
    strikethrough, underline, highlight, link.
    """

    content = span.text
    annotations = span.annotations
    if annotations is None:
        return content

    if annotations.code:
        content = f"`{content}`"
    if annotations.bold:
        content = f"**{content}**"
    if annotations.italic:
        content = f"*{content}*"
    if annotations.strikethrough:
        content = f"~~{content}~~"
    if annotations.underline:
        content = f"<u>{content}</u>"
    if annotations.highlighted:
        content = f"=={content}=="
    if span.href:
        content = f"[{content}]({span.href})"
    return content


__all__ = ["rich_text_to_markdown", "plain_text", "render_span"]
