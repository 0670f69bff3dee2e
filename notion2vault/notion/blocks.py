"""Immutable snapshots of Notion blocks and rich-text runs.

Blocks are built from the dictionaries returned by the Notion API. Payload
access is permissive: any missing field reads as an empty value so a malformed
block degrades into empty Markdown instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Sequence


class BlockType(str, Enum):
    """Block types the renderer knows how to place."""

    PARAGRAPH = "paragraph"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    BULLETED_LIST_ITEM = "bulleted_list_item"
    NUMBERED_LIST_ITEM = "numbered_list_item"
    TO_DO = "to_do"
    TOGGLE = "toggle"
    QUOTE = "quote"
    CALLOUT = "callout"
    CODE = "code"
    DIVIDER = "divider"
    IMAGE = "image"
    BOOKMARK = "bookmark"
    LINK_PREVIEW = "link_preview"
    EQUATION = "equation"
    TABLE_OF_CONTENTS = "table_of_contents"
    CHILD_PAGE = "child_page"
    CHILD_DATABASE = "child_database"
    EMBED = "embed"
    VIDEO = "video"
    FILE = "file"
    PDF = "pdf"
    COLUMN_LIST = "column_list"
    COLUMN = "column"
    SYNCED_BLOCK = "synced_block"


class BlockRole(Enum):
    """Structural role deciding how a block's children are placed."""

    LIST_ITEM = "list_item"
    QUOTE_CONTAINER = "quote_container"
    TRANSPARENT = "transparent"
    OTHER = "other"


_ROLES: dict[str, BlockRole] = {
    BlockType.BULLETED_LIST_ITEM.value: BlockRole.LIST_ITEM,
    BlockType.NUMBERED_LIST_ITEM.value: BlockRole.LIST_ITEM,
    BlockType.TO_DO.value: BlockRole.LIST_ITEM,
    BlockType.QUOTE.value: BlockRole.QUOTE_CONTAINER,
    BlockType.CALLOUT.value: BlockRole.QUOTE_CONTAINER,
    BlockType.TOGGLE.value: BlockRole.QUOTE_CONTAINER,
    BlockType.COLUMN_LIST.value: BlockRole.TRANSPARENT,
    BlockType.COLUMN.value: BlockRole.TRANSPARENT,
    BlockType.SYNCED_BLOCK.value: BlockRole.TRANSPARENT,
}


def classify(block_type: str) -> BlockRole:
    """Return the structural role for a raw block type tag."""

    return _ROLES.get(block_type, BlockRole.OTHER)


@dataclass(frozen=True)
class Annotations:
    """Style flags attached to a rich-text run."""

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    underline: bool = False
    code: bool = False
    color: str = "default"

    @property
    def highlighted(self) -> bool:
        return "background" in self.color

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "Annotations":
        return cls(
            bold=bool(data.get("bold")),
            italic=bool(data.get("italic")),
            strikethrough=bool(data.get("strikethrough")),
            underline=bool(data.get("underline")),
            code=bool(data.get("code")),
            color=str(data.get("color") or "default"),
        )


@dataclass(frozen=True)
class RichTextSpan:
    """One contiguous styled run of inline text."""

    text: str
    annotations: Annotations | None = None
    href: str | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "RichTextSpan":
        """Build a span from a Notion rich-text object.

        ``plain_text`` is preferred; ``text.content`` covers payloads that were
        written by hand rather than returned by the API.
        """

        text = data.get("plain_text")
        if text is None:
            text = _mapping(data.get("text")).get("content", "")
        annotations = data.get("annotations")
        return cls(
            text=str(text or ""),
            annotations=(
                Annotations.from_api(annotations)
                if isinstance(annotations, Mapping)
                else None
            ),
            href=data.get("href") or None,
        )


def rich_text_from_api(items: Any) -> tuple[RichTextSpan, ...]:
    """Convert a Notion rich-text array into spans, ignoring junk entries."""

    if not isinstance(items, Sequence) or isinstance(items, str):
        return ()
    return tuple(
        RichTextSpan.from_api(item) for item in items if isinstance(item, Mapping)
    )


@dataclass(frozen=True)
class BlockNode:
    """A node of the source document tree.

    ``type`` keeps the raw tag so new Notion block types survive the trip;
    ``kind`` is the matching :class:`BlockType` or ``None`` when unknown.
    """

    id: str
    type: str
    payload: Mapping[str, Any] = field(default_factory=dict, hash=False)
    has_children: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "payload", MappingProxyType(dict(self.payload)))

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "BlockNode":
        block_type = str(data.get("type") or "")
        return cls(
            id=str(data.get("id") or ""),
            type=block_type,
            payload=_mapping(data.get(block_type)),
            has_children=bool(data.get("has_children")),
        )

    @property
    def kind(self) -> BlockType | None:
        try:
            return BlockType(self.type)
        except ValueError:
            return None

    @property
    def role(self) -> BlockRole:
        return classify(self.type)

    @property
    def rich_text(self) -> tuple[RichTextSpan, ...]:
        return rich_text_from_api(self.payload.get("rich_text"))

    @property
    def caption(self) -> tuple[RichTextSpan, ...]:
        return rich_text_from_api(self.payload.get("caption"))

    def text_field(self, name: str) -> str:
        """Return a top-level string payload field, or ``""``."""

        value = self.payload.get(name)
        return value if isinstance(value, str) else ""

    def nested_field(self, *path: str) -> str:
        """Return a string found by walking nested payload mappings."""

        current: Any = self.payload
        for key in path:
            if not isinstance(current, Mapping):
                return ""
            current = current.get(key)
        return current if isinstance(current, str) else ""


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


__all__ = [
    "Annotations",
    "BlockNode",
    "BlockRole",
    "BlockType",
    "RichTextSpan",
    "classify",
    "rich_text_from_api",
]
