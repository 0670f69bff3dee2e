"""Block sources: where the renderer gets Notion blocks from."""

from __future__ import annotations

import os
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence, cast

import httpx
from notion_client import Client
from notion_client.errors import (
    APIResponseError,
    HTTPResponseError,
    RequestTimeoutError,
)

from notion2vault.notion.blocks import BlockNode

PAGE_SIZE = 100
SEARCH_PAGE_SIZE = 20

_FETCH_ERRORS = (
    APIResponseError,
    HTTPResponseError,
    RequestTimeoutError,
    httpx.TransportError,
)


class NotionFetchError(RuntimeError):
    """Raised when any page of a Notion request fails."""


@dataclass(frozen=True)
class PageSummary:
    """The bits of a Notion page needed to find and file it."""

    id: str
    title: str
    url: str = ""
    icon: str | None = None
    last_edited_time: str = ""

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "PageSummary":
        icon = data.get("icon")
        emoji = icon.get("emoji") if isinstance(icon, Mapping) else None
        return cls(
            id=str(data.get("id") or ""),
            title=page_title(data),
            url=str(data.get("url") or ""),
            icon=emoji if isinstance(emoji, str) else None,
            last_edited_time=str(data.get("last_edited_time") or ""),
        )


class BlockSource(ABC):
    """
    Capability the renderer calls through to load children on demand.

    Implementations must return complete, order-preserving sequences and
    fail the whole call if any page of results cannot be fetched.
    """

    @abstractmethod
    def fetch_children(self, block_id: str) -> list[BlockNode]:
        """Return every child of ``block_id`` in document order."""
        raise NotImplementedError

    def fetch_root_blocks(self, document_id: str) -> list[BlockNode]:
        """Return the top-level blocks of a page."""
        return self.fetch_children(document_id)


class MemoryBlockSource(BlockSource):
    """Source backed by a mapping of block id to raw child payloads."""

    def __init__(
        self, children: Mapping[str, Sequence[BlockNode | Mapping[str, Any]]]
    ) -> None:
        self._children = {
            key: [_as_node(item) for item in items] for key, items in children.items()
        }
        self.requested: list[str] = []

    def fetch_children(self, block_id: str) -> list[BlockNode]:
        self.requested.append(block_id)
        return list(self._children.get(block_id, []))


def get_default_source() -> "NotionClientSource":
    """Return a source using the official Notion SDK.

    Returns:
        NotionClientSource: Configured source ready for fetching pages.

    Raises:
        RuntimeError: If a Notion token is not provided via ``NOTION_TOKEN``.
    """

    token = os.getenv("NOTION_TOKEN")
    if not token:
        raise RuntimeError("NOTION_TOKEN is required to read content from Notion.")

    return NotionClientSource(token=token, notion_version=os.getenv("NOTION_VERSION"))


class NotionClientSource(BlockSource):
    """Source backed by the official Notion Python client."""

    def __init__(self, token: str, notion_version: str | None = None) -> None:
        options: dict[str, Any] = {"auth": token}
        if notion_version:
            options["notion_version"] = notion_version
        self.client = Client(**options)

    def fetch_children(self, block_id: str) -> list[BlockNode]:
        normalized = normalize_page_id(block_id)
        return [
            BlockNode.from_api(item)
            for item in self._paginate(
                self.client.blocks.children.list,
                f"blocks/{normalized}/children",
                block_id=normalized,
                page_size=PAGE_SIZE,
            )
        ]

    def search_pages(self, query: str) -> list[PageSummary]:
        """Search pages by title, most recently edited first."""

        response = self._call(
            self.client.search,
            "search",
            query=query,
            filter={"value": "page", "property": "object"},
            sort={"direction": "descending", "timestamp": "last_edited_time"},
            page_size=SEARCH_PAGE_SIZE,
        )
        return [
            PageSummary.from_api(item)
            for item in _results(response)
            if item.get("object") == "page"
        ]

    def get_page(self, page_id: str) -> PageSummary:
        normalized = normalize_page_id(page_id)
        response = self._call(
            self.client.pages.retrieve, f"pages/{normalized}", page_id=normalized
        )
        return PageSummary.from_api(response)

    def _paginate(
        self, method: Any, endpoint: str, **kwargs: Any
    ) -> Iterable[Mapping[str, Any]]:
        items: list[Mapping[str, Any]] = []
        cursor: str | None = None
        while True:
            params = dict(kwargs)
            if cursor:
                params["start_cursor"] = cursor
            response = self._call(method, endpoint, **params)
            items.extend(_results(response))
            cursor = response.get("next_cursor") if response.get("has_more") else None
            if not cursor:
                return items

    def _call(self, method: Any, endpoint: str, **kwargs: Any) -> dict[str, Any]:
        try:
            return cast(dict[str, Any], method(**kwargs))
        except _FETCH_ERRORS as exc:
            raise NotionFetchError(f"Notion API request failed [{endpoint}]: {exc}") from exc


def page_title(page: Mapping[str, Any]) -> str:
    """Return the plain text of a page's ``title`` property, or ``"Untitled"``."""

    properties = page.get("properties")
    if not isinstance(properties, Mapping):
        return "Untitled"
    for prop in properties.values():
        if isinstance(prop, Mapping) and prop.get("type") == "title":
            items = prop.get("title") or []
            title = "".join(
                str(item.get("plain_text") or "")
                for item in items
                if isinstance(item, Mapping)
            )
            return title or "Untitled"
    return "Untitled"


def normalize_page_id(raw_id: str) -> str:
    """Extract the canonical Notion ID from a URL, slug, or raw ID."""

    cleaned = raw_id.strip()
    match = re.search(r"([0-9a-fA-F]{32})(?:[?#].*)?$", cleaned.replace("-", ""))
    if not match:
        return cleaned
    hex_id = match.group(1).lower()
    return (
        f"{hex_id[0:8]}-{hex_id[8:12]}-{hex_id[12:16]}-{hex_id[16:20]}-{hex_id[20:32]}"
    )


def _results(response: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    results = response.get("results") or []
    return [item for item in results if isinstance(item, Mapping)]


def _as_node(item: BlockNode | Mapping[str, Any]) -> BlockNode:
    if isinstance(item, BlockNode):
        return item
    return BlockNode.from_api(item)


__all__ = [
    "BlockSource",
    "MemoryBlockSource",
    "NotionClientSource",
    "NotionFetchError",
    "PageSummary",
    "get_default_source",
    "normalize_page_id",
    "page_title",
]
