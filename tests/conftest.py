from pathlib import Path
import sys
from typing import Any, Callable

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


def _rich_text(text: str, **annotations: Any) -> dict[str, Any]:
    href = annotations.pop("href", None)
    item: dict[str, Any] = {
        "type": "text",
        "plain_text": text,
        "href": href,
        "annotations": {
            "bold": False,
            "italic": False,
            "strikethrough": False,
            "underline": False,
            "code": False,
            "color": "default",
            **annotations,
        },
    }
    return item


def _block(
    block_type: str,
    text: str | None = None,
    *,
    block_id: str | None = None,
    has_children: bool = False,
    **payload: Any,
) -> dict[str, Any]:
    body = dict(payload)
    if text is not None:
        body["rich_text"] = [_rich_text(text)]
    return {
        "object": "block",
        "id": block_id or f"{block_type}-{text or 'block'}",
        "type": block_type,
        "has_children": has_children,
        block_type: body,
    }


@pytest.fixture
def rich_text() -> Callable[..., dict[str, Any]]:
    return _rich_text


@pytest.fixture
def block() -> Callable[..., dict[str, Any]]:
    return _block
