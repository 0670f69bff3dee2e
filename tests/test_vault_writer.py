from pathlib import Path

from notion2vault.notion.api_adapter import PageSummary
from notion2vault.utils.logging import NullLogger
from notion2vault.vault.writer import (
    VaultWriter,
    build_frontmatter,
    find_note_by_notion_id,
    read_notion_id,
    sanitize_filename,
    unique_note_path,
)


def _page(page_id: str = "page-1", title: str = "Weekly: Plan?") -> PageSummary:
    return PageSummary(id=page_id, title=title, url=f"https://www.notion.so/{page_id}")


def test_sanitize_filename_replaces_invalid_characters() -> None:
    assert sanitize_filename('a\\b/c:d*e?f"g<h>i|j') == "a-b-c-d-e-f-g-h-i-j"
    assert sanitize_filename("") == "Untitled Notion Page"


def test_frontmatter_records_source() -> None:
    assert build_frontmatter("https://n.so/x", "x") == (
        "---\nnotion_url: https://n.so/x\nnotion_id: x\n---\n\n"
    )


def test_read_notion_id_from_frontmatter() -> None:
    content = build_frontmatter("https://n.so/x", "abc-123") + "# Body"

    assert read_notion_id(content) == "abc-123"
    assert read_notion_id("# no frontmatter\nnotion_id: nope\n") is None


def test_unique_note_path_counts_up(tmp_path: Path) -> None:
    (tmp_path / "Note.md").write_text("", encoding="utf-8")
    (tmp_path / "Note (1).md").write_text("", encoding="utf-8")

    assert unique_note_path(tmp_path, "Note") == tmp_path / "Note (2).md"


def test_write_page_creates_new_note(tmp_path: Path) -> None:
    writer = VaultWriter(tmp_path)

    result = writer.write_page(_page(), "Body")

    assert result.created is True
    assert result.path == tmp_path / "Notion_Search" / "Weekly- Plan-.md"
    assert result.path.read_text(encoding="utf-8") == (
        "---\nnotion_url: https://www.notion.so/page-1\nnotion_id: page-1\n---\n\nBody"
    )


def test_write_page_updates_existing_note_anywhere_in_vault(tmp_path: Path) -> None:
    existing = tmp_path / "Projects" / "Renamed.md"
    existing.parent.mkdir()
    existing.write_text(build_frontmatter("https://old", "page-1") + "Old", encoding="utf-8")

    result = VaultWriter(tmp_path).write_page(_page(), "New")

    assert result.created is False
    assert result.path == existing
    assert existing.read_text(encoding="utf-8").endswith("New")
    assert not (tmp_path / "Notion_Search").exists()


def test_write_page_avoids_clobbering_same_title(tmp_path: Path) -> None:
    writer = VaultWriter(tmp_path, folder="Inbox")

    first = writer.write_page(_page("a", "Same"), "A")
    second = writer.write_page(_page("b", "Same"), "B")

    assert first.path.name == "Same.md"
    assert second.path.name == "Same (1).md"


def test_unreadable_notes_are_reported_and_skipped(tmp_path: Path) -> None:
    (tmp_path / "broken.md").write_bytes(b"\xff\xfe\xfa")
    match = tmp_path / "match.md"
    match.write_text(build_frontmatter("u", "target") + "x", encoding="utf-8")
    logger = NullLogger()

    found = find_note_by_notion_id(tmp_path, "target", logger)

    assert found == match
    assert [entry.code for entry in logger.warnings] == ["W003"]


def test_hidden_folders_are_not_searched(tmp_path: Path) -> None:
    trashed = tmp_path / ".trash" / "Plan.md"
    trashed.parent.mkdir()
    trashed.write_text(build_frontmatter("u", "page-1") + "old", encoding="utf-8")
    page = PageSummary(id="page-1", title="Plan", url="u")

    result = VaultWriter(tmp_path).write_page(page, "new")

    assert result.created
    assert result.path == tmp_path / "Notion_Search" / "Plan.md"
    assert trashed.read_text(encoding="utf-8").endswith("old")


def test_missing_vault_has_no_match(tmp_path: Path) -> None:
    assert find_note_by_notion_id(tmp_path / "absent", "x") is None
