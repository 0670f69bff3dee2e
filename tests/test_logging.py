from pathlib import Path

from notion2vault.markdown.renderer import render_page
from notion2vault.notion.api_adapter import MemoryBlockSource
from notion2vault.utils.logging import NullLogger, WarningLogger


def test_logger_writes_unsupported_blocks_to_log_file(block, tmp_path: Path) -> None:
    logger = WarningLogger("My Page!", log_dir=tmp_path / "logs")
    source = MemoryBlockSource(
        {"page": [block("breadcrumb", block_id="b1"), block("paragraph", "ok")]}
    )

    output = render_page(source, "page", logger)

    assert output == "ok"
    assert logger.log_path.parent == tmp_path / "logs"
    assert logger.log_path.name.startswith("My_Page__")
    assert logger.log_path.read_text(encoding="utf-8") == (
        "b1 [W001][breadcrumb] Unsupported block type: breadcrumb\n"
    )
    assert logger.summary().startswith("Found 1 warnings. See My_Page__")


def test_unknown_codes_pass_through() -> None:
    logger = NullLogger()

    logger.warn(source="", element_type="Page", message="odd", code="X999")

    assert logger.warnings[0].format() == "<unknown> [X999][Page] odd"
    assert logger.has_warnings()
    assert logger.summary() == "Found 1 warnings."
