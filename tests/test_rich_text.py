from notion2vault.markdown.rich_text import plain_text, render_span, rich_text_to_markdown
from notion2vault.notion.blocks import Annotations, RichTextSpan, rich_text_from_api


def test_all_annotations_nest_in_fixed_order() -> None:
    span = RichTextSpan(
        text="text",
        annotations=Annotations(
            bold=True, italic=True, strikethrough=True, underline=True, code=True
        ),
        href="https://example.com",
    )

    assert render_span(span) == "[<u>~~***`text`***~~</u>](https://example.com)"


def test_annotation_order_without_bold() -> None:
    span = RichTextSpan(
        text="text",
        annotations=Annotations(italic=True, strikethrough=True, underline=True, code=True),
        href="https://x",
    )

    assert render_span(span) == "[<u>~~*`text`*~~</u>](https://x)"


def test_background_color_highlights_inside_link() -> None:
    span = RichTextSpan(
        text="hot",
        annotations=Annotations(bold=True, color="yellow_background"),
        href="https://x",
    )

    assert render_span(span) == "[==**hot**==](https://x)"


def test_foreground_color_is_not_highlighted() -> None:
    span = RichTextSpan(text="red", annotations=Annotations(color="red"))

    assert render_span(span) == "red"


def test_span_without_annotations_is_literal() -> None:
    span = RichTextSpan(text="**raw**", annotations=None, href="https://ignored")

    assert render_span(span) == "**raw**"


def test_spans_concatenate_in_order_without_separator(rich_text) -> None:
    spans = rich_text_from_api(
        [
            rich_text("Hello "),
            rich_text("bold", bold=True),
            rich_text(" and "),
            rich_text("link", href="https://example.com"),
        ]
    )

    assert rich_text_to_markdown(spans) == "Hello **bold** and [link](https://example.com)"


def test_adjacent_styled_spans_are_not_merged(rich_text) -> None:
    spans = rich_text_from_api([rich_text("a", bold=True), rich_text("b", bold=True)])

    assert rich_text_to_markdown(spans) == "**a****b**"


def test_empty_sequence_renders_empty_string() -> None:
    assert rich_text_to_markdown(()) == ""
    assert rich_text_to_markdown(rich_text_from_api(None)) == ""


def test_from_api_falls_back_to_text_content() -> None:
    spans = rich_text_from_api([{"type": "text", "text": {"content": "typed"}}])

    assert spans == (RichTextSpan(text="typed"),)
    assert plain_text(spans) == "typed"


def test_plain_text_drops_markers(rich_text) -> None:
    spans = rich_text_from_api([rich_text("x = 1", code=True), rich_text("\ny", bold=True)])

    assert plain_text(spans) == "x = 1\ny"
