"""Tests for the markdown-it → event stream adapter."""

from __future__ import annotations

from mdvi.events import (
    BlockQuote,
    CodeBlock,
    DisplayMath,
    End,
    FootnoteDefinition,
    FootnoteReference,
    Heading,
    Html,
    HtmlBlock,
    Image,
    InlineHtml,
    Item,
    Link,
    List,
    Paragraph,
    Start,
    TableCell,
    TableHead,
    TableRow,
    TaskListMarker,
    Text,
)
from mdvi.tokenizer import iter_events


def test_heading_events() -> None:
    assert list(iter_events("## Hi")) == [
        Start(Heading(level=2)),
        Text("Hi"),
        End(Heading(level=2)),
    ]


def test_tight_list_items_have_no_paragraphs() -> None:
    assert list(iter_events("- a")) == [
        Start(List(start=None)),
        Start(Item()),
        Text("a"),
        End(Item()),
        End(List(start=None)),
    ]


def test_ordered_list_start_defaults_to_one() -> None:
    assert list(iter_events("1. a"))[0] == Start(List(start=1))
    assert list(iter_events("4. a"))[0] == Start(List(start=4))


def test_fenced_code_block_carries_language_and_content() -> None:
    assert list(iter_events("```py\nx = 1\n```")) == [
        Start(CodeBlock(lang="py")),
        Text("x = 1\n"),
        End(CodeBlock(lang="py")),
    ]


def test_image_token_is_unfolded_into_start_text_end() -> None:
    assert list(iter_events("![alt](b.png)")) == [
        Start(Paragraph()),
        Start(Image(dest="b.png")),
        Text("alt"),
        End(Image(dest="b.png")),
        End(Paragraph()),
    ]


def test_link_end_carries_destination() -> None:
    events = list(iter_events("[x](https://example.com)"))
    assert events[1] == Start(Link(dest="https://example.com"))
    assert events[3] == End(Link(dest="https://example.com"))


def test_block_quote_nesting() -> None:
    events = list(iter_events("> > deep"))
    assert events[:2] == [Start(BlockQuote()), Start(BlockQuote())]
    assert events[-2:] == [End(BlockQuote()), End(BlockQuote())]


def test_task_checkbox_becomes_marker() -> None:
    events = list(iter_events("- [x] done\n- [ ] open"))
    assert TaskListMarker(checked=True) in events
    assert TaskListMarker(checked=False) in events
    assert Text("done") in events
    assert Text("open") in events
    assert not any(isinstance(e, InlineHtml) for e in events)


def test_html_block_is_wrapped() -> None:
    start, html, end = iter_events("<div>x</div>")
    assert start == Start(HtmlBlock())
    assert isinstance(html, Html)
    assert html.text.strip() == "<div>x</div>"
    assert end == End(HtmlBlock())


def test_footnote_reference_and_definition() -> None:
    events = list(iter_events("See[^n].\n\n[^n]: Body."))
    assert FootnoteReference(label="n") in events
    assert Start(FootnoteDefinition(label="n")) in events
    assert End(FootnoteDefinition(label="n")) in events


def test_math_block_is_wrapped_in_paragraph() -> None:
    assert list(iter_events("$$\nx^2\n$$")) == [
        Start(Paragraph()),
        DisplayMath("x^2"),
        End(Paragraph()),
    ]


def test_table_structure() -> None:
    events = list(iter_events("| a |\n|---|\n| 1 |"))
    assert Start(TableHead()) in events
    assert events.count(Start(TableRow())) == 2
    assert events.count(Start(TableCell())) == 2
