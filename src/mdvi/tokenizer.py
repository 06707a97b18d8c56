"""Event producer: flatten the markdown-it token stream into document events."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from markdown_it import MarkdownIt
from mdit_py_plugins.dollarmath import dollarmath_plugin
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from mdvi.events import (
    BlockQuote,
    Code,
    CodeBlock,
    DisplayMath,
    Emphasis,
    End,
    FootnoteDefinition,
    FootnoteReference,
    HardBreak,
    Heading,
    Html,
    HtmlBlock,
    Image,
    InlineHtml,
    InlineMath,
    Item,
    Link,
    List,
    Paragraph,
    Rule,
    SoftBreak,
    Start,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableHead,
    TableRow,
    TaskListMarker,
    Text,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from markdown_it.token import Token

    from mdvi.events import Event, Tag

logger = logging.getLogger(__name__)

# Inserted by tasklists_plugin in front of the item text.
TASK_CHECKBOX = re.compile(r"<input\b[^>]*\btask-list-item-checkbox\b[^>]*>")


def _footnote_label(token: Token) -> str:
    meta = token.meta or {}
    label = meta.get("label")
    if label:
        return str(label)
    # Anonymous ^[inline] footnotes are numbered like the rendered list
    return str(int(meta.get("id", 0)) + 1)


def _ordered_start(token: Token) -> int:
    start = token.attrGet("start")
    return int(start) if start is not None else 1


def _code_lang(token: Token) -> str | None:
    lang = token.info.strip()
    return lang or None


# token-type prefix (without _open/_close) -> Tag factory
_PAIRED_TAGS: dict[str, Callable[[Token], Tag]] = {
    "paragraph": lambda _t: Paragraph(),
    "heading": lambda t: Heading(level=int(t.tag[1:])),
    "blockquote": lambda _t: BlockQuote(),
    "bullet_list": lambda _t: List(start=None),
    "ordered_list": lambda t: List(start=_ordered_start(t)),
    "list_item": lambda _t: Item(),
    "em": lambda _t: Emphasis(),
    "strong": lambda _t: Strong(),
    "s": lambda _t: Strikethrough(),
    "link": lambda t: Link(dest=str(t.attrGet("href") or "")),
    "table": lambda _t: Table(),
    "thead": lambda _t: TableHead(),
    "tr": lambda _t: TableRow(),
    "th": lambda _t: TableCell(),
    "td": lambda _t: TableCell(),
    "footnote": lambda t: FootnoteDefinition(label=_footnote_label(t)),
}


def build_parser() -> MarkdownIt:
    """Return a markdown-it parser with the extensions the viewer renders."""
    return (
        MarkdownIt("commonmark")
        .enable("table")
        .enable("strikethrough")
        .use(tasklists_plugin)
        .use(footnote_plugin)
        .use(dollarmath_plugin)
    )


class _Flattener:
    """Walk block and inline tokens, keeping the open-tag stack for End events."""

    def __init__(self) -> None:
        self._open: list[Tag] = []
        self._after_task_marker = False

    def walk(self, tokens: list[Token]) -> Iterator[Event]:
        for token in tokens:
            yield from self._token(token)

    def _token(self, token: Token) -> Iterator[Event]:  # noqa: C901, PLR0912
        kind = token.type

        if token.nesting != 0:
            if token.hidden:
                # paragraphs of tight list items
                return
            base = kind.removesuffix("_open").removesuffix("_close")
            factory = _PAIRED_TAGS.get(base)
            if factory is None:
                return
            if token.nesting == 1:
                tag = factory(token)
                self._open.append(tag)
                yield Start(tag)
            elif self._open:
                yield End(self._open.pop())
            return

        if kind == "inline":
            yield from self.walk(token.children or [])
        elif kind in ("text", "text_special"):
            content = token.content
            if self._after_task_marker:
                content = content.removeprefix(" ")
                self._after_task_marker = False
            if content:
                yield Text(content)
        elif kind == "code_inline":
            yield Code(token.content)
        elif kind == "html_inline":
            if TASK_CHECKBOX.search(token.content):
                self._after_task_marker = True
                yield TaskListMarker(checked="checked" in token.content)
            else:
                yield InlineHtml(token.content)
        elif kind == "softbreak":
            yield SoftBreak()
        elif kind == "hardbreak":
            yield HardBreak()
        elif kind == "image":
            tag = Image(dest=str(token.attrGet("src") or ""))
            yield Start(tag)
            yield from self.walk(token.children or [])
            yield End(tag)
        elif kind in ("fence", "code_block"):
            tag = CodeBlock(lang=_code_lang(token) if kind == "fence" else None)
            yield Start(tag)
            if token.content:
                yield Text(token.content)
            yield End(tag)
        elif kind == "html_block":
            yield Start(HtmlBlock())
            yield Html(token.content)
            yield End(HtmlBlock())
        elif kind == "hr":
            yield Rule()
        elif kind == "math_inline":
            yield InlineMath(token.content)
        elif kind == "math_inline_double":
            yield DisplayMath(token.content)
        elif kind in ("math_block", "math_block_label"):
            yield Start(Paragraph())
            yield DisplayMath(token.content.strip())
            yield End(Paragraph())
        elif kind == "footnote_ref":
            yield FootnoteReference(label=_footnote_label(token))


def iter_events(text: str, parser: MarkdownIt | None = None) -> Iterator[Event]:
    """Tokenize ``text`` and yield its document events in source order."""
    md = parser if parser is not None else build_parser()
    tokens = md.parse(text)
    logger.debug("Tokenized %d characters into %d block tokens", len(text), len(tokens))
    yield from _Flattener().walk(tokens)
