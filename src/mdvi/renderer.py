"""Markdown → terminal lines: the event-driven document assembler.

Consumes the flat Start/End event stream, tracks nesting with explicit stacks,
and produces display lines plus anchors for every image caption so that an
image painter can later overlay pixels at the right rows.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

from rich.style import Style

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
    TableRow,
    TaskListMarker,
    Text,
)
from mdvi.html_images import extract_html_images
from mdvi.lines import Line, LineBuilder, StyledRun
from mdvi.structure import StructureTracker
from mdvi.styles import BOLD, DIM, ITALIC, STRIKE, UNDERLINE, StyleContext, heading_style
from mdvi.tokenizer import iter_events

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from mdvi.events import Event, Tag

logger = logging.getLogger(__name__)

RULE_WIDTH = 72
EMPTY_PLACEHOLDER = "(empty markdown file)"
IMAGE_LABEL = "[image] "
CAPTION_LABEL_STYLE = Style(dim=True, bold=True)


class DocumentReadError(Exception):
    """Raised when a markdown file cannot be read as UTF-8 text."""


@dataclass(frozen=True)
class ImageReference:
    """An image to paint; ``line_index`` is the row of its caption line."""

    uri: str
    line_index: int


@dataclass
class RenderedDocument:
    """Display lines plus the image anchors into them."""

    lines: list[Line] = field(default_factory=list)
    images: list[ImageReference] = field(default_factory=list)

    def plain_lines(self) -> list[str]:
        return [line.plain for line in self.lines]


# === Image alt-text capture ===


@dataclass(frozen=True)
class Idle:
    """Not inside an image."""


@dataclass
class CapturingAlt:
    """Inside an image: text events accumulate as alt text until the close."""

    uri: str
    alt: list[str] = field(default_factory=list)

    def add(self, text: str) -> None:
        self.alt.append(text)

    @property
    def text(self) -> str:
        return "".join(self.alt)


CaptureState: TypeAlias = Idle | CapturingAlt

IDLE = Idle()


def caption_runs(uri: str, alt: str) -> list[StyledRun]:
    """Build the placeholder caption shown in place of an image."""
    alt = alt.strip()
    runs = [StyledRun(IMAGE_LABEL, CAPTION_LABEL_STYLE)]
    if not alt:
        runs.append(StyledRun(uri, UNDERLINE))
    else:
        runs.append(StyledRun(alt))
        runs.append(StyledRun(f" ({uri})", DIM))
    return runs


class DocumentAssembler:
    """Single-pass state machine turning document events into lines."""

    def __init__(self) -> None:
        self._out = LineBuilder()
        self._images: list[ImageReference] = []
        self._styles = StyleContext()
        self._structure = StructureTracker()
        self._capture: CaptureState = IDLE
        self._in_code_block = False
        self._in_html_block = False
        self._pending_link: str | None = None

    # --- shared helpers ---

    def _seed_quote_prefix(self) -> None:
        if not self._out.pending and self._structure.quote_depth > 0:
            self._out.append(self._structure.quote_prefix(), DIM)

    def _append_image(self, uri: str, alt: str, *, trailing_blank: bool) -> None:
        line_index = self._out.add_line(caption_runs(uri, alt))
        self._images.append(ImageReference(uri=uri, line_index=line_index))
        if trailing_blank:
            self._out.blank()

    # --- dispatch ---

    def feed(self, event: Event) -> None:
        """Process one event."""
        if isinstance(self._capture, CapturingAlt):
            self._feed_capture(self._capture, event)
        elif isinstance(event, Start):
            self._start(event.tag)
        elif isinstance(event, End):
            self._end(event.tag)
        elif isinstance(event, Text):
            self._text(event.text)
        elif isinstance(event, Code):
            self._out.append(f"`{event.text}`", self._styles.current + BOLD)
        elif isinstance(event, Html | InlineHtml):
            self._html(event.text)
        elif isinstance(event, SoftBreak):
            self._out.append(" ")
        elif isinstance(event, HardBreak):
            self._out.push_line()
        elif isinstance(event, Rule):
            self._out.push_line()
            self._out.add_line([StyledRun("─" * RULE_WIDTH, DIM)])
        elif isinstance(event, TaskListMarker):
            self._out.append("[x] " if event.checked else "[ ] ", BOLD)
        elif isinstance(event, FootnoteReference):
            self._out.append(f"[^{event.label}]", DIM)
        elif isinstance(event, InlineMath | DisplayMath):
            self._out.append(f"${event.text}$", ITALIC)

    def _feed_capture(self, capture: CapturingAlt, event: Event) -> None:
        if isinstance(event, End) and isinstance(event.tag, Image):
            self._capture = IDLE
            self._append_image(capture.uri, capture.text, trailing_blank=True)
        elif isinstance(event, Text | Code | Html | InlineHtml | InlineMath | DisplayMath):
            capture.add(event.text)
        elif isinstance(event, SoftBreak | HardBreak):
            capture.add(" ")
        # Nested Start/End and other events contribute nothing to alt text.

    def _start(self, tag: Tag) -> None:  # noqa: C901, PLR0912
        out = self._out
        if isinstance(tag, Heading):
            out.blank_line()
            self._styles.push(heading_style(tag.level))
        elif isinstance(tag, BlockQuote):
            self._structure.enter_quote()
            self._seed_quote_prefix()
        elif isinstance(tag, CodeBlock):
            out.blank_line()
            self._in_code_block = True
            header = f"```{tag.lang.strip()}" if tag.lang and tag.lang.strip() else "```"
            out.add_line([StyledRun(header, DIM)])
        elif isinstance(tag, HtmlBlock):
            self._in_html_block = True
        elif isinstance(tag, List):
            self._structure.enter_list(tag.start)
        elif isinstance(tag, Item):
            out.flush()
            out.append(self._structure.item_prefix())
        elif isinstance(tag, Emphasis):
            self._styles.push_with(ITALIC)
        elif isinstance(tag, Strong):
            self._styles.push_with(BOLD)
        elif isinstance(tag, Strikethrough):
            self._styles.push_with(STRIKE)
        elif isinstance(tag, Link):
            self._styles.push_with(UNDERLINE)
            self._pending_link = tag.dest
        elif isinstance(tag, Image):
            out.blank_line()
            self._capture = CapturingAlt(uri=tag.dest)
        elif isinstance(tag, Table):
            out.blank_line()
        elif isinstance(tag, TableCell):
            if out.pending:
                out.append(" │ ")
        elif isinstance(tag, FootnoteDefinition):
            out.blank_line()
            out.append(f"[^{tag.label}] ", DIM)
        # Paragraph, TableHead and TableRow open silently.

    def _end(self, tag: Tag) -> None:  # noqa: C901, PLR0912
        out = self._out
        if isinstance(tag, Paragraph):
            out.push_line()
            out.blank()
        elif isinstance(tag, Heading):
            out.push_line()
            self._styles.pop()
            out.blank()
        elif isinstance(tag, BlockQuote):
            out.flush()
            self._structure.exit_quote()
            out.blank()
        elif isinstance(tag, CodeBlock):
            out.flush()
            out.add_line([StyledRun("```", DIM)])
            out.blank()
            self._in_code_block = False
        elif isinstance(tag, HtmlBlock):
            out.blank_line()
            self._in_html_block = False
        elif isinstance(tag, List):
            self._structure.exit_list()
            out.blank()
        elif isinstance(tag, Item | TableRow):
            out.push_line()
        elif isinstance(tag, Emphasis | Strong | Strikethrough):
            self._styles.pop()
        elif isinstance(tag, Link):
            self._styles.pop()
            if self._pending_link is not None:
                out.append(f" ({self._pending_link})", DIM)
                self._pending_link = None
        elif isinstance(tag, Table):
            out.flush()
            out.blank()

    def _text(self, text: str) -> None:
        style = self._styles.current
        if self._in_code_block:
            for segment in text.split("\n"):
                if segment:
                    self._out.append(f"  {segment}", style + DIM)
                self._out.push_line()
            return
        self._seed_quote_prefix()
        self._out.append(text, style)

    def _html(self, html: str) -> None:
        images = extract_html_images(html)
        if not images:
            payload = html.removesuffix("\n") if self._in_html_block else html
            for i, segment in enumerate(payload.split("\n")):
                if i:
                    self._out.push_line()
                if segment:
                    self._out.append(segment, DIM)
            return
        logger.debug("Raw HTML payload holds %d image(s)", len(images))
        self._out.blank_line()
        for src, alt in images:
            self._append_image(src, alt, trailing_blank=True)

    # --- completion ---

    def finish(self) -> RenderedDocument:
        """Flush pending state and return the finished document."""
        self._out.flush()
        if isinstance(self._capture, CapturingAlt):
            capture = self._capture
            self._capture = IDLE
            self._append_image(capture.uri, capture.text, trailing_blank=False)

        self._out.trim_trailing_blank()
        if not self._out.lines:
            return RenderedDocument(lines=[Line((StyledRun(EMPTY_PLACEHOLDER, DIM),))])
        return RenderedDocument(lines=list(self._out.lines), images=list(self._images))


def render_events(events: Iterable[Event]) -> RenderedDocument:
    """Assemble a document from an already-tokenized event stream."""
    assembler = DocumentAssembler()
    for event in events:
        assembler.feed(event)
    return assembler.finish()


def render_markdown(text: str) -> RenderedDocument:
    """Render markdown source into display lines and image anchors."""
    document = render_events(iter_events(text))
    logger.debug(
        "Rendered %d lines with %d image(s)", len(document.lines), len(document.images)
    )
    return document


def read_markdown_file(path: Path) -> str:
    """Return the UTF-8 contents of ``path``.

    Raises DocumentReadError naming the path when it cannot be read.
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        msg = f"failed to read file: {path}: {e}"
        raise DocumentReadError(msg) from e
