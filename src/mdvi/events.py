"""Document event types: the flat Start/End + atomic stream the renderer consumes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

# === Tags (carried by Start/End) ===


@dataclass(frozen=True)
class Paragraph:
    """A paragraph block."""


@dataclass(frozen=True)
class Heading:
    """A heading block, level 1-6."""

    level: int


@dataclass(frozen=True)
class BlockQuote:
    """A block quote; nests by repeated Start events."""


@dataclass(frozen=True)
class CodeBlock:
    """A fenced or indented code block."""

    lang: str | None = None  # None for indented blocks or bare fences


@dataclass(frozen=True)
class HtmlBlock:
    """A raw HTML block; its payload arrives as one Html event."""


@dataclass(frozen=True)
class List:
    """An ordered (start is not None) or unordered list."""

    start: int | None = None


@dataclass(frozen=True)
class Item:
    """A list item."""


@dataclass(frozen=True)
class Emphasis:
    pass


@dataclass(frozen=True)
class Strong:
    pass


@dataclass(frozen=True)
class Strikethrough:
    pass


@dataclass(frozen=True)
class Link:
    """An inline link to ``dest``."""

    dest: str


@dataclass(frozen=True)
class Image:
    """An inline image; the events up to the matching End form its alt text."""

    dest: str


@dataclass(frozen=True)
class Table:
    pass


@dataclass(frozen=True)
class TableHead:
    pass


@dataclass(frozen=True)
class TableRow:
    pass


@dataclass(frozen=True)
class TableCell:
    pass


@dataclass(frozen=True)
class FootnoteDefinition:
    """The body of footnote ``label``."""

    label: str


Tag: TypeAlias = (
    Paragraph
    | Heading
    | BlockQuote
    | CodeBlock
    | HtmlBlock
    | List
    | Item
    | Emphasis
    | Strong
    | Strikethrough
    | Link
    | Image
    | Table
    | TableHead
    | TableRow
    | TableCell
    | FootnoteDefinition
)


# === Events ===


@dataclass(frozen=True)
class Start:
    """Opening marker of a nested structure."""

    tag: Tag


@dataclass(frozen=True)
class End:
    """Closing marker; ``tag`` equals the tag of the matching Start."""

    tag: Tag


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Code:
    """Inline code span."""

    text: str


@dataclass(frozen=True)
class Html:
    """Block-level raw HTML payload."""

    text: str


@dataclass(frozen=True)
class InlineHtml:
    text: str


@dataclass(frozen=True)
class InlineMath:
    text: str


@dataclass(frozen=True)
class DisplayMath:
    text: str


@dataclass(frozen=True)
class SoftBreak:
    pass


@dataclass(frozen=True)
class HardBreak:
    pass


@dataclass(frozen=True)
class Rule:
    """Horizontal rule (thematic break)."""


@dataclass(frozen=True)
class TaskListMarker:
    checked: bool


@dataclass(frozen=True)
class FootnoteReference:
    label: str


Event: TypeAlias = (
    Start
    | End
    | Text
    | Code
    | Html
    | InlineHtml
    | InlineMath
    | DisplayMath
    | SoftBreak
    | HardBreak
    | Rule
    | TaskListMarker
    | FootnoteReference
)
