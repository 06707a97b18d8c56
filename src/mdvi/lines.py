"""Styled runs, display lines, and the buffer that assembles them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rich.style import Style
from rich.text import Text

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True)
class StyledRun:
    """A piece of text sharing one composed style."""

    text: str
    style: Style = field(default_factory=Style)

    @property
    def bold(self) -> bool:
        return bool(self.style.bold)

    @property
    def italic(self) -> bool:
        return bool(self.style.italic)

    @property
    def underline(self) -> bool:
        return bool(self.style.underline)

    @property
    def dim(self) -> bool:
        return bool(self.style.dim)

    @property
    def strikethrough(self) -> bool:
        return bool(self.style.strike)


@dataclass(frozen=True)
class Line:
    """One display row. A line without runs renders blank."""

    runs: tuple[StyledRun, ...] = ()

    @property
    def plain(self) -> str:
        return "".join(run.text for run in self.runs)

    @property
    def is_blank(self) -> bool:
        return not self.runs

    def to_text(self) -> Text:
        """Convert to a rich Text for display."""
        return Text.assemble(*((run.text, run.style) for run in self.runs), no_wrap=True)


def lines_to_text(lines: Iterable[Line]) -> Text:
    """Join lines into one newline-separated rich Text, one row per line."""
    text = Text("\n", no_wrap=True).join(line.to_text() for line in lines)
    text.no_wrap = True
    return text


class LineBuilder:
    """Collect runs for the current line and commit finished lines."""

    def __init__(self) -> None:
        self.lines: list[Line] = []
        self._current: list[StyledRun] = []

    @property
    def pending(self) -> bool:
        """True when the current line has runs not yet committed."""
        return bool(self._current)

    def append(self, text: str, style: Style | None = None) -> None:
        self._current.append(StyledRun(text, style if style is not None else Style()))

    def push_line(self) -> int:
        """Commit the current line (blank if empty) and return its index."""
        self.lines.append(Line(tuple(self._current)))
        self._current = []
        return len(self.lines) - 1

    def flush(self) -> None:
        """Commit the current line only if it has content."""
        if self._current:
            self.push_line()

    def blank(self) -> None:
        """Append a blank row unconditionally."""
        self.lines.append(Line())

    def blank_line(self) -> None:
        """Commit pending content, then ensure the last row is blank."""
        self.flush()
        if not self.lines or not self.lines[-1].is_blank:
            self.lines.append(Line())

    def add_line(self, runs: Iterable[StyledRun]) -> int:
        """Append a complete line, bypassing the current buffer."""
        self.lines.append(Line(tuple(runs)))
        return len(self.lines) - 1

    def trim_trailing_blank(self) -> None:
        while self.lines and self.lines[-1].is_blank:
            self.lines.pop()
