"""Style stack for nested inline formatting, built on rich Styles."""

from __future__ import annotations

from rich.style import Style

BASE = Style()
BOLD = Style(bold=True)
ITALIC = Style(italic=True)
UNDERLINE = Style(underline=True)
DIM = Style(dim=True)
STRIKE = Style(strike=True)

HEADING_STYLES: dict[int, Style] = {
    1: Style(bold=True, underline=True),
    2: BOLD,
    3: Style(bold=True, italic=True),
    4: Style(bold=True, italic=True),
    5: ITALIC,
    6: ITALIC,
}


def heading_style(level: int) -> Style:
    """Return the style for a heading of ``level`` (clamped to 1-6)."""
    return HEADING_STYLES[min(max(level, 1), 6)]


class StyleContext:
    """Non-empty stack of composed styles; the base style is never popped."""

    def __init__(self, base: Style = BASE) -> None:
        self._stack: list[Style] = [base]

    @property
    def current(self) -> Style:
        return self._stack[-1]

    def push(self, style: Style) -> None:
        """Push ``style`` as-is (headings replace rather than compose)."""
        self._stack.append(style)

    def push_with(self, modifier: Style) -> None:
        """Push the current style augmented with ``modifier``."""
        self._stack.append(self.current + modifier)

    def pop(self) -> None:
        if len(self._stack) > 1:
            self._stack.pop()
