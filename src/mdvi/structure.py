"""List nesting and block quote depth tracking."""

from __future__ import annotations

from dataclasses import dataclass

BULLET = "• "
QUOTE_BAR = "│ "


@dataclass
class ListContext:
    """One active list. ``next_number`` is None for unordered lists."""

    next_number: int | None = None


class StructureTracker:
    """Track the list stack and block quote depth while events stream by."""

    def __init__(self) -> None:
        self._lists: list[ListContext] = []
        self.quote_depth = 0

    def enter_list(self, start: int | None) -> None:
        self._lists.append(ListContext(next_number=start))

    def exit_list(self) -> None:
        if self._lists:
            self._lists.pop()

    def list_indent(self) -> str:
        """Two spaces per nesting level beyond the first."""
        return "  " * max(len(self._lists) - 1, 0)

    def next_marker(self) -> str:
        """Return the marker for a new item, advancing the innermost counter."""
        current = self._lists[-1] if self._lists else None
        if current is None or current.next_number is None:
            return BULLET
        number = current.next_number
        current.next_number = number + 1
        return f"{number}. "

    def item_prefix(self) -> str:
        return self.list_indent() + self.next_marker()

    def enter_quote(self) -> None:
        self.quote_depth += 1

    def exit_quote(self) -> None:
        self.quote_depth = max(self.quote_depth - 1, 0)

    def quote_prefix(self) -> str:
        """Bar prefix for the innermost quote, indented by the outer levels."""
        return "  " * max(self.quote_depth - 1, 0) + QUOTE_BAR
