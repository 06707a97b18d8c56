"""Textual App — scrollable viewer over a rendered markdown document."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widgets import Footer, Header, Static

from mdvi.config import ImageProtocol
from mdvi.lines import lines_to_text
from mdvi.tui.help_screen import HelpScreen

if TYPE_CHECKING:
    from textual.binding import BindingType

    from mdvi.renderer import RenderedDocument


class ViewerApp(App[None]):
    """Terminal markdown viewer.

    Each rendered line occupies exactly one row of the viewport, so an image
    reference's ``line_index`` is also its row offset in the document widget.
    """

    TITLE = "mdvi"

    CSS = """
    #viewport {
        height: 1fr;
        padding: 0 1;
    }
    #document {
        width: auto;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("q", "quit", "Quit", show=True),
        Binding("question_mark", "show_help", "Help", show=True),
        Binding("j", "scroll_line_down", "Scroll Down", show=False),
        Binding("k", "scroll_line_up", "Scroll Up", show=False),
        Binding("down", "scroll_line_down", "Scroll Down", show=False),
        Binding("up", "scroll_line_up", "Scroll Up", show=False),
        Binding("g", "scroll_to_top", "Top", show=False),
        Binding("G", "scroll_to_bottom", "Bottom", show=False, key_display="G"),
        Binding("home", "scroll_to_top", "Top", show=False),
        Binding("end", "scroll_to_bottom", "Bottom", show=False),
        Binding("ctrl+d", "half_page_down", "Half Page Down", show=False),
        Binding("ctrl+u", "half_page_up", "Half Page Up", show=False),
    ]

    def __init__(
        self,
        document: RenderedDocument,
        *,
        path: str = "",
        start_line: int = 1,
        image_protocol: ImageProtocol = ImageProtocol.AUTO,
    ) -> None:
        super().__init__()
        self.document = document
        self.document_text = lines_to_text(document.lines)
        self.image_protocol = image_protocol
        self._path = path
        # 1-based line number -> 0-based row, clamped to the document
        self._start_row = min(max(start_line, 1), len(document.lines)) - 1

    def compose(self) -> ComposeResult:
        """Create the header, the scrollable document, and the footer."""
        yield Header()
        with VerticalScroll(id="viewport"):
            yield Static(self.document_text, id="document")
        yield Footer()

    def on_mount(self) -> None:
        """Show file details and jump to the requested start line."""
        images = len(self.document.images)
        parts = [self._path] if self._path else []
        parts.append(f"{images} image{'s' if images != 1 else ''}")
        parts.append(f"protocol: {self.image_protocol}")
        self.sub_title = " · ".join(parts)
        self.call_after_refresh(self._scroll_to_start)

    def _scroll_to_start(self) -> None:
        self._viewport().scroll_to(y=self._start_row, animate=False)

    def _viewport(self) -> VerticalScroll:
        return self.query_one("#viewport", VerticalScroll)

    def action_show_help(self) -> None:
        """Show the help overlay."""
        self.push_screen(HelpScreen())

    def action_scroll_line_down(self) -> None:
        """Scroll down one line."""
        self._viewport().scroll_down(animate=False)

    def action_scroll_line_up(self) -> None:
        """Scroll up one line."""
        self._viewport().scroll_up(animate=False)

    def action_scroll_to_top(self) -> None:
        """Jump to the first line."""
        self._viewport().scroll_home(animate=False)

    def action_scroll_to_bottom(self) -> None:
        """Jump to the last line."""
        self._viewport().scroll_end(animate=False)

    def action_half_page_down(self) -> None:
        """Scroll down half a viewport."""
        vs = self._viewport()
        vs.scroll_relative(y=max(vs.size.height // 2, 1), animate=False)

    def action_half_page_up(self) -> None:
        """Scroll up half a viewport."""
        vs = self._viewport()
        vs.scroll_relative(y=-max(vs.size.height // 2, 1), animate=False)
