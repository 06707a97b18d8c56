"""Help screen — modal overlay showing keybindings."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from textual.containers import Center, Middle
from textual.screen import ModalScreen
from textual.widgets import Static

if TYPE_CHECKING:
    from textual.app import ComposeResult
    from textual.binding import BindingType

_VIEWER_HELP = """\
[bold]Viewer Keybindings[/bold]

  [bold]j / ↓[/bold]     Scroll down
  [bold]k / ↑[/bold]     Scroll up
  [bold]g / Home[/bold]  Jump to top
  [bold]G / End[/bold]   Jump to bottom
  [bold]Ctrl+d[/bold]    Half page down
  [bold]Ctrl+u[/bold]    Half page up
  [bold]?[/bold]         This help
  [bold]q[/bold]         Quit

Press [bold]?[/bold] or [bold]Escape[/bold] to dismiss.
"""


class HelpScreen(ModalScreen[None]):
    """Modal help overlay showing all keybindings."""

    BINDINGS: ClassVar[list[BindingType]] = [
        ("escape", "dismiss_help", "Close"),
        ("question_mark", "dismiss_help", "Close"),
    ]

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }
    HelpScreen > Center > Middle > Static {
        width: 40;
        padding: 2 4;
        background: $surface;
        border: tall $primary;
    }
    """

    def compose(self) -> ComposeResult:
        """Create the help content."""
        with Center(), Middle():
            yield Static(_VIEWER_HELP, markup=True)

    def action_dismiss_help(self) -> None:
        """Dismiss the help screen."""
        self.dismiss(None)
