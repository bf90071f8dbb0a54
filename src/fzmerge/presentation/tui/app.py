"""
FuzzyApp - a single input line completed by a ``FuzzySession``.
"""

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Input

from fzmerge.core.session import FuzzySession
from fzmerge.logger import get_logger
from fzmerge.presentation.widgets import FuzzyAutoComplete

logger = get_logger("tui")


class FuzzyApp(App):
    """Type into the input to see merged completions from every provider."""

    TITLE = "fzmerge"
    SUB_TITLE = "Fuzzy completion over several providers"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
        Binding("ctrl+c", "quit", "Quit", priority=True, show=False),
    ]

    def __init__(self, session: FuzzySession):
        super().__init__()
        self.session = session

    def compose(self) -> ComposeResult:
        yield Header()
        target = Input(placeholder="Type to complete...", id="completion-input")
        yield target
        yield FuzzyAutoComplete(target, self.session)
        yield Footer()

    def on_mount(self) -> None:
        self.session.start()
        self.query_one("#completion-input", Input).focus()
        logger.info(f"FuzzyApp started with providers {list(self.session.provider_ids)}")
