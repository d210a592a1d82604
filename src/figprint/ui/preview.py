# =============================================================================
# Banner Preview
# =============================================================================
# A small Textual app for trying out text before copying the banner:
#   - Type in the input box, the banner re-renders on every keystroke
#   - Ctrl+L cycles the layout mode (full size -> kerning -> smushing)
#   - ANSI colors in the output are shown as real colors
# =============================================================================

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import ScrollableContainer
from textual.widgets import Footer, Header, Input, Static

from figprint.core import LayoutMode
from figprint.rendering import RenderEngine

LAYOUT_CYCLE = [LayoutMode.FULL_SIZE, LayoutMode.KERNING, LayoutMode.SMUSHING]


class PreviewApp(App):
    """
    Live preview of rendered banners.

    Attributes:
        engine: The engine used for rendering. Its layout mode is changed
                in place when cycling.
        rendered: The most recently rendered banner.
    """

    TITLE = "figprint"

    CSS = """
    #preview-input {
        margin: 1 1 0 1;
    }

    #preview-scroll {
        padding: 1 2;
    }

    #preview-banner {
        width: auto;
    }
    """

    BINDINGS = [
        Binding("escape", "quit", "Quit", priority=True),
        Binding("ctrl+l", "cycle_layout", "Layout"),
    ]

    def __init__(self, engine: RenderEngine, text: str = "") -> None:
        """
        Initialize the preview.

        Args:
            engine: Engine to render with.
            text: Initial text in the input box.
        """
        super().__init__()
        self.engine = engine
        self.rendered = ""
        self._initial_text = text

    def compose(self) -> ComposeResult:
        yield Header()
        yield Input(value=self._initial_text, placeholder="Type text to render...", id="preview-input")
        with ScrollableContainer(id="preview-scroll"):
            yield Static("", id="preview-banner")
        yield Footer()

    def on_mount(self) -> None:
        """Focus the input and draw the initial banner."""
        self.query_one("#preview-input", Input).focus()
        self._refresh_banner()

    def on_input_changed(self, event: Input.Changed) -> None:
        self._refresh_banner()

    def action_cycle_layout(self) -> None:
        """Switch to the next layout mode."""
        index = LAYOUT_CYCLE.index(self.engine.mode)
        self.engine.mode = LAYOUT_CYCLE[(index + 1) % len(LAYOUT_CYCLE)]
        self.notify(f"Layout: {self.engine.mode.name.replace('_', ' ').lower()}")
        self._refresh_banner()

    def _refresh_banner(self) -> None:
        text = self.query_one("#preview-input", Input).value
        self.rendered = self.engine.render(text, line_separator="\n")
        self.sub_title = self.engine.mode.name.replace("_", " ").title()

        if self.engine.use_ansi_colors:
            banner = Text.from_ansi(self.rendered)
        else:
            banner = Text(self.rendered)
        self.query_one("#preview-banner", Static).update(banner)
