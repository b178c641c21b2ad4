"""Interactive full-screen dashboard built on prompt_toolkit."""

import logging
from datetime import date

from prompt_toolkit import Application
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.document import Document
from prompt_toolkit.filters import Condition
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import D, FormattedTextControl, HSplit, Layout, VSplit, Window, WindowAlign
from prompt_toolkit.layout.controls import BufferControl
from prompt_toolkit.styles import Style
from prompt_toolkit.widgets import Frame

from .adapters.file_store import StorageParseError
from .core.dashboard import (
    DashboardMode,
    can_save,
    entries_text,
    month_calendar,
    next_mode,
    tags_text,
)
from .core.entries import Entry
from .ports import EntryStore
from .sync import SyncCoordinator
from .workflows import log_entry

logger = logging.getLogger(__name__)

HELP_TEXT = " Press ENTER to edit, ESC to exit edit mode, Ctrl+S to save"
FOOTER_TEXT = " q: quit  |  TAB/e/i: navigate  |  ENTER: edit  |  arrows: scroll"

STYLE = Style.from_dict(
    {
        "header": "bg:#1f4e99 #ffffff bold",
        "footer": "bg:#1f4e99 #ffffff",
        "status": "#5fd75f bold",
        "active": "#5fd75f bold",
        "help": "#939293",
    }
)


class Dashboard:
    """
    Dashboard state and widgets.

    Every box renders from ``self.entries``, which is reloaded from the store
    after each save.
    """

    def __init__(
        self,
        store: EntryStore,
        coordinator: SyncCoordinator,
        entries: list[Entry],
        today: date | None = None,
    ):
        self.store = store
        self.coordinator = coordinator
        self.entries = list(entries)
        self.today = today or date.today()
        self.mode = DashboardMode.LIST_VIEW
        self.status = ""

        self.entries_buffer = Buffer(read_only=True)
        self.input_buffer = Buffer(
            multiline=True,
            read_only=Condition(lambda: self.mode is not DashboardMode.EDITING_TEXT),
        )
        self._refresh_entries()

        self.entries_window = Window(BufferControl(self.entries_buffer), wrap_lines=True)
        self.input_window = Window(BufferControl(self.input_buffer), height=3, wrap_lines=True)
        self.app = self._build_app()

    def _title(self, name: str, *modes: DashboardMode):
        def title():
            if self.mode not in modes:
                return name
            label = "EDITING" if self.mode is DashboardMode.EDITING_TEXT else "ACTIVE"
            return [("class:active", f"[{label}] {name}")]

        return title

    def _build_app(self) -> Application:
        left = HSplit(
            [
                Frame(Window(FormattedTextControl(lambda: month_calendar(self.entries, self.today))), title="Calendar"),
                Frame(Window(FormattedTextControl(lambda: tags_text(self.entries))), title="Tags"),
            ],
            width=D(weight=3),
        )
        right = Frame(
            self.entries_window,
            title=self._title("Recent Entries", DashboardMode.LIST_VIEW),
            width=D(weight=7),
        )
        quick_entry = Frame(
            HSplit(
                [
                    self.input_window,
                    Window(FormattedTextControl(HELP_TEXT), height=1, style="class:help"),
                ]
            ),
            title=self._title("Quick Entry", DashboardMode.INPUT_VIEW, DashboardMode.EDITING_TEXT),
        )

        layout = Layout(
            HSplit(
                [
                    Window(
                        FormattedTextControl("Life Logger Dashboard"),
                        height=1,
                        align=WindowAlign.CENTER,
                        style="class:header",
                    ),
                    VSplit([left, right]),
                    quick_entry,
                    Window(FormattedTextControl(lambda: self.status), height=1, style="class:status"),
                    Window(FormattedTextControl(FOOTER_TEXT), height=1, style="class:footer"),
                ]
            ),
            focused_element=self.entries_window,
        )

        return Application(
            layout=layout,
            key_bindings=self._key_bindings(),
            style=STYLE,
            full_screen=True,
            mouse_support=True,
        )

    def _key_bindings(self) -> KeyBindings:
        kb = KeyBindings()
        navigating = Condition(lambda: self.mode is not DashboardMode.EDITING_TEXT)

        for key in ("e", "i", "q", "tab", "enter"):
            kb.add(key, filter=navigating)(self._on_key(key))

        kb.add("escape", eager=True)(self._on_key("escape"))
        kb.add("c-c")(self._on_key("c-c"))

        @kb.add("c-s")
        def _save(event):
            self.save()

        return kb

    def _on_key(self, key: str):
        def handler(event):
            self.handle_key(key)

        return handler

    def handle_key(self, key: str) -> None:
        mode = next_mode(self.mode, key)
        if mode is None:
            self.app.exit()
            return
        self.set_mode(mode)

    def set_mode(self, mode: DashboardMode) -> None:
        self.mode = mode
        if mode is DashboardMode.LIST_VIEW:
            self.app.layout.focus(self.entries_window)
        else:
            self.app.layout.focus(self.input_window)

    def save(self) -> None:
        """Log the quick entry through the regular append path."""
        text = self.input_buffer.text
        if not can_save(self.mode, text):
            return

        try:
            log_entry(self.store, self.coordinator, text.strip())
            self.entries = self.store.load()
        except (OSError, StorageParseError) as e:
            logger.error(f"Failed to save dashboard entry: {e}")
            self.status = f" Error: {e}"
            return

        logger.debug("Saved entry from dashboard")
        self.input_buffer.reset()
        self._refresh_entries()
        self.status = " Entry added successfully!"
        self.set_mode(DashboardMode.LIST_VIEW)

    def _refresh_entries(self) -> None:
        self.entries_buffer.set_document(Document(entries_text(self.entries), 0), bypass_readonly=True)

    def run(self) -> None:
        self.app.run()


def run_dashboard(store: EntryStore, coordinator: SyncCoordinator, entries: list[Entry]) -> None:
    """Launch the dashboard until the user quits."""
    Dashboard(store, coordinator, entries).run()
