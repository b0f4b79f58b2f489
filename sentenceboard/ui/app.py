"""Main application entry point."""

import logging
import webbrowser
from typing import Optional

import urwid

from sentenceboard.api.client import BoardClient
from sentenceboard.config import load_config
from sentenceboard.core.models import (
    ALL,
    CATEGORY_DISPLAY_NAMES,
    DEFAULT_CATEGORY,
    FilterState,
    SortOrder,
)
from sentenceboard.core.view import BoardView, escape_text
from sentenceboard.ui.controller import BoardController
from sentenceboard.ui.runner import ThreadedRunner
from sentenceboard.ui.theme import PALETTE
from sentenceboard.ui.widgets import (
    CycleButton,
    Dialog,
    SentenceList,
    StatusBar,
    SubmitEdit,
)

logger = logging.getLogger(__name__)

CATEGORY_OPTIONS = [(c.value, label) for c, label in CATEGORY_DISPLAY_NAMES.items()]
SORT_OPTIONS = [(s.value, s.value.capitalize()) for s in SortOrder]

HELP_TEXT = """
SentenceBoard

Navigation:
  Tab, arrows Move between fields and posts
  Enter       Press button / post message
  r, F5       Reload users and messages
  Ctrl-L      Clear all filters
  q           Quit (outside text fields)

Posts:
  d, Delete   Delete focused post (own posts only)

Filters:
  Category, user and sort buttons cycle
  through their values; left arrow goes back.
  Search updates after typing pauses.

Press any key to close...
"""

STATUS_HINT = "[r]eload  [Ctrl-L] clear filters  [d]elete own post  [?]help  [q]uit"


class App:
    """Main application class. Also the view the controller draws into."""

    def __init__(self, config_path: Optional[str] = None, base_url: Optional[str] = None,
                 name: Optional[str] = None):
        # Load config
        self.config = load_config(config_path)
        if base_url:
            self.config["server"]["base_url"] = base_url
        if name:
            self.config["user"]["name"] = name

        server_config = self.config["server"]
        self.client = BoardClient(
            server_config["base_url"],
            timeout=server_config.get("timeout", 10),
            headers=server_config.get("headers") or {},
        )

        self.controller: Optional[BoardController] = None
        self.loop: Optional[urwid.MainLoop] = None
        # (widget underneath, closes on any key)
        self._overlays: list[tuple[urwid.Widget, bool]] = []
        self._suppress_search = False

        # Initialize UI
        self._init_ui()

    def _init_ui(self):
        """Initialize the UI components."""
        # Compose panel
        self.name_edit = urwid.Edit("Name: ", self.config["user"].get("name", ""))
        urwid.connect_signal(self.name_edit, "change", self._on_name_change)
        self.category_select = CycleButton("Category", CATEGORY_OPTIONS)
        self.sentence_edit = SubmitEdit("Message: ", on_submit=self._on_submit)
        self.add_button = urwid.Button("Add", on_press=self._on_submit)
        self.add_button_map = urwid.AttrMap(self.add_button, "button", focus_map="button_focus")

        compose = urwid.Pile([
            urwid.Columns([
                ("weight", 1, urwid.AttrMap(self.name_edit, "field", focus_map="field_focus")),
                ("weight", 1, self.category_select),
            ], dividechars=2),
            urwid.Columns([
                ("weight", 1, urwid.AttrMap(self.sentence_edit, "field", focus_map="field_focus")),
                (9, self.add_button_map),
            ], dividechars=2),
        ])

        # Filter bar
        self.search_edit = urwid.Edit("Search: ")
        urwid.connect_signal(self.search_edit, "change", self._on_search_change)
        self.category_filter = CycleButton(
            "Category",
            [(ALL, "All Categories")] + CATEGORY_OPTIONS,
            on_change=lambda value: self.controller.change_filter("category", value),
        )
        self.user_filter = CycleButton(
            "User",
            [(ALL, "All Users")],
            on_change=lambda value: self.controller.change_filter("user", value),
        )
        self.sort_select = CycleButton(
            "Sort",
            SORT_OPTIONS,
            on_change=lambda value: self.controller.change_filter("sortBy", value),
        )
        clear_button = urwid.Button("Clear", on_press=lambda b: self.controller.clear_filters())

        filters = urwid.Pile([
            urwid.AttrMap(self.search_edit, "field", focus_map="field_focus"),
            urwid.Columns([
                ("weight", 1, self.category_filter),
                ("weight", 1, self.user_filter),
                ("weight", 1, self.sort_select),
                (9, urwid.AttrMap(clear_button, "button", focus_map="button_focus")),
            ], dividechars=1),
        ])

        # Feed
        self.summary_text = urwid.Text("")
        self.count_text = urwid.Text(("count", "0 Messages"))
        self.sentence_list = SentenceList()

        body = urwid.Pile([
            ("pack", urwid.LineBox(compose, title="New Message")),
            ("pack", urwid.LineBox(filters, title="Filters")),
            ("pack", self.summary_text),
            ("pack", self.count_text),
            ("weight", 1, urwid.LineBox(self.sentence_list, title="Messages")),
        ])

        header = urwid.AttrMap(
            urwid.Text(f" SentenceBoard  {self.config['server']['base_url']}"), "header"
        )
        self.status_bar = StatusBar(STATUS_HINT)

        self.frame = urwid.Frame(header=header, body=body, footer=self.status_bar)

    # Input callbacks

    def _on_submit(self, button=None):
        self.controller.submit_sentence(
            self.sentence_edit.edit_text,
            self.name_edit.edit_text,
            self.category_select.value,
        )

    def _on_search_change(self, edit, new_text: str):
        if self._suppress_search or self.controller is None:
            return
        self.controller.search_input(new_text)

    def _on_name_change(self, edit, new_text: str):
        if self.controller is not None:
            self.controller.set_current_user(new_text)

    # View interface used by BoardController

    def show_list(self, view: BoardView, on_delete):
        self.sentence_list.set_view(view, on_delete)
        self.count_text.set_text(("count", view.count_label))

    def show_summary(self, markup: list):
        self.summary_text.set_text(markup)

    def set_users(self, users: list[str], selected: str):
        options = [(ALL, "All Users")] + [(u, escape_text(u)) for u in users]
        self.user_filter.set_options(options, selected)

    def set_submitting(self, busy: bool):
        self.add_button.set_label("Adding..." if busy else "Add")
        self.add_button_map.set_attr_map({None: "button_disabled" if busy else "button"})

    def reset_compose(self):
        self.sentence_edit.set_edit_text("")
        self.category_select.set_value(DEFAULT_CATEGORY.value)

    def reset_filter_controls(self, filters: FilterState):
        self.category_filter.set_value(filters.category)
        self.user_filter.set_value(filters.user)
        self.sort_select.set_value(filters.sort_by)
        self._suppress_search = True
        try:
            self.search_edit.set_edit_text(filters.search)
        finally:
            self._suppress_search = False

    def alert(self, message: str):
        """Show a modal message with an OK button."""
        body = urwid.Text(message, align="center")
        dialog = Dialog("Message", body, [("OK", self._close_overlay)])
        self._show_overlay(dialog)

    def confirm(self, message: str, on_yes):
        """Show a Yes/No dialog; ``on_yes`` runs after it closes."""
        def yes():
            self._close_overlay()
            on_yes()

        body = urwid.Text(message, align="center")
        dialog = Dialog("Confirm", body, [("Yes", yes), ("No", self._close_overlay)])
        self._show_overlay(dialog)

    def navigate(self, url: str):
        """Send the user to a web page, e.g. the login route."""
        logger.info(f"Opening {url}")
        self.show_message(f"Log in at {url}")
        if self.config["ui"].get("open_browser", True):
            try:
                webbrowser.open(url)
            except webbrowser.Error as e:
                logger.error(f"Could not open browser: {e}")

    # Overlays

    def _show_overlay(self, widget: urwid.Widget, width=60, height="pack", any_key=False):
        """Stack ``widget`` over the current screen.

        ``any_key`` overlays close on the next unhandled key; the others
        close on Esc or through their own buttons.
        """
        bottom = self.loop.widget if self.loop else self.frame
        overlay = urwid.Overlay(
            widget,
            bottom,
            align="center",
            width=width,
            valign="middle",
            height=height,
        )
        self._overlays.append((bottom, any_key))
        if self.loop:
            self.loop.widget = overlay

    def _close_overlay(self):
        if not self._overlays:
            return
        bottom, _ = self._overlays.pop()
        if self.loop:
            self.loop.widget = bottom

    def _show_help(self):
        """Show help overlay."""
        text = urwid.Text(HELP_TEXT)
        filler = urwid.Filler(text, valign="top")
        box = urwid.LineBox(filler, title="Help")
        self._show_overlay(box, height=24, any_key=True)

    def show_message(self, message: str):
        """Show a temporary message in the status bar."""
        self.status_bar.set_text(message)

    def handle_input(self, key):
        """Handle global key input."""

        # Handle tuple keys (mouse events) - ignore them
        if not isinstance(key, str):
            return

        if self._overlays:
            _, any_key = self._overlays[-1]
            if any_key or key == "esc":
                self._close_overlay()
            return

        if key in ("q", "Q"):
            raise urwid.ExitMainLoop()

        if key in ("r", "f5"):
            self.show_message("Reloading...")
            self.controller.reload()
            return

        if key == "ctrl l":
            self.controller.clear_filters()
            return

        if key == "?":
            self._show_help()
            return

    def run(self):
        """Run the application."""
        self.loop = urwid.MainLoop(
            self.frame,
            palette=PALETTE,
            unhandled_input=self.handle_input,
            handle_mouse=True,
        )

        self.controller = BoardController(
            self.client,
            view=self,
            runner=ThreadedRunner(self.loop),
            current_user=self.name_edit.edit_text,
            login_path=self.config["auth"]["login_path"],
            search_delay=float(self.config["ui"].get("search_debounce", 0.3)),
            scheduler=self.loop,
        )
        self.controller.start()

        try:
            self.loop.run()
        except KeyboardInterrupt:
            pass
        finally:
            self.controller.shutdown()


def main():
    """Entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Terminal client for the sentence board")
    parser.add_argument(
        "-c", "--config",
        help="Path to config file",
        default=None,
    )
    parser.add_argument("--url", help="Server base URL", default=None)
    parser.add_argument("--name", help="Your author name", default=None)
    args = parser.parse_args()

    app = App(config_path=args.config, base_url=args.url, name=args.name)

    log_config = app.config.get("logging", {})
    logging.basicConfig(
        filename=log_config.get("file", "sentenceboard.log"),
        level=getattr(logging, str(log_config.get("level", "INFO")).upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    app.run()


if __name__ == "__main__":
    main()
