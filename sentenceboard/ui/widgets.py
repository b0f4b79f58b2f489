"""Custom urwid widgets for the message board."""

import urwid

from sentenceboard.core.view import BoardView, SentenceRow
from sentenceboard.ui.theme import get_category_attr, get_message_attr


class SentenceItem(urwid.WidgetWrap):
    """A post in the feed, with a delete button when it belongs to the user."""

    def __init__(self, row: SentenceRow, on_delete=None):
        self.row = row
        self.id = row.id
        self.on_delete = on_delete if row.deletable else None
        self.delete_button = None

        header = urwid.Columns([
            ("pack", urwid.Text(("author", row.author))),
            ("pack", urwid.Text("  ")),
            ("pack", urwid.Text((get_category_attr(row.category), f"[{row.category_label}]"))),
        ])

        footer_cols = [urwid.Text(("timestamp", f"Posted on: {row.posted_on}"))]
        if self.on_delete:
            self.delete_button = urwid.Button("Delete", on_press=self._on_delete_press)
            footer_cols.append(("pack", urwid.AttrMap(
                self.delete_button, "delete_button", focus_map="button_focus"
            )))
        footer = urwid.Columns(footer_cols, dividechars=2)

        pile = urwid.Pile([
            header,
            urwid.Text(row.text),
            footer,
            urwid.Divider("─"),
        ])
        widget = urwid.AttrMap(pile, "list_item", focus_map="list_item_focus")
        super().__init__(widget)

    def _on_delete_press(self, button=None):
        self.on_delete(self.id)

    def selectable(self):
        return True

    def keypress(self, size, key):
        if key in ("d", "delete") and self.on_delete:
            self.on_delete(self.id)
            return None
        if self.delete_button is None:
            return key
        return super().keypress(size, key)


class MessageItem(urwid.WidgetWrap):
    """A single non-selectable row, used for the empty and error states."""

    def __init__(self, message: str, attr: str = "empty_state"):
        self.message = message
        super().__init__(urwid.AttrMap(urwid.Text(message, align="center"), attr))


class SentenceList(urwid.WidgetWrap):
    """Scrollable feed of posts."""

    def __init__(self):
        self.items = []
        self.walker = urwid.SimpleFocusListWalker([])
        self.listbox = urwid.ListBox(self.walker)
        super().__init__(self.listbox)

    def set_view(self, view: BoardView, on_delete=None):
        """Clear and rebuild from a rendered board view."""
        self.walker.clear()
        self.items = []

        if view.message_kind:
            self.items.append(MessageItem(view.message, get_message_attr(view.message_kind)))
        else:
            for row in view.rows:
                self.items.append(SentenceItem(row, on_delete=on_delete))

        self.walker.extend(self.items)

    def get_focused_id(self) -> str | None:
        """Get the ID of the currently focused post."""
        if self.walker and self.walker.focus is not None:
            focus_widget = self.walker[self.walker.focus]
            if hasattr(focus_widget, "id"):
                return focus_widget.id
        return None


class CycleButton(urwid.WidgetWrap):
    """A button that steps through a fixed set of (value, label) options."""

    def __init__(self, caption: str, options: list[tuple[str, str]], on_change=None):
        self.caption = caption
        self.options = list(options)
        self.index = 0
        self.on_change = on_change

        self.button = urwid.Button("", on_press=self._on_press)
        self._update_label()
        super().__init__(urwid.AttrMap(self.button, "button", focus_map="button_focus"))

    @property
    def value(self) -> str:
        return self.options[self.index][0]

    def _update_label(self):
        self.button.set_label(f"{self.caption}: {self.options[self.index][1]}")

    def _on_press(self, button=None):
        self.index = (self.index + 1) % len(self.options)
        self._update_label()
        if self.on_change:
            self.on_change(self.value)

    def set_value(self, value: str):
        """Select a value without firing on_change. Unknown values are ignored."""
        for i, (option_value, _) in enumerate(self.options):
            if option_value == value:
                self.index = i
                self._update_label()
                return

    def set_options(self, options: list[tuple[str, str]], selected: str | None = None):
        """Replace the options, keeping ``selected`` when present."""
        self.options = list(options)
        self.index = 0
        if selected is not None:
            self.set_value(selected)
        self._update_label()

    def keypress(self, size, key):
        if key == "left" and self.options:
            self.index = (self.index - 2) % len(self.options)
            self._on_press()
            return None
        return super().keypress(size, key)


class SubmitEdit(urwid.Edit):
    """Single line edit that calls ``on_submit`` on Enter."""

    def __init__(self, caption="", edit_text="", on_submit=None):
        self.on_submit = on_submit
        super().__init__(caption, edit_text)

    def keypress(self, size, key):
        if key == "enter" and self.on_submit:
            self.on_submit()
            return None
        return super().keypress(size, key)


class StatusBar(urwid.WidgetWrap):
    """A status bar showing hints and messages."""

    def __init__(self, text: str = ""):
        self.text_widget = urwid.Text(text)
        widget = urwid.AttrMap(self.text_widget, "footer")
        super().__init__(widget)

    def set_text(self, text: str):
        """Set the status text."""
        self.text_widget.set_text(text)


class Dialog(urwid.WidgetWrap):
    """A modal dialog widget."""

    def __init__(self, title: str, body: urwid.Widget, buttons: list[tuple[str, callable]]):
        self.title = title
        self.buttons = buttons

        # Title
        title_widget = urwid.Text(title, align="center")
        title_widget = urwid.AttrMap(title_widget, "dialog_title")

        # Buttons
        button_widgets = []
        for label, callback in buttons:
            btn = urwid.Button(label)
            urwid.connect_signal(btn, "click", lambda b, cb=callback: cb())
            btn = urwid.AttrMap(btn, "button", focus_map="button_focus")
            button_widgets.append(btn)

        widths = [len(label) + 4 for label, _ in buttons]
        button_row = urwid.Columns(
            [(width, w) for width, w in zip(widths, button_widgets)],
            dividechars=2
        )
        row_width = sum(widths) + 2 * (len(widths) - 1)
        button_row = urwid.Padding(button_row, align="center", width=row_width)

        # Combine
        pile = urwid.Pile([
            title_widget,
            urwid.Divider(),
            body,
            urwid.Divider(),
            button_row,
        ])

        # Add border
        lined = urwid.LineBox(pile)
        widget = urwid.AttrMap(lined, "dialog")

        super().__init__(widget)
