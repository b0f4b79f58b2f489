"""Projection of board state into what the screen shows.

Nothing in here knows about urwid widgets; the result is plain data plus
urwid-style text markup (strings and ``(attr, text)`` tuples).
"""

import unicodedata
from dataclasses import dataclass, field
from typing import Optional

from sentenceboard.core.models import ALL, FilterState, category_display_name
from sentenceboard.core.state import BoardState

EMPTY_MESSAGE = "No messages found matching your criteria."
ERROR_MESSAGE = "Error loading messages. Please check server connection."
LOADING_MESSAGE = "Loading messages..."

# Keep layout characters, neutralise everything else in Unicode category Cc
_ALLOWED_CONTROLS = {"\n", "\t"}


def escape_text(text) -> str:
    """Make user-supplied text safe to write to the terminal.

    Control characters (ESC, BEL, CR, the C1 range, ...) are replaced by a
    visible ``\\xNN`` form so server data can never emit escape sequences.
    """
    if text is None:
        return ""
    out = []
    for ch in str(text):
        if ch not in _ALLOWED_CONTROLS and unicodedata.category(ch) == "Cc":
            out.append(f"\\x{ord(ch):02x}")
        else:
            out.append(ch)
    return "".join(out)


@dataclass(frozen=True)
class SentenceRow:
    """One post as shown in the list."""
    id: str
    author: str
    category: str
    category_label: str
    text: str
    posted_on: str
    deletable: bool = False


@dataclass
class BoardView:
    """Everything needed to draw the feed."""
    rows: list[SentenceRow] = field(default_factory=list)
    count_label: str = "0 Messages"
    # Shown instead of rows: "empty", "error" or "loading"
    message_kind: Optional[str] = None
    message: str = ""
    summary: list = field(default_factory=list)

    @property
    def deletable_ids(self) -> list[str]:
        return [row.id for row in self.rows if row.deletable]


def render_list(state: BoardState) -> BoardView:
    """Build the list view from the last applied fetch result."""
    sentences = state.sentences
    view = BoardView(count_label=f"{len(sentences)} Messages")

    if state.load_error is not None:
        view.message_kind = "error"
        view.message = ERROR_MESSAGE
        return view

    if not state.loaded:
        view.message_kind = "loading"
        view.message = LOADING_MESSAGE
        return view

    if not sentences:
        view.message_kind = "empty"
        view.message = EMPTY_MESSAGE
        return view

    current_user = state.current_user
    for sentence in sentences:
        view.rows.append(SentenceRow(
            id=sentence.id,
            author=escape_text(sentence.name),
            category=sentence.category,
            category_label=escape_text(sentence.category_label),
            text=escape_text(sentence.text),
            posted_on=escape_text(sentence.posted_on()),
            # Display convenience only; the server decides who may delete
            deletable=sentence.name == current_user,
        ))
    return view


def render_filter_summary(filters: FilterState) -> list:
    """Describe the active filters and sort order as urwid text markup."""
    parts = []

    if filters.category != ALL:
        parts.append(("Category: ", category_display_name(filters.category)))

    if filters.user != ALL:
        parts.append(("User: ", filters.user))

    if filters.search and filters.search.strip():
        parts.append(("Search: ", f'"{filters.search}"'))

    sort_label = filters.sort_by[:1].upper() + filters.sort_by[1:]
    parts.append(("Sorted by: ", sort_label))

    markup: list = [("summary", "Current View: ")]
    for i, (label, value) in enumerate(parts):
        if i:
            markup.append(("summary", " | "))
        markup.append(("summary", label))
        markup.append(("summary_value", escape_text(value)))
    return markup


def summary_text(markup: list) -> str:
    """Flatten summary markup to plain text."""
    return "".join(seg if isinstance(seg, str) else seg[1] for seg in markup)


def render(state: BoardState) -> BoardView:
    """Full projection: list, count and filter summary."""
    view = render_list(state)
    view.summary = render_filter_summary(state.filters)
    return view
