"""Color theme and styling for the TUI."""

# Urwid palette for the application
# Format: (name, foreground, background, mono, foreground_high, background_high)

PALETTE = [
    # Categories
    ("cat_thoughts", "light cyan", ""),
    ("cat_quotes", "light magenta", ""),
    ("cat_stories", "light blue", ""),
    ("cat_jokes", "yellow", ""),
    ("cat_questions", "light green", ""),
    ("cat_facts", "light red", ""),
    ("cat_other", "light gray", ""),

    # UI elements
    ("header", "white", "dark blue"),
    ("footer", "white", "dark gray"),

    # List items
    ("list_item", "white", ""),
    ("list_item_focus", "white,bold", "dark cyan"),
    ("author", "white,bold", ""),
    ("timestamp", "dark gray", ""),
    ("empty_state", "light gray", ""),

    # Filters
    ("summary", "light gray", ""),
    ("summary_value", "white,bold", ""),
    ("count", "light cyan", ""),

    # Form fields
    ("field", "white", "dark gray"),
    ("field_focus", "white,bold", "dark cyan"),

    # Status/info
    ("info", "light cyan", ""),
    ("error", "light red", ""),

    # Dialog
    ("dialog", "white", "dark gray"),
    ("dialog_title", "white,bold", "dark blue"),
    ("button", "white", "dark gray"),
    ("button_focus", "white,bold", "dark blue"),
    ("button_disabled", "dark gray", "light gray"),
    ("delete_button", "light red", ""),
]

CATEGORY_ATTRS = {
    "thoughts": "cat_thoughts",
    "quotes": "cat_quotes",
    "stories": "cat_stories",
    "jokes": "cat_jokes",
    "questions": "cat_questions",
    "facts": "cat_facts",
    "other": "cat_other",
}


def get_category_attr(category: str) -> str:
    """Get attribute name for a category badge."""
    return CATEGORY_ATTRS.get(category, "cat_other")


def get_message_attr(message_kind) -> str:
    """Get attribute name for the row shown instead of an item list."""
    return "error" if message_kind == "error" else "empty_state"
