"""Data models for the message board client."""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional, Union


ALL = "all"


class Category(Enum):
    """Category a sentence is posted under."""
    THOUGHTS = "thoughts"
    QUOTES = "quotes"
    STORIES = "stories"
    JOKES = "jokes"
    QUESTIONS = "questions"
    FACTS = "facts"
    OTHER = "other"


class SortOrder(Enum):
    """Sort orders understood by the server."""
    NEWEST = "newest"
    OLDEST = "oldest"
    NAME = "name"
    CATEGORY = "category"


DEFAULT_CATEGORY = Category.THOUGHTS

CATEGORY_DISPLAY_NAMES = {
    Category.THOUGHTS: "💭 Thoughts",
    Category.QUOTES: "💬 Quotes",
    Category.STORIES: "📖 Stories",
    Category.JOKES: "😂 Jokes",
    Category.QUESTIONS: "❓ Questions",
    Category.FACTS: "🔍 Facts",
    Category.OTHER: "📌 Other",
}


def category_display_name(category: Union[Category, str]) -> str:
    """Get the display name for a category, falling back to the raw value."""
    if isinstance(category, Category):
        return CATEGORY_DISPLAY_NAMES[category]
    try:
        return CATEGORY_DISPLAY_NAMES[Category(category)]
    except ValueError:
        return category


def parse_timestamp(value) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp as sent by the server."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class Sentence:
    """A single post on the board."""
    id: str
    text: str
    name: str
    category: str
    created_at: Optional[datetime] = None
    created_at_raw: str = ""

    @property
    def category_label(self) -> str:
        return category_display_name(self.category)

    def posted_on(self) -> str:
        """Timestamp in local time, as shown under each post."""
        if self.created_at is None:
            return self.created_at_raw
        return self.created_at.astimezone().strftime("%d/%m/%Y, %H:%M:%S")

    @classmethod
    def from_dict(cls, data: dict) -> "Sentence":
        """Create from a server JSON object."""
        raw_created = data.get("createdAt")
        return cls(
            id=str(data.get("id") or data.get("_id") or ""),
            text=str(data.get("text") or ""),
            name=str(data.get("name") or ""),
            category=str(data.get("category") or Category.OTHER.value),
            created_at=parse_timestamp(raw_created),
            created_at_raw=raw_created if isinstance(raw_created, str) else "",
        )


@dataclass(frozen=True)
class FilterState:
    """Query parameters for the sentence feed.

    The server does all filtering, search matching and ordering; ``all`` and
    an empty search mean no constraint.
    """
    category: str = ALL
    user: str = ALL
    sort_by: str = SortOrder.NEWEST.value
    search: str = ""

    # Filter key as used by the controls and the query string -> field name
    KEYS = {
        "category": "category",
        "user": "user",
        "sortBy": "sort_by",
        "search": "search",
    }

    def with_value(self, key: str, value: str) -> "FilterState":
        """Return a copy with one filter key replaced."""
        if key not in self.KEYS:
            raise KeyError(f"Unknown filter: {key}")
        return replace(self, **{self.KEYS[key]: value})

    def to_params(self) -> dict[str, str]:
        """Serialize to exactly the four query parameters."""
        return {
            "category": self.category,
            "user": self.user,
            "sortBy": self.sort_by,
            "search": self.search,
        }

    def is_default(self) -> bool:
        return self == FilterState()


@dataclass
class NewSentence:
    """A sentence about to be submitted."""
    text: str
    name: str
    category: str = DEFAULT_CATEGORY.value

    @classmethod
    def from_input(cls, text: str, name: str, category: str) -> "NewSentence":
        """Trim raw form input."""
        return cls(text=(text or "").strip(), name=(name or "").strip(), category=category)

    def is_valid(self) -> bool:
        return bool(self.text) and bool(self.name)

    def to_dict(self) -> dict:
        """Convert to the JSON request body."""
        return {"text": self.text, "name": self.name, "category": self.category}
