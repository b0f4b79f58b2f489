"""Core board logic - UI independent."""
from .models import Category, SortOrder, Sentence, FilterState, NewSentence
from .state import BoardState

__all__ = [
    "Category",
    "SortOrder",
    "Sentence",
    "FilterState",
    "NewSentence",
    "BoardState",
]
