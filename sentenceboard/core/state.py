"""Board state and the pure functions that update it.

Every update returns a new ``BoardState``; nothing here touches the network
or the screen. Reads are tagged with a per-kind request token so a response
that arrives after a newer request was issued is ignored.
"""

from dataclasses import dataclass, field, replace
from typing import Optional

from sentenceboard.core.models import FilterState, Sentence

USERS = "users"
SENTENCES = "sentences"


@dataclass(frozen=True)
class BoardState:
    """Everything the controller knows about the board."""
    filters: FilterState = field(default_factory=FilterState)
    users: tuple[str, ...] = ()
    sentences: tuple[Sentence, ...] = ()
    current_user: str = ""
    load_error: Optional[str] = None
    loaded: bool = False
    submitting: bool = False
    # Latest token issued per request kind
    tokens: tuple[tuple[str, int], ...] = ()

    def latest_token(self, kind: str) -> int:
        return dict(self.tokens).get(kind, 0)

    def is_latest(self, kind: str, token: int) -> bool:
        return token == self.latest_token(kind)


def change_filter(state: BoardState, key: str, value: str) -> BoardState:
    return replace(state, filters=state.filters.with_value(key, value))


def clear_filters(state: BoardState) -> BoardState:
    return replace(state, filters=FilterState())


def set_current_user(state: BoardState, name: str) -> BoardState:
    return replace(state, current_user=name)


def issue_request(state: BoardState, kind: str) -> tuple[BoardState, int]:
    """Issue the next token for a request kind."""
    token = state.latest_token(kind) + 1
    tokens = dict(state.tokens)
    tokens[kind] = token
    return replace(state, tokens=tuple(sorted(tokens.items()))), token


def apply_users(state: BoardState, token: int, users: list[str]) -> BoardState:
    if not state.is_latest(USERS, token):
        return state
    return replace(state, users=tuple(users))


def apply_sentences(state: BoardState, token: int, sentences: list[Sentence]) -> BoardState:
    if not state.is_latest(SENTENCES, token):
        return state
    return replace(state, sentences=tuple(sentences), load_error=None, loaded=True)


def apply_sentences_error(state: BoardState, token: int, message: str) -> BoardState:
    if not state.is_latest(SENTENCES, token):
        return state
    return replace(state, load_error=message, loaded=True)


def begin_submit(state: BoardState) -> BoardState:
    return replace(state, submitting=True)


def end_submit(state: BoardState) -> BoardState:
    return replace(state, submitting=False)
