"""Controller tying user input, API calls and rendering together."""

import logging

from sentenceboard.api.client import BoardClient
from sentenceboard.api.errors import (
    AuthRequired,
    BoardError,
    Forbidden,
    ValidationError,
)
from sentenceboard.core import state as board
from sentenceboard.core.debounce import Debouncer
from sentenceboard.core.models import NewSentence
from sentenceboard.core.view import escape_text, render_filter_summary, render_list

logger = logging.getLogger(__name__)

EMPTY_INPUT_MESSAGE = "Your message cannot be empty."
CONFIRM_DELETE_MESSAGE = "Are you sure you want to delete this message? This action is permanent."
LOGIN_TO_POST_MESSAGE = "You must be logged in to post a message. Redirecting to login."
LOGIN_TO_DELETE_MESSAGE = "You must be logged in to delete a message. Redirecting to login."
FORBIDDEN_DELETE_MESSAGE = "You can only delete your own messages. This message belongs to another user."


class BoardController:
    """Single owner of board state, API calls and rendering.

    ``view`` is the screen side. It must provide:
    ``show_list(board_view, on_delete)``, ``show_summary(markup)``,
    ``set_users(users, selected)``, ``set_submitting(busy)``,
    ``reset_compose()``, ``reset_filter_controls(filters)``,
    ``alert(message)``, ``confirm(message, on_yes)`` and ``navigate(url)``.

    ``runner`` executes blocking client calls and calls back on the UI thread
    (see sentenceboard.ui.runner).
    """

    def __init__(
        self,
        client: BoardClient,
        view,
        runner,
        current_user: str = "",
        login_path: str = "/auth/login",
        search_delay: float = 0.3,
        scheduler=None,
    ):
        self.client = client
        self.view = view
        self.runner = runner
        self.login_path = login_path
        self.state = board.BoardState(current_user=current_user)
        self.debouncer = Debouncer(self._commit_search, delay=search_delay, scheduler=scheduler)

    @property
    def login_url(self) -> str:
        return self.client.url(self.login_path)

    # Data loading

    def start(self):
        """Initial load: user list first, then sentences with default filters."""
        logger.info("Starting board controller")
        self.reload()

    def reload(self):
        """Refresh the user list, then the sentence list."""
        self.load_users(then=self.fetch_sentences)

    def load_users(self, then=None):
        self.state, token = board.issue_request(self.state, board.USERS)

        def on_success(users):
            if not self.state.is_latest(board.USERS, token):
                logger.debug(f"Dropping stale user list (request {token})")
                return
            self.state = board.apply_users(self.state, token, users)
            self.view.set_users(list(self.state.users), self.state.filters.user)

        def on_error(error: BoardError):
            logger.error(f"Error loading users: {error}")

        self.runner.run(self.client.list_users, on_success, on_error, on_finally=then)

    def fetch_sentences(self):
        """Fetch sentences for the current filters and re-render."""
        filters = self.state.filters
        self.state, token = board.issue_request(self.state, board.SENTENCES)

        def on_success(sentences):
            if not self.state.is_latest(board.SENTENCES, token):
                logger.debug(f"Dropping stale sentence list (request {token})")
                return
            self.state = board.apply_sentences(self.state, token, sentences)
            self.render()
            self.render_filter_summary()

        def on_error(error: BoardError):
            if not self.state.is_latest(board.SENTENCES, token):
                logger.debug(f"Dropping stale fetch error (request {token}): {error}")
                return
            logger.error(f"Error fetching messages: {error}")
            self.state = board.apply_sentences_error(self.state, token, str(error))
            self.render()

        self.runner.run(lambda: self.client.list_sentences(filters), on_success, on_error)

    # Filters

    def change_filter(self, key: str, value: str):
        """Merge one filter value and re-fetch."""
        self.state = board.change_filter(self.state, key, value)
        self.fetch_sentences()

    def clear_filters(self):
        """Reset every filter to its default and re-fetch."""
        self.debouncer.cancel()
        self.state = board.clear_filters(self.state)
        self.view.reset_filter_controls(self.state.filters)
        self.fetch_sentences()

    def search_input(self, text: str):
        """Called on every keystroke in the search field."""
        self.debouncer.trigger(text)

    def _commit_search(self, text: str):
        self.change_filter("search", text)

    def set_current_user(self, name: str):
        """Update the name used to decide which posts get a delete control."""
        if name == self.state.current_user:
            return
        self.state = board.set_current_user(self.state, name)
        self.render()

    # Create

    def _validate(self, sentence: NewSentence):
        if not sentence.is_valid():
            raise ValidationError(EMPTY_INPUT_MESSAGE)

    def submit_sentence(self, text: str, name: str, category: str):
        """Post a new sentence, then reload everything on success."""
        if self.state.submitting:
            logger.debug("Submit ignored, previous submit still running")
            return

        sentence = NewSentence.from_input(text, name, category)
        try:
            self._validate(sentence)
        except ValidationError as e:
            self.view.alert(str(e))
            return

        self.state = board.begin_submit(self.state)
        self.view.set_submitting(True)

        def on_success(_):
            logger.info(f"Posted message as '{sentence.name}'")
            self.view.reset_compose()
            self.reload()

        def on_error(error: BoardError):
            if isinstance(error, AuthRequired):
                self.view.alert(LOGIN_TO_POST_MESSAGE)
                self.view.navigate(self.login_url)
                return
            message = escape_text(str(error))
            logger.error(f"Error adding message: {message}")
            self.view.alert(f"Error creating message: {message}")

        def on_finally():
            self.state = board.end_submit(self.state)
            self.view.set_submitting(False)

        self.runner.run(lambda: self.client.create_sentence(sentence), on_success, on_error, on_finally)

    # Delete

    def delete_sentence(self, sentence_id: str):
        """Ask for confirmation, then delete."""
        self.view.confirm(CONFIRM_DELETE_MESSAGE, lambda: self._do_delete(sentence_id))

    def _do_delete(self, sentence_id: str):
        def on_success(_):
            logger.info(f"Deleted message {sentence_id}")
            self.reload()

        def on_error(error: BoardError):
            if isinstance(error, Forbidden):
                self.view.alert(FORBIDDEN_DELETE_MESSAGE)
                return
            if isinstance(error, AuthRequired):
                self.view.alert(LOGIN_TO_DELETE_MESSAGE)
                self.view.navigate(self.login_url)
                return
            message = escape_text(str(error))
            logger.error(f"Error deleting message: {message}")
            self.view.alert(f"Error deleting message: {message}")

        self.runner.run(lambda: self.client.delete_sentence(sentence_id), on_success, on_error)

    # Rendering

    def render(self):
        """Rebuild the list. Delete handlers are created fresh each time."""
        self.view.show_list(render_list(self.state), self.delete_sentence)

    def render_filter_summary(self):
        self.view.show_summary(render_filter_summary(self.state.filters))

    def shutdown(self):
        self.debouncer.cancel()
        self.runner.shutdown()
