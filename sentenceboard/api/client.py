"""HTTP client for the message board API."""

import logging
from typing import Optional
from urllib.parse import quote

import requests

from sentenceboard.api.errors import (
    AuthRequired,
    Forbidden,
    NetworkFailure,
    ServerRejected,
)
from sentenceboard.core.models import FilterState, NewSentence, Sentence

logger = logging.getLogger(__name__)


class BoardClient:
    """
    Thin wrapper around requests for the four board endpoints.
    Maps HTTP status codes onto the errors in sentenceboard.api.errors.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10,
        headers: Optional[dict] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        if headers:
            self.session.headers.update(headers)

    def url(self, path: str) -> str:
        """Resolve a path against the server base URL."""
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        try:
            return self.session.request(method, self.url(path), timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error(f"Network error on {method} {path}: {e}")
            raise NetworkFailure(str(e)) from e

    @staticmethod
    def _error_message(resp: requests.Response, fallback: str) -> str:
        """Get the server-supplied error message, or the fallback."""
        try:
            data = resp.json()
        except ValueError:
            return fallback
        if isinstance(data, dict) and data.get("error"):
            return str(data["error"])
        return fallback

    def _json_list(self, resp: requests.Response, fallback: str) -> list:
        if not resp.ok:
            raise ServerRejected(self._error_message(resp, fallback), resp.status_code)
        try:
            data = resp.json()
        except ValueError as e:
            raise NetworkFailure(f"Invalid JSON from server: {e}") from e
        if not isinstance(data, list):
            raise NetworkFailure("Expected a JSON array from server")
        return data

    def list_users(self) -> list[str]:
        """Fetch the distinct usernames that have posted."""
        resp = self._request("GET", "/api/sentences/users")
        data = self._json_list(resp, "Failed to load users")
        users = []
        for name in data:
            name = str(name)
            if name not in users:
                users.append(name)
        return users

    def list_sentences(self, filters: FilterState) -> list[Sentence]:
        """Fetch sentences, filtered and sorted by the server."""
        resp = self._request("GET", "/api/sentences", params=filters.to_params())
        data = self._json_list(resp, "Failed to fetch messages")
        return [Sentence.from_dict(item) for item in data if isinstance(item, dict)]

    def create_sentence(self, sentence: NewSentence) -> None:
        """Post a new sentence."""
        resp = self._request("POST", "/api/sentences", json=sentence.to_dict())
        if resp.ok:
            return
        if resp.status_code == 401:
            raise AuthRequired("You must be logged in to post a message.")
        raise ServerRejected(
            self._error_message(resp, "Failed to add message."), resp.status_code
        )

    def delete_sentence(self, sentence_id: str) -> None:
        """Delete a sentence. Only its author may do so."""
        resp = self._request("DELETE", f"/api/sentences/{quote(sentence_id, safe='')}")
        if resp.ok:
            return
        if resp.status_code == 403:
            raise Forbidden("You can only delete your own messages.")
        if resp.status_code == 401:
            raise AuthRequired("You must be logged in to delete a message.")
        raise ServerRejected(
            self._error_message(resp, "Failed to delete message"), resp.status_code
        )
