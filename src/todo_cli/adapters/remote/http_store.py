"""Generic JSON-over-HTTP remote store.

The server exposes one path that accepts the collection document on POST and
returns it on GET. Any 2xx answer is a success. Requests are not retried.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError as PydanticValidationError

from todo_cli.adapters.remote.base import RemoteStore
from todo_cli.exceptions import RemoteDecodeError, TransportError
from todo_cli.models import TaskCollection

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "/api/todos"
DEFAULT_TIMEOUT = 30.0


class HttpRemoteStore(RemoteStore):
    """HTTP client for a remote todo endpoint."""

    def __init__(
        self,
        server_url: str,
        username: str | None = None,
        password: str | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        endpoint: str = DEFAULT_ENDPOINT,
        client: httpx.Client | None = None,
    ):
        self.server_url = server_url
        self.url = server_url.rstrip("/") + endpoint
        self.timeout = timeout
        # Credentials are only sent when both halves are present.
        self.auth = httpx.BasicAuth(username, password) if username and password else None
        self._client = client
        self._owns_client = client is None

    def describe(self) -> str:
        return self.server_url

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout, follow_redirects=True)
        return self._client

    def close(self) -> None:
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def _request(self, method: str, **kwargs) -> httpx.Response:
        logger.debug("%s %s", method, self.url)
        try:
            response = self._get_client().request(
                method, self.url, auth=self.auth, timeout=self.timeout, **kwargs
            )
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, self.url, e)
            raise TransportError(f"Could not reach {self.url}: {e}") from e

        if not response.is_success:
            body = response.text.strip()
            logger.warning("%s %s -> %d", method, self.url, response.status_code)
            raise TransportError(
                f"{body or response.reason_phrase} (Status: {response.status_code})",
                status_code=response.status_code,
            )
        return response

    def fetch(self) -> TaskCollection:
        response = self._request("GET", headers={"Accept": "application/json"})
        try:
            return TaskCollection.from_json(response.content)
        except PydanticValidationError as e:
            raise RemoteDecodeError(f"Invalid todo document from {self.url}: {e}") from e

    def store(self, collection: TaskCollection) -> None:
        self._request(
            "POST",
            content=collection.to_json(indent=None).encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )
