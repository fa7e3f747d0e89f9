"""Main client class for the mailbox API.

This module provides MailBoxClient, the entry point for interacting with the
mailbox REST API. Endpoints are grouped into sub-clients created on first
access.
"""

from typing import Any

from client._http import HTTPClient
from client._messages import MessagesClient
from client._threads import ThreadsClient


class MailBoxClient:
    """Synchronous client for the mailbox REST API.

    Attributes:
        base_url: The base URL of the mailbox server.

    Example:
        with MailBoxClient(base_url="http://localhost:8000") as client:
            client.messages.add(Email(timestamp=1))
            for email in client.messages.threaded_view():
                print(email.subject)
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: The base URL of the mailbox server.
            timeout: Request timeout in seconds.
            retry_enabled: Whether to retry connection errors, timeouts and
                HTTP 502/503/504 with exponential backoff.
            max_retries: Maximum number of retry attempts when retry is enabled.
            transport: Custom HTTP transport (e.g., httpx.MockTransport for testing).
        """
        self.base_url = base_url
        self._http = HTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )

        self._messages: MessagesClient | None = None
        self._threads: ThreadsClient | None = None

    def __enter__(self) -> "MailBoxClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the client and release resources."""
        self._http.close()

    @property
    def messages(self) -> MessagesClient:
        """Access message storage, read state and view endpoints."""
        if self._messages is None:
            self._messages = MessagesClient(self._http)
        return self._messages

    @property
    def threads(self) -> ThreadsClient:
        """Access thread endpoints."""
        if self._threads is None:
            self._threads = ThreadsClient(self._http)
        return self._threads

    def health(self) -> dict[str, Any]:
        """Check server health."""
        return self._http.get("/health")
