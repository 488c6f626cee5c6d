"""
HTTP transport for node requests.

The node client only needs ``request(method, url, body) -> text``. Error
responses are returned as text like any other body; only failures to obtain a
response at all raise.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Optional

import requests

from ..config import ClientConfig
from ..runtime.errors import NetworkError

logger = logging.getLogger(__name__)


class Transport(ABC):
    """Request/response transport used by the node client."""

    @abstractmethod
    def request(self, method: str, url: str, body: Optional[str] = None) -> str:
        """
        Perform a request and return the raw response text.

        Args:
            method: HTTP method ("GET" or "POST")
            url: Absolute URL
            body: JSON text for POST requests

        Returns:
            Response body, whether it reports success or an error

        Raises:
            NetworkError: If no response could be obtained
        """
        pass

    def get(self, url: str) -> str:
        return self.request("GET", url)

    def post(self, url: str, body: str) -> str:
        return self.request("POST", url, body)

    def close(self) -> None:
        """Release transport resources."""
        pass


class RequestsTransport(Transport):
    """
    Transport built on a ``requests.Session``.

    Example:
        ```python
        with RequestsTransport(timeout=10) as transport:
            text = transport.get("https://node.example/blocks/height")
        ```
    """

    def __init__(
        self,
        timeout: float = 30.0,
        verify_ssl: bool = True,
        user_agent: Optional[str] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the transport.

        Args:
            timeout: Request timeout in seconds
            verify_ssl: Verify TLS certificates
            user_agent: User-Agent header value
            session: Optional session to reuse; the transport closes only sessions it created
        """
        self._timeout = timeout
        self._verify_ssl = verify_ssl
        self._user_agent = user_agent
        self._session = session or requests.Session()
        self._owns_session = session is None

    @classmethod
    def from_config(cls, config: ClientConfig) -> RequestsTransport:
        """Create a transport from a client configuration."""
        return cls(timeout=config.timeout, verify_ssl=config.verify_ssl, user_agent=config.user_agent)

    def request(self, method: str, url: str, body: Optional[str] = None) -> str:
        headers = {"Accept": "application/json"}
        if self._user_agent:
            headers["User-Agent"] = self._user_agent
        data = None
        if body is not None:
            headers["Content-Type"] = "application/json"
            data = body.encode("utf-8")

        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(
                method,
                url,
                data=data,
                headers=headers,
                timeout=self._timeout,
                verify=self._verify_ssl,
            )
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"HTTP request failed: {e}", details={"url": url}, cause=e) from e

        logger.debug("%s %s -> HTTP %d (%d bytes)", method, url, response.status_code, len(response.content))
        return response.text

    def close(self) -> None:
        """Close the HTTP session if owned by this transport."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> RequestsTransport:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
