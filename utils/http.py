"""HTTP utilities for the advocate directory.

Provides reusable functions for:
- Pooled HTTP sessions (no automatic retries; a failed fetch is reported,
  not repeated)
- Fetching and decoding a JSON document
"""

from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter


class SessionManager:
    """Manages an HTTP session with connection pooling."""

    def __init__(self, pool_connections: int = 4, pool_maxsize: int = 4,
                 headers: Optional[dict[str, str]] = None):
        """Initialize session manager.

        Args:
            pool_connections: Number of connection pools to cache
            pool_maxsize: Maximum number of connections per pool
            headers: Default headers sent with every request
        """
        self.pool_connections = pool_connections
        self.pool_maxsize = pool_maxsize
        self.headers = headers or {"Accept": "application/json"}
        self._session: Optional[requests.Session] = None

    @property
    def session(self) -> requests.Session:
        """Get or create the HTTP session.

        Returns:
            requests.Session object
        """
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update(self.headers)

            adapter = HTTPAdapter(
                max_retries=0,
                pool_connections=self.pool_connections,
                pool_maxsize=self.pool_maxsize,
            )
            self._session.mount("http://", adapter)
            self._session.mount("https://", adapter)

        return self._session

    def close(self) -> None:
        """Close the session and release resources.

        Closing the session also drops its pooled sockets, which makes an
        in-flight read on another thread fail promptly.
        """
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()


def fetch_json(session: requests.Session, url: str, timeout: float = 30) -> Any:
    """GET *url* and return the decoded JSON body.

    Args:
        session: Session to issue the request with
        url: Absolute URL
        timeout: Connect/read timeout in seconds

    Returns:
        Decoded JSON value (any shape; callers validate it)

    Raises:
        requests.HTTPError: Status code >= 400
        requests.RequestException: Network failure
        ValueError: Body is not valid JSON
    """
    resp = session.get(url, timeout=timeout)
    resp.raise_for_status()
    return resp.json()
