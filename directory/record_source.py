"""
Record source: one cancellable retrieval of the advocate collection.

A ``RecordSource`` issues exactly one GET against the records endpoint on a
background worker and settles into one of:

    loaded     : ``advocates`` holds the parsed records (possibly empty)
    error      : ``error`` holds a user-visible message
    cancelled  : ``close()`` ran before the response arrived

Once ``close()`` has returned, nothing about the source changes again and
the ``on_settled`` callback is never invoked: a late response is dropped.
The settle step and ``close()`` share one lock, so a response is either
applied completely (callback included) before teardown, or not at all.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

import requests

from directory.models import Advocate, MalformedResponseError, parse_envelope
from utils.http import SessionManager, fetch_json

logger = logging.getLogger(__name__)

IDLE = "idle"
LOADING = "loading"
LOADED = "loaded"
ERROR = "error"
CANCELLED = "cancelled"

SettledCallback = Callable[["RecordSource"], None]


def describe_error(exc: BaseException, url: str) -> str:
    """Turn a retrieval failure into a message fit for the user."""
    if isinstance(exc, requests.HTTPError):
        status = exc.response.status_code if exc.response is not None else "?"
        return f"Failed to load advocates: server responded with HTTP {status}"
    if isinstance(exc, requests.Timeout):
        return "Failed to load advocates: the request timed out"
    if isinstance(exc, requests.ConnectionError):
        return f"Failed to load advocates: could not connect to {url}"
    if isinstance(exc, MalformedResponseError):
        return f"Failed to load advocates: unexpected response ({exc})"
    if isinstance(exc, ValueError):
        return "Failed to load advocates: response was not valid JSON"
    return f"Failed to load advocates: {exc}"


class RecordSource:
    """Fetches the full advocate collection once."""

    def __init__(self, url: str, session_manager: Optional[SessionManager] = None,
                 timeout: float = 30.0) -> None:
        """
        Args:
            url: Records endpoint (``GET`` returns ``{"data": [...]}``)
            session_manager: HTTP session provider; a private one is created
                when omitted.  Either way it is closed by close(), which is
                what cuts off an in-flight read
            timeout: Request timeout in seconds
        """
        self.url = url
        self.timeout = timeout
        self._sessions = session_manager or SessionManager()

        self.status = IDLE
        self.advocates: tuple[Advocate, ...] = ()
        self.error: str | None = None

        self._lock = threading.RLock()
        self._closed = False
        self._settled = threading.Event()
        self._on_settled: SettledCallback | None = None
        self._executor: ThreadPoolExecutor | None = None
        self._future: Future | None = None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def is_empty(self) -> bool:
        """True when the retrieval succeeded with no records."""
        return self.status == LOADED and not self.advocates

    def start(self, on_settled: SettledCallback | None = None) -> None:
        """Begin the retrieval.  Later calls are ignored.

        Raises:
            RuntimeError: the source was already closed.
        """
        with self._lock:
            if self._closed:
                raise RuntimeError("RecordSource has been closed")
            if self.status != IDLE:
                logger.debug("record source already started (status=%s)", self.status)
                return
            self.status = LOADING
            self._on_settled = on_settled

        logger.info("fetching advocates from %s", self.url, extra={"url": self.url})
        self._executor = ThreadPoolExecutor(max_workers=1,
                                            thread_name_prefix="record-source")
        self._future = self._executor.submit(self._run)
        self._executor.shutdown(wait=False)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the source settles or is closed.

        Returns:
            True if it settled (or closed) within *timeout*.
        """
        return self._settled.wait(timeout)

    def join(self, timeout: float | None = None) -> None:
        """Block until the worker thread has finished, even after close()."""
        if self._future is not None:
            self._future.exception(timeout)

    def close(self) -> None:
        """Abandon the retrieval.  Idempotent.

        After this returns, no response is applied and no callback runs.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            if self.status == LOADING:
                self.status = CANCELLED
                logger.debug("cancelled in-flight fetch of %s", self.url)
            self._settled.set()
        self._sessions.close()

    # ── worker ────────────────────────────────────────────────────────────

    def _run(self) -> None:
        if self._closed:
            return
        try:
            payload = fetch_json(self._sessions.session, self.url, self.timeout)
            advocates = parse_envelope(payload)
        except Exception as exc:
            if not self._closed:
                logger.warning("fetching advocates from %s failed: %s", self.url, exc)
            self._settle(ERROR, (), describe_error(exc, self.url))
        else:
            self._settle(LOADED, advocates, None)
        finally:
            if self._closed:
                self._sessions.close()

    def _settle(self, status: str, advocates: tuple[Advocate, ...],
                error: str | None) -> None:
        with self._lock:
            if self._closed:
                logger.debug("discarding late response from %s", self.url)
                return
            self.status = status
            self.advocates = advocates
            self.error = error
            if status == LOADED:
                logger.info("loaded %d advocates", len(advocates),
                            extra={"count": len(advocates)})
            try:
                if self._on_settled is not None:
                    self._on_settled(self)
            finally:
                self._settled.set()
