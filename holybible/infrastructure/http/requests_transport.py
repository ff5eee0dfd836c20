"""Transport backed by the requests library.

Performs a single GET per call on a lazily created, pooled Session.
Connection failures and timeouts are reported as TransportError; HTTP
status codes are passed through untouched for the caller to classify.
"""

import logging
import threading
from typing import Mapping, Optional

import requests

from holybible.domain.exceptions import TransportError
from holybible.domain.interfaces.transport import Transport, TransportResponse

logger = logging.getLogger(__name__)


class RequestsTransport(Transport):
    """requests.Session-based implementation of Transport."""

    def __init__(self, session: Optional[requests.Session] = None):
        self._session = session
        self._lock = threading.Lock()

    def _get_session(self) -> requests.Session:
        with self._lock:
            if self._session is None:
                self._session = requests.Session()
                logger.debug("Created new requests session.")
            return self._session

    def get(self, url: str, headers: Mapping[str, str], timeout: float) -> TransportResponse:
        session = self._get_session()
        try:
            response = session.get(url, headers=dict(headers), timeout=timeout)
        except requests.Timeout as e:
            raise TransportError(f"Request to {url} timed out after {timeout}s: {e}", timed_out=True) from e
        except requests.ConnectionError as e:
            raise TransportError(f"Connection to {url} failed: {e}") from e
        except requests.RequestException as e:
            # Malformed URL, redirect loops and the like: repeating the request cannot help
            raise TransportError(f"Request to {url} failed: {e}", retryable=False) from e

        return TransportResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )

    def close(self) -> None:
        with self._lock:
            if self._session is not None:
                self._session.close()
                self._session = None
                logger.debug("Closed requests session.")
