"""HTTP client for the Bible API with automatic retries.

Implements exponential backoff for transient faults: connection failures
(DNS, refused, timeout) and retryable HTTP statuses (5xx, 429). Any other
non-2xx status fails immediately. A 2xx body that is not valid JSON is a
protocol violation and is never retried.
"""

import json
import logging
import time
from typing import Any, Dict, Optional

from holybible.domain.events.api_events import (
    DomainEvent,
    RequestFailed,
    RequestStarted,
    RequestSucceeded,
    RetryScheduled,
)
from holybible.domain.exceptions import ApiResponseError, NetworkError, TransportError
from holybible.domain.interfaces.bible_client import BibleClient
from holybible.domain.interfaces.transport import Transport, TransportResponse
from holybible.infrastructure.http.requests_transport import RequestsTransport
from holybible.infrastructure.resilience.retry_policy import RetryPolicy

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://www.abibliadigital.com.br/api/"
DEFAULT_TIMEOUT_SECONDS = 5.0
MAX_LOGGED_BODY_CHARS = 500


def is_retryable_status(status_code: int) -> bool:
    """Server errors and rate limiting are worth another attempt."""
    return status_code >= 500 or status_code == 429


class ResilientClient(BibleClient):
    """Executes API GETs through a Transport, retrying per a RetryPolicy.

    The base URL, token, timeout and retry policy are the only state shared
    between calls. Setters apply to calls issued after they return; they are
    not atomic with respect to requests already in flight.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        transport: Optional[Transport] = None,
        retry_policy: Optional[RetryPolicy] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        user_token: Optional[str] = None,
        log: Optional[logging.Logger] = None,
    ):
        """Initializes the ResilientClient.

        Args:
            base_url: API root; paths are joined to it with a single '/'.
            transport: HTTP transport (defaults to a requests-based one).
            retry_policy: Retry policy (defaults to RetryPolicy.default()).
            timeout: Per-request timeout in seconds.
            user_token: Optional bearer token.
            log: Logger receiving request lifecycle records (defaults to this module's).
        """
        if timeout <= 0:
            raise ValueError("Timeout must be positive.")
        self.base_url = base_url.rstrip("/") + "/"
        self.transport = transport or RequestsTransport()
        self.retry_policy = retry_policy or RetryPolicy.default()
        self._timeout = float(timeout)
        self._user_token = user_token
        self.log = log or logger

        self.log.debug(
            f"ResilientClient initialized: base_url={self.base_url}, timeout={self._timeout}s, "
            f"retry_enabled={self.retry_policy.enabled}, max_attempts={self.retry_policy.max_attempts}"
        )

    # --- Configuration ---

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def user_token(self) -> Optional[str]:
        return self._user_token

    def set_user_token(self, token: Optional[str]) -> None:
        self._user_token = token
        self.log.debug(f"User token updated (has_token={token is not None})")

    def set_timeout(self, timeout: float) -> None:
        if timeout <= 0:
            raise ValueError("Timeout must be positive.")
        self._timeout = float(timeout)
        # Drop pooled connections so the next call is built with the new timeout
        self.transport.close()
        self.log.debug(f"Timeout updated: {self._timeout}s")

    def set_retry_policy(self, retry_policy: RetryPolicy) -> None:
        self.retry_policy = retry_policy
        self.log.debug(
            f"Retry policy updated: enabled={retry_policy.enabled}, max_attempts={retry_policy.max_attempts}"
        )

    def close(self) -> None:
        self.transport.close()

    # --- Requests ---

    def build_url(self, path: str) -> str:
        return self.base_url + path.lstrip("/")

    def build_headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._user_token is not None:
            headers["Authorization"] = f"Bearer {self._user_token}"
        return headers

    def get(self, path: str) -> Any:
        """Fetches ``path`` and returns the decoded JSON body.

        Raises:
            NetworkError: Connection failure or HTTP error that was not
                retryable or outlived the retry budget.
            ApiResponseError: 2xx response whose body is not valid JSON.
        """
        url = self.build_url(path)
        policy = self.retry_policy
        attempt = 0

        while True:
            self._emit(
                logging.DEBUG,
                f"Making API request: {path} (attempt {attempt + 1}/{policy.max_attempts + 1})",
                RequestStarted(path=path, attempt=attempt + 1, max_attempts=policy.max_attempts + 1),
            )
            start_time = time.perf_counter()
            try:
                response = self.transport.get(url, headers=self.build_headers(), timeout=self._timeout)
            except TransportError as e:
                if e.retryable and policy.should_retry(attempt):
                    self._schedule_retry(policy, path, attempt, reason="connection", detail=str(e))
                    attempt += 1
                    continue
                self._emit(
                    logging.ERROR,
                    f"Connection error for {path}, giving up after {attempt + 1} attempt(s): {e}",
                    RequestFailed(path=path, attempt=attempt + 1, error_type=type(e).__name__, error_message=str(e)),
                )
                raise NetworkError(str(e), path=path, attempts=attempt + 1) from e

            latency_ms = (time.perf_counter() - start_time) * 1000
            status = response.status_code

            if not 200 <= status < 300:
                if is_retryable_status(status) and policy.should_retry(attempt):
                    self._schedule_retry(policy, path, attempt, reason=f"http {status}", status_code=status)
                    attempt += 1
                    continue
                body = response.text
                message = f"API returned status code {status}: {body[:MAX_LOGGED_BODY_CHARS]}"
                self._emit(
                    logging.ERROR,
                    f"HTTP error for {path} after {attempt + 1} attempt(s): status {status}",
                    RequestFailed(
                        path=path,
                        attempt=attempt + 1,
                        error_type="HTTPStatus",
                        error_message=message,
                        status_code=status,
                    ),
                )
                raise NetworkError(message, path=path, attempts=attempt + 1, status_code=status, body=body)

            data = self._decode(path, response, attempt)
            self._emit(
                logging.INFO,
                f"API request successful: {path} (attempt {attempt + 1}, {latency_ms:.1f}ms)",
                RequestSucceeded(path=path, attempt=attempt + 1, status_code=status, latency_ms=latency_ms),
            )
            return data

    # --- Helpers ---

    def _decode(self, path: str, response: TransportResponse, attempt: int) -> Any:
        try:
            return json.loads(response.body)
        except (ValueError, UnicodeDecodeError) as e:
            message = f"Failed to decode JSON response: {e}"
            self._emit(
                logging.ERROR,
                f"{message} (path={path})",
                RequestFailed(
                    path=path,
                    attempt=attempt + 1,
                    error_type=type(e).__name__,
                    error_message=message,
                    status_code=response.status_code,
                ),
            )
            raise ApiResponseError(
                message, path=path, status_code=response.status_code, body=response.text
            ) from e

    def _schedule_retry(
        self,
        policy: RetryPolicy,
        path: str,
        attempt: int,
        reason: str,
        detail: str = "",
        status_code: Optional[int] = None,
    ) -> None:
        delay = policy.delay(attempt)
        self._emit(
            logging.WARNING,
            f"Retryable error ({reason}) for {path} on attempt {attempt + 1}, "
            f"retrying in {delay:.2f}s{': ' + detail if detail else ''}",
            RetryScheduled(
                path=path,
                attempt=attempt + 1,
                delay_seconds=delay,
                reason=reason,
                status_code=status_code,
            ),
        )
        if delay > 0:
            time.sleep(delay)

    def _emit(self, level: int, message: str, event: DomainEvent) -> None:
        self.log.log(level, message, extra={"bible_event": event})
