"""Interface for the HTTP transport used by the API client.

A Transport performs exactly one GET per call. It does not retry, decode,
or interpret status codes; it reports connection-level failures (DNS,
refused connection, timeout) by raising TransportError.
"""

import abc
from dataclasses import dataclass, field
from typing import Dict, Mapping


@dataclass(frozen=True)
class TransportResponse:
    """Raw result of a single HTTP exchange."""
    status_code: int
    body: bytes
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class Transport(abc.ABC):
    """Abstract Base Class for HTTP transports."""

    @abc.abstractmethod
    def get(self, url: str, headers: Mapping[str, str], timeout: float) -> TransportResponse:
        """Performs one HTTP GET.

        Args:
            url: Absolute URL to request.
            headers: Request headers.
            timeout: Per-call timeout in seconds.

        Returns:
            The response, whatever its status code.

        Raises:
            TransportError: On connection failure or timeout.
        """
        pass

    def close(self) -> None:
        """Releases pooled connections. The next get() starts fresh."""
        pass
