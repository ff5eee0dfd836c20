"""Interface for the Bible API client consumed by the BibleService."""

import abc
from typing import Any, Optional


class BibleClient(abc.ABC):
    """Abstract Base Class for clients that fetch decoded JSON from the API."""

    @abc.abstractmethod
    def get(self, path: str) -> Any:
        """Fetches ``path`` relative to the API base URL and returns the decoded JSON.

        Raises:
            NetworkError: If the request cannot be completed.
            ApiResponseError: If the response body is not valid JSON.
        """
        pass

    @abc.abstractmethod
    def set_user_token(self, token: Optional[str]) -> None:
        """Sets (or clears, with None) the bearer token for later requests."""
        pass

    @abc.abstractmethod
    def set_timeout(self, timeout: float) -> None:
        """Sets the per-request timeout in seconds for later requests."""
        pass
