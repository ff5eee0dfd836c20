"""Retry decision policy with capped exponential backoff.

Pure and deterministic: no I/O, no clock, no randomness.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RetryPolicy:
    """Decides whether a failed attempt is retried and how long to wait first.

    Attributes:
        max_attempts: Number of retries allowed after the first attempt.
        initial_delay_s: Delay in seconds before the second retry.
        multiplier: Backoff multiplier applied per attempt.
        max_delay_s: Upper bound on any single delay, in seconds.
        enabled: When False, nothing is retried.
    """
    max_attempts: int = 3
    initial_delay_s: float = 0.1
    multiplier: float = 2.0
    max_delay_s: float = 5.0
    enabled: bool = True

    def __post_init__(self) -> None:
        if self.max_attempts < 0:
            raise ValueError("max_attempts must be non-negative.")
        if self.initial_delay_s < 0 or self.max_delay_s < 0:
            raise ValueError("Delays must be non-negative.")
        if self.multiplier < 1:
            raise ValueError("multiplier must be at least 1.")

    @classmethod
    def default(cls) -> "RetryPolicy":
        """3 retries, 100ms initial delay, x2 backoff, 5s cap."""
        return cls()

    @classmethod
    def aggressive(cls) -> "RetryPolicy":
        """5 retries, 50ms initial delay, x1.5 backoff, 3s cap."""
        return cls(max_attempts=5, initial_delay_s=0.05, multiplier=1.5, max_delay_s=3.0)

    @classmethod
    def disabled(cls) -> "RetryPolicy":
        return cls(max_attempts=0, enabled=False)

    def should_retry(self, attempt: int) -> bool:
        """Whether the request that just failed on ``attempt`` (0-based) is retried."""
        return self.enabled and attempt < self.max_attempts

    def delay(self, attempt: int) -> float:
        """Seconds to wait before retrying after ``attempt`` (0-based) failed.

        The first retry is immediate; later ones back off exponentially
        from ``initial_delay_s`` and never exceed ``max_delay_s``.
        """
        if not self.enabled or attempt <= 0:
            return 0.0
        try:
            backoff = self.initial_delay_s * (self.multiplier ** (attempt - 1))
        except OverflowError:
            return self.max_delay_s
        return min(backoff, self.max_delay_s)
