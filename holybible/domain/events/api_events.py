"""Domain Events related to API requests and retries.

Attached to log records (as the ``bible_event`` attribute) so structured
log sinks can consume request lifecycle data without parsing messages.
"""

from dataclasses import dataclass, field
import time
from typing import Optional


@dataclass
class DomainEvent:
    """Base class for domain events."""
    pass


@dataclass
class RequestStarted(DomainEvent):
    """Event triggered when an HTTP attempt is about to be made."""
    path: str
    attempt: int  # 1-based
    max_attempts: int
    timestamp: float = field(default_factory=time.time)


@dataclass
class RetryScheduled(DomainEvent):
    """Event triggered when a retryable failure will be retried."""
    path: str
    attempt: int
    delay_seconds: float
    reason: str  # e.g. 'connection' or 'http 503'
    status_code: Optional[int] = None
    timestamp: float = field(default_factory=time.time)


@dataclass
class RequestSucceeded(DomainEvent):
    """Event triggered when a request returns a decoded body."""
    path: str
    attempt: int
    status_code: int
    latency_ms: float
    timestamp: float = field(default_factory=time.time)


@dataclass
class RequestFailed(DomainEvent):
    """Event triggered when a request fails definitively."""
    path: str
    attempt: int
    error_type: str
    error_message: str
    status_code: Optional[int] = None
    timestamp: float = field(default_factory=time.time)
