"""API Resilience Implementations.

Contains the retry policy (exponential backoff with a cap) and the
resilient HTTP client that applies it.
Bounded Context: API Resilience
"""
