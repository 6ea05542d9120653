"""Resilience helpers: retry budget and backoff policy."""

from .retry import DEFAULT_RETRY_CONFIG, AttemptLogger, RetryConfig, max_attempts

__all__ = ["DEFAULT_RETRY_CONFIG", "AttemptLogger", "RetryConfig", "max_attempts"]
