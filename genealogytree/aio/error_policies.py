"""
Error handling policies for tree fetches.

A policy decides what happens when a gateway fetch raises: give up
straight away, retry with backoff, or record the error before giving
up. Giving up always means raising FetchFailure, which the session
turns into an error state with a retry affordance.
"""

import asyncio
import sys
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..exceptions import FetchFailure
from ..navigation import FetchKey


def as_fetch_failure(error: Exception, key: FetchKey) -> FetchFailure:
    """Wrap any exception as a FetchFailure for key (FetchFailure passes through)."""
    if isinstance(error, FetchFailure):
        return error
    return FetchFailure(key, f"{type(error).__name__}: {error}", cause=error)


def give_up(error: Exception, key: FetchKey) -> None:
    """Raise error as a FetchFailure, chaining the original cause."""
    if isinstance(error, FetchFailure):
        raise error
    raise as_fetch_failure(error, key) from error


class ErrorPolicy(ABC):
    """
    Base class for fetch error policies.
    """

    @abstractmethod
    async def handle(self, error: Exception, key: FetchKey, attempt: int) -> bool:
        """
        Handle an error raised while fetching key.

        Args:
            error: The exception that was raised
            key: FetchKey being fetched
            attempt: Zero-based number of the attempt that failed

        Returns:
            True to retry the fetch

        Raises:
            FetchFailure: To stop and report the failure
        """
        pass

    def _record(self, error: Exception, key: FetchKey, attempt: int) -> Dict[str, Any]:
        return {
            'key': key,
            'attempt': attempt,
            'error': error,
            'error_type': type(error).__name__,
            'error_message': str(error),
        }


class FailFastPolicy(ErrorPolicy):
    """
    Policy that immediately reports any error.

    This is the default behavior.
    """

    async def handle(self, error: Exception, key: FetchKey, attempt: int) -> bool:
        give_up(error, key)


class RetryPolicy(ErrorPolicy):
    """
    Policy that retries failed fetches with exponential backoff.

    The delay before retry n (zero-based) is base_delay * backoff_factor**n.
    """

    def __init__(
        self,
        max_retries: int = 2,
        backoff_factor: float = 2.0,
        base_delay: float = 0.5,
        verbose: bool = False
    ):
        """
        Initialize retry policy.

        Args:
            max_retries: Retries after the first attempt
            backoff_factor: Multiplier for exponential backoff
            base_delay: Delay in seconds before the first retry
            verbose: If True, print a warning to stderr on every retry
        """
        self.max_retries = max_retries
        self.backoff_factor = backoff_factor
        self.base_delay = base_delay
        self.verbose = verbose
        self.retry_counts: Dict[FetchKey, int] = {}

    def delay_for(self, attempt: int) -> float:
        return self.base_delay * (self.backoff_factor ** attempt)

    async def handle(self, error: Exception, key: FetchKey, attempt: int) -> bool:
        if attempt >= self.max_retries:
            give_up(error, key)

        self.retry_counts[key] = self.retry_counts.get(key, 0) + 1
        delay = self.delay_for(attempt)
        if self.verbose:
            print(f"\nWARNING: Fetch of {key} failed ({error}); "
                  f"retry {attempt + 1}/{self.max_retries} in {delay:.2f}s",
                  file=sys.stderr)
        await asyncio.sleep(delay)
        return True


class CollectErrorsPolicy(ErrorPolicy):
    """
    Policy that records every error before reporting it.

    Useful for showing a history of failures or for tests.
    """

    def __init__(self, verbose: bool = False):
        """
        Initialize the policy.

        Args:
            verbose: If True, print warnings to stderr when errors occur
        """
        self.errors: List[Dict[str, Any]] = []
        self.verbose = verbose

    async def handle(self, error: Exception, key: FetchKey, attempt: int) -> bool:
        self.errors.append(self._record(error, key, attempt))
        if self.verbose:
            print(f"\nWARNING: Error fetching {key}: {error}", file=sys.stderr)
        give_up(error, key)

    def get_statistics(self) -> dict:
        """
        Get statistics about errors encountered.
        """
        return {
            'total_errors': len(self.errors),
            'fetch_failures': sum(1 for e in self.errors if e['error_type'] == 'FetchFailure'),
            'malformed_payloads': sum(1 for e in self.errors
                                      if e['error_type'] == 'MalformedPayload'),
            'errors': self.errors
        }
