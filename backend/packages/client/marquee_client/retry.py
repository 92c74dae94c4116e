"""Retry policy for page fetches."""

from dataclasses import dataclass

from .errors import ApiError, is_network_error, is_server_error, is_timeout_error


@dataclass(frozen=True)
class RetryPolicy:
    """
    Bounded exponential backoff.

    Attributes:
        max_retries: Retries after the first attempt.
        base_delay: Delay in seconds before the first retry.
        max_delay: Upper bound for any single delay.
    """

    max_retries: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0

    def delay(self, attempt: int) -> float:
        """Seconds to wait before retry number ``attempt`` (0-based)."""
        return min(self.base_delay * 2**attempt, self.max_delay)

    def should_retry(self, error: BaseException, attempt: int) -> bool:
        if attempt >= self.max_retries or not isinstance(error, ApiError):
            return False
        # Other client errors will fail the same way again
        return (
            is_network_error(error)
            or is_timeout_error(error)
            or is_server_error(error)
            or error.status == 429
        )
