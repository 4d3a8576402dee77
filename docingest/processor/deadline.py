import time

from docingest.processor.exceptions import ProcessingTimeoutError


class Deadline:
    """Wall-clock budget for a single pipeline call.

    A deadline created without a timeout never expires, so callers can pass
    one around unconditionally.
    """

    def __init__(self, timeout_seconds: float | None = None) -> None:
        self._timeout_seconds = timeout_seconds
        self._expires_at = (
            time.monotonic() + timeout_seconds if timeout_seconds is not None else None
        )

    @classmethod
    def none(cls) -> "Deadline":
        return cls(None)

    @property
    def timeout_seconds(self) -> float | None:
        return self._timeout_seconds

    def remaining(self) -> float | None:
        """Seconds left, clamped at zero, or None for an unbounded deadline."""
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - time.monotonic())

    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0.0

    def check(self, operation: str) -> None:
        """Raise ProcessingTimeoutError if the budget is spent."""
        if self.expired():
            raise ProcessingTimeoutError(
                f"{operation} exceeded the processing timeout of "
                f"{self._timeout_seconds}s"
            )
