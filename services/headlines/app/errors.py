"""Failure kinds raised by the headline feed client and decoder."""

from typing import Optional


class HeadlineFeedError(Exception):
    """Base class for every failure that ends a load attempt."""

    def describe(self) -> str:
        """Human-readable description suitable for an error view."""
        return str(self) or "Something went wrong while loading the news feed"


class TransportError(HeadlineFeedError):
    """The feed endpoint could not be reached."""

    def describe(self) -> str:
        return f"Could not reach the news feed: {self}"


class FeedTimeoutError(TransportError):
    """The feed request did not complete within the configured timeout."""

    def __init__(self, timeout: float):
        super().__init__(f"request timed out after {timeout:g}s")
        self.timeout = timeout


class FetchError(HeadlineFeedError):
    """The feed endpoint answered with a status other than 200."""

    def __init__(self, status_code: int, reason: Optional[str] = None):
        detail = f"HTTP {status_code}" + (f" {reason}" if reason else "")
        super().__init__(detail)
        self.status_code = status_code

    def describe(self) -> str:
        return f"News feed unavailable ({self})"


class MalformedFeedError(HeadlineFeedError):
    """The response body lacks the expected top-level structure."""

    def describe(self) -> str:
        return f"News feed is malformed: {self}"


class MalformedRecordError(HeadlineFeedError):
    """A single article record cannot be turned into an Article."""

    def __init__(self, index: int, reason: str):
        super().__init__(f"article #{index}: {reason}")
        self.index = index
        self.reason = reason

    def describe(self) -> str:
        return f"News feed contains an unreadable article ({self})"
