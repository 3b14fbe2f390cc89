"""Error types raised by feed_tracker.

Every failure in encoding, decoding or reading persisted state is raised to
the caller as one of these, so a manager handling many subscriptions can
skip a corrupted file instead of stopping.
"""

from __future__ import annotations


class FeedTrackerError(Exception):
    """Base class for all feed_tracker errors."""


class EncodeError(FeedTrackerError):
    """Raised when subscription state cannot be serialized."""


class DecodeError(FeedTrackerError):
    """Raised when bytes do not decode into subscription state."""


class FileIOError(FeedTrackerError):
    """Raised when a state file cannot be opened, read or written."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
