"""
Feed Tracker - subscription state for periodically fetched feeds.

This package remembers, per subscribed feed, which items were already seen,
which still wait for download, and how that survives restarts through a
MessagePack state file.

Main entry point is the CLI via the `feed-tracker` command.

Example:
    $ feed-tracker add http://feed.example/rss "Example Cast"
    $ feed-tracker merge -i batch.json
"""

__all__ = [
    "__version__",
    "Item",
    "SessionSummaryRecord",
    "MergeResult",
    "FeedState",
    "Subscription",
    "GuardedSubscription",
    "encode_one",
    "encode_many",
    "decode_one",
    "decode_many",
    "load_file",
    "save_file",
    "FeedTrackerError",
    "EncodeError",
    "DecodeError",
    "FileIOError",
]
__version__ = "0.1.0"

from .core import FeedState, GuardedSubscription, Item, MergeResult, SessionSummaryRecord, Subscription
from .errors import DecodeError, EncodeError, FeedTrackerError, FileIOError
from .storage import decode_many, decode_one, encode_many, encode_one, load_file, save_file
