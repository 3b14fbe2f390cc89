"""
Core domain models and business logic.

This package contains the subscription state model and the merge
algorithm, independent of how state is stored or where items come from.
"""

from .types import Item, MergeResult, SessionSummaryRecord
from .dedup import item_key, partition_items
from .feed_state import FeedState
from .subscription import DEFAULT_DIRECTORY, Subscription
from .guard import GuardedSubscription

__all__ = [
    "Item",
    "MergeResult",
    "SessionSummaryRecord",
    "item_key",
    "partition_items",
    "FeedState",
    "DEFAULT_DIRECTORY",
    "Subscription",
    "GuardedSubscription",
]
