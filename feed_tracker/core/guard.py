"""
Single-owner access to a subscription shared between threads.

Subscription and FeedState do no locking of their own. A worker pool that
hands the same subscription to several threads wraps it in a
GuardedSubscription and does all reads and writes inside ``hold()``.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterable, Iterator

from .subscription import Subscription
from .types import Item, MergeResult


class GuardedSubscription:
    """A subscription paired with the lock that serialises access to it."""

    def __init__(self, subscription: Subscription):
        self._subscription = subscription
        self._lock = threading.Lock()

    @contextmanager
    def hold(self) -> Iterator[Subscription]:
        """Yield the subscription while holding its lock."""
        with self._lock:
            yield self._subscription

    def merge(self, items: Iterable[Item], *, retention: int | None = None) -> MergeResult:
        with self.hold() as subscription:
            return subscription.merge(items, retention=retention)

    def drain_queue(self) -> list[Item]:
        with self.hold() as subscription:
            return subscription.drain_queue()
