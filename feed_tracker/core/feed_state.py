"""
Per-subscription feed state and the merge algorithm.

A FeedState remembers progress through one feed:
1. entries: items already seen, newest first
2. queue: items found new but not yet handled by the download stage
3. latest_entry_number: highest sequence number handed out so far
4. summary_queue: reporting lines for the current and earlier sessions

The state is not thread-safe. Callers sharing a subscription between threads
go through GuardedSubscription.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from .dedup import item_key, partition_items
from .types import Item, MergeResult, SessionSummaryRecord

logger = logging.getLogger(__name__)


@dataclass
class FeedState:
    """Mutable progress record for one subscription.

    Attributes:
        entries: Seen items, newest first
        queue: Items waiting for the download stage, oldest first
        latest_entry_number: Highest sequence number assigned; never decreases
        summary_queue: Session summary log, append-only within a session
    """
    entries: list[Item] = field(default_factory=list)
    queue: list[Item] = field(default_factory=list)
    latest_entry_number: int = 0
    summary_queue: list[SessionSummaryRecord] = field(default_factory=list)

    @property
    def is_fresh(self) -> bool:
        """True until the state has recorded its first item."""
        return not self.entries and self.latest_entry_number == 0

    def merge(
        self,
        new_items: Iterable[Item],
        backlog_limit: int | None = None,
        *,
        retention: int | None = None,
    ) -> MergeResult:
        """Fold a batch of observed items into the state.

        Items are expected in feed-native order, newest first. Already known
        items and repeats within the batch are skipped. New items cut by the
        backlog limit are remembered as seen but are not numbered or queued.

        Args:
            new_items: Items from the fetch/parse stage
            backlog_limit: None for no cap, L > 0 to keep the L most recent
                new items, 0 to keep only the newest item on a first sync
            retention: Optional maximum length of ``entries``

        Returns:
            MergeResult with new, duplicate and backlog counts
        """
        fresh, duplicates = partition_items(new_items, self.entries)
        cap = self._intake_cap(backlog_limit)
        if cap is not None and len(fresh) > cap:
            retained, backlog = fresh[:cap], fresh[cap:]
        else:
            retained, backlog = fresh, []

        # Number oldest to newest so the newest item gets the highest number.
        for item in reversed(retained):
            self.latest_entry_number += 1
            self.queue.append(item)
            self.summary_queue.append(
                SessionSummaryRecord(number=self.latest_entry_number, name=item.title)
            )

        self.entries[:0] = retained + backlog
        if retention is not None and len(self.entries) > retention:
            self._truncate_entries(retention, fresh + duplicates)

        result = MergeResult(
            new_count=len(retained),
            skipped_duplicate_count=len(duplicates),
            skipped_backlog_count=len(backlog),
        )
        logger.debug(
            "Merged %d new, %d duplicate, %d backlog items (latest number %d)",
            result.new_count,
            result.skipped_duplicate_count,
            result.skipped_backlog_count,
            self.latest_entry_number,
        )
        return result

    def _intake_cap(self, backlog_limit: int | None) -> int | None:
        if backlog_limit is None:
            return None
        if backlog_limit < 0:
            raise ValueError(f"backlog_limit must be >= 0, got {backlog_limit}")
        if backlog_limit == 0:
            # Skip the backlog on the first sync only; afterwards every new item counts.
            return 1 if self.is_fresh else None
        return backlog_limit

    def _truncate_entries(self, retention: int, batch: list[Item]) -> None:
        """Drop the oldest entries beyond ``retention``.

        Items present in the merged batch are kept regardless, otherwise the
        next fetch of the same feed window would find them new again.
        """
        in_batch = {item_key(item) for item in batch}
        kept = self.entries[:retention]
        kept.extend(item for item in self.entries[retention:] if item_key(item) in in_batch)
        self.entries = kept

    def drain_queue(self) -> list[Item]:
        """Return the pending items, oldest first, and clear the queue."""
        drained = self.queue
        self.queue = []
        return drained

    def begin_session(self, keep_history: int | None = None) -> None:
        """Mark a session boundary in the summary log.

        Records of the finished session are kept as history. When
        ``keep_history`` is set only that many of the most recent history
        records survive.
        """
        for record in self.summary_queue:
            record.is_current_session = False
        if keep_history is not None:
            if keep_history <= 0:
                self.summary_queue = []
            else:
                self.summary_queue = self.summary_queue[-keep_history:]

    def current_session_summary(self) -> list[SessionSummaryRecord]:
        return [record for record in self.summary_queue if record.is_current_session]

    def get_earliest_entry_name(self) -> str:
        if not self.entries:
            return ""
        return self.entries[-1].title

    def get_latest_entry_name(self) -> str:
        if not self.entries:
            return ""
        return self.entries[0].title

    def get_latest_entry_number(self) -> int:
        return self.latest_entry_number
