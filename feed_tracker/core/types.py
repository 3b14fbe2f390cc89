"""
Core data types for feed subscription state.

This module defines the records stored in a subscription's feed state:
- Item: One feed entry as observed by the fetch/parse stage
- SessionSummaryRecord: How one item was reported during a session
- MergeResult: Counts reported back by a merge
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True, init=False)
class Item:
    """Represents a single feed entry.

    Two items are equal only if the title and the full URL sequence match
    exactly, in order.

    Attributes:
        title: The entry title, possibly empty
        urls: Source locations (enclosures, links) in feed order
    """
    title: str
    urls: tuple[str, ...]

    def __init__(self, title: str, urls: Iterable[str] = ()):
        if title is None:
            raise TypeError("Item title must be a string, not None")
        if isinstance(urls, str):
            urls = (urls,)
        object.__setattr__(self, "title", title)
        object.__setattr__(self, "urls", tuple(urls))


@dataclass
class SessionSummaryRecord:
    """One reporting line for an item handled during a session.

    Attributes:
        number: Sequence number assigned to the item by its feed state
        name: Display name, normally the item title
        is_current_session: True for items handled in the running session,
            False for records carried over from earlier sessions
    """
    number: int
    name: str
    is_current_session: bool = True


@dataclass(frozen=True)
class MergeResult:
    """Outcome of folding a batch of items into a feed state.

    Attributes:
        new_count: Items numbered, queued and recorded
        skipped_duplicate_count: Items already known or repeated in the batch
        skipped_backlog_count: New items left out by the backlog limit
    """
    new_count: int = 0
    skipped_duplicate_count: int = 0
    skipped_backlog_count: int = 0

    @property
    def total(self) -> int:
        return self.new_count + self.skipped_duplicate_count + self.skipped_backlog_count
