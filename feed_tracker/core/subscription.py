"""
Subscription records.

A Subscription ties a feed's identity (where it lives, what it is called,
where its files go) to the FeedState that remembers progress through it.
The feed state belongs to exactly one subscription; callers change it only
through the subscription's methods.
"""

from __future__ import annotations

import pprint
from dataclasses import asdict, dataclass, field
from typing import Iterable

from .feed_state import FeedState
from .types import Item, MergeResult

# Stand-in until the directory resolution step assigns a real path.
DEFAULT_DIRECTORY = "fakedir"


@dataclass
class Subscription:
    """A subscribed feed and its tracked state.

    Attributes:
        url: Current feed location; may change when a redirect is followed
        original_url: Location the subscription was created with
        name: Display name of the feed
        directory: Storage location for downloaded files
        backlog_limit: Intake cap passed to merges (0 skips the backlog on
            first sync, None means unlimited)
        use_title_as_filename: Whether downloads are named after item titles
        feed_state: Progress through the feed
    """
    url: str
    original_url: str
    name: str
    directory: str
    backlog_limit: int | None = 0
    use_title_as_filename: bool | None = False
    feed_state: FeedState = field(default_factory=FeedState)

    @classmethod
    def new(cls, url: str, name: str, directory: str | None = None) -> Subscription:
        """Create a subscription with an empty feed state and default policy."""
        return cls(
            url=url,
            original_url=url,
            name=name,
            directory=process_directory(directory),
        )

    def merge(self, items: Iterable[Item], *, retention: int | None = None) -> MergeResult:
        """Merge newly observed items using this subscription's backlog limit."""
        return self.feed_state.merge(items, self.backlog_limit, retention=retention)

    def drain_queue(self) -> list[Item]:
        return self.feed_state.drain_queue()

    def begin_session(self, keep_history: int | None = None) -> None:
        self.feed_state.begin_session(keep_history)

    def update_url(self, new_url: str) -> None:
        """Point the subscription at a new location, keeping the original."""
        self.url = new_url

    def get_latest_entry_number(self) -> int:
        return self.feed_state.get_latest_entry_number()

    def get_earliest_entry_name(self) -> str:
        return self.feed_state.get_earliest_entry_name()

    def get_latest_entry_name(self) -> str:
        return self.feed_state.get_latest_entry_name()

    def __str__(self) -> str:
        return f"{type(self).__name__}\n{pprint.pformat(asdict(self), sort_dicts=False)}"


def process_directory(directory: str | None) -> str:
    """Return the given directory or the placeholder when none is given."""
    if directory is None:
        return DEFAULT_DIRECTORY
    return directory
