"""
Session orchestration for feed subscription state.

One session runs the fetch-merge-persist cycle for every subscription:
1. Load the state file
2. Start a new session on each subscription (rotate the summary log)
3. Merge each feed's fetched batch into its subscription
4. Save the state file atomically
5. Report per-feed and total counts
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console

from .config import AppConfig
from .core.subscription import Subscription
from .core.types import Item
from .logging_utils import log_event
from .storage.store import load_file, save_file

logger = logging.getLogger(__name__)


@dataclass
class SessionStats:
    """Statistics collected during one session.

    Attributes:
        feeds: Subscriptions in the state file
        merged: Subscriptions that received a batch
        new_items: Items numbered and queued across all feeds
        duplicates: Items skipped as already known
        backlog_skipped: New items left out by backlog limits
        unknown_feeds: Batch feeds matching no subscription
    """
    feeds: int = 0
    merged: int = 0
    new_items: int = 0
    duplicates: int = 0
    backlog_skipped: int = 0
    unknown_feeds: int = 0


def load_state(state_path: Path) -> list[Subscription]:
    """Load the state file, treating a missing file as no subscriptions."""
    if not state_path.exists():
        log_event(
            logger,
            "State file missing; starting empty",
            event="state_missing",
            path=str(state_path),
        )
        return []
    return load_file(state_path)


def add_subscription(
    state_path: Path,
    url: str,
    name: str,
    directory: str | None,
    cfg: AppConfig,
) -> Subscription:
    """Add a subscription with configured defaults and persist it.

    Raises:
        ValueError: If a subscription with the same url already exists
    """
    subs = load_state(state_path)
    if any(sub.url == url or sub.original_url == url for sub in subs):
        raise ValueError(f"Already subscribed to {url}")

    sub = Subscription.new(url, name, directory or cfg.subscription.default_directory)
    sub.backlog_limit = cfg.subscription.backlog_limit
    sub.use_title_as_filename = cfg.subscription.use_title_as_filename
    subs.append(sub)

    save_file(state_path, subs)
    log_event(logger, "Subscription added", event="subscription_added", url=url, feed_name=name)
    return sub


def run_session(
    state_path: Path,
    batch: dict[str, list[Item]],
    cfg: AppConfig,
    console: Console | None = None,
) -> SessionStats:
    """Run one fetch-merge-persist session.

    Args:
        state_path: Path to the subscription state file
        batch: Fetched items keyed by feed url, in feed-native order
        cfg: Application configuration
        console: Rich console for the summary line (creates default if None)

    Returns:
        SessionStats for the session
    """
    subs = load_state(state_path)
    stats = SessionStats(feeds=len(subs))
    log_event(
        logger,
        "Session start",
        event="session_start",
        path=str(state_path),
        feeds=len(subs),
        batch_feeds=len(batch),
    )

    matched: set[str] = set()
    for sub in subs:
        sub.begin_session(cfg.session.keep_history)

        key = _batch_key(sub, batch)
        if key is None:
            continue
        matched.add(key)

        result = sub.merge(batch[key], retention=cfg.state.retention)
        stats.merged += 1
        stats.new_items += result.new_count
        stats.duplicates += result.skipped_duplicate_count
        stats.backlog_skipped += result.skipped_backlog_count
        log_event(
            logger,
            f"Feed '{sub.name}': {result.new_count} new items",
            event="feed_merged",
            url=sub.url,
            new=result.new_count,
            duplicates=result.skipped_duplicate_count,
            backlog_skipped=result.skipped_backlog_count,
            latest_entry_number=sub.get_latest_entry_number(),
        )

    for url in batch:
        if url in matched:
            continue
        stats.unknown_feeds += 1
        log_event(
            logger,
            f"No subscription for fetched feed {url}",
            level=logging.WARNING,
            event="feed_unknown",
            url=url,
        )

    save_file(state_path, subs)
    log_event(logger, "Session complete", event="session_complete", **vars(stats))
    _render_session_stats(stats, console or Console())
    return stats


def _batch_key(sub: Subscription, batch: dict[str, list[Item]]) -> str | None:
    """Find the batch entry for a subscription by current, then original url."""
    if sub.url in batch:
        return sub.url
    if sub.original_url in batch:
        return sub.original_url
    return None


def _render_session_stats(stats: SessionStats, console: Console) -> None:
    console.print(
        "[bold]Session summary[/bold]: "
        f"feeds={stats.feeds}, merged={stats.merged}, new={stats.new_items}, "
        f"duplicates={stats.duplicates}, backlog_skipped={stats.backlog_skipped}, "
        f"unknown_feeds={stats.unknown_feeds}"
    )
