"""Tests for session orchestration."""

import io
import logging
from pathlib import Path

import pytest
from rich.console import Console

from feed_tracker.config import AppConfig
from feed_tracker.input.batch_parser import parse_batch_json
from feed_tracker.runner import add_subscription, load_state, run_session
from feed_tracker.storage.store import load_file, save_file


def _quiet_console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False)


def test_add_subscription_applies_config_defaults(tmp_path: Path):
    state_path = tmp_path / "subscriptions.msgpack"
    cfg = AppConfig()
    cfg.subscription.backlog_limit = 3
    cfg.subscription.use_title_as_filename = True

    sub = add_subscription(state_path, "http://feed.example/rss", "Example Cast", None, cfg)

    assert sub.directory == "fakedir"
    assert sub.backlog_limit == 3
    assert sub.use_title_as_filename is True
    assert load_file(state_path) == [sub]


def test_add_subscription_rejects_duplicates(tmp_path: Path):
    state_path = tmp_path / "subscriptions.msgpack"
    cfg = AppConfig()
    add_subscription(state_path, "http://feed.example/rss", "Example Cast", "/srv/a", cfg)

    with pytest.raises(ValueError, match="Already subscribed"):
        add_subscription(state_path, "http://feed.example/rss", "Again", None, cfg)

    assert len(load_file(state_path)) == 1


def test_load_state_missing_file_is_empty(tmp_path: Path):
    assert load_state(tmp_path / "nothing.msgpack") == []


def test_run_session_merges_and_persists(tmp_path: Path, sample_batch, caplog):
    state_path = tmp_path / "subscriptions.msgpack"
    cfg = AppConfig()
    cfg.subscription.backlog_limit = None
    add_subscription(state_path, "http://feed.example/rss", "Example Cast", None, cfg)
    add_subscription(state_path, "http://quiet.example/rss", "Quiet Cast", None, cfg)
    batch = parse_batch_json(sample_batch)

    with caplog.at_level(logging.INFO, logger="feed_tracker"):
        stats = run_session(state_path, batch, cfg, console=_quiet_console())

    assert stats.feeds == 2
    assert stats.merged == 1
    assert stats.new_items == 3
    assert stats.duplicates == 0
    assert stats.unknown_feeds == 1
    assert "No subscription for fetched feed http://stranger.example/rss" in caplog.text

    example, quiet = load_file(state_path)
    assert example.get_latest_entry_number() == 3
    assert example.get_latest_entry_name() == "Episode 3"
    assert [i.title for i in example.feed_state.queue] == ["Episode 1", "Episode 2", "Episode 3"]
    assert quiet.get_latest_entry_number() == 0


def test_second_session_rotates_summary_and_finds_nothing_new(tmp_path: Path, sample_batch):
    state_path = tmp_path / "subscriptions.msgpack"
    cfg = AppConfig()
    cfg.subscription.backlog_limit = None
    cfg.session.keep_history = 2
    add_subscription(state_path, "http://feed.example/rss", "Example Cast", None, cfg)
    batch = parse_batch_json(sample_batch)

    run_session(state_path, batch, cfg, console=_quiet_console())
    stats = run_session(state_path, batch, cfg, console=_quiet_console())

    assert stats.new_items == 0
    assert stats.duplicates == 3
    (sub,) = load_file(state_path)
    assert sub.get_latest_entry_number() == 3
    assert [(r.number, r.is_current_session) for r in sub.feed_state.summary_queue] == [
        (2, False),
        (3, False),
    ]


def test_run_session_matches_original_url_after_redirect(tmp_path: Path, sample_batch):
    state_path = tmp_path / "subscriptions.msgpack"
    cfg = AppConfig()
    cfg.state.retention = 2
    sub = add_subscription(state_path, "http://feed.example/rss", "Example Cast", None, cfg)
    subs = load_file(state_path)
    subs[0].update_url("https://cdn.feed.example/rss")
    save_file(state_path, subs)

    stats = run_session(state_path, parse_batch_json(sample_batch), cfg, console=_quiet_console())

    assert stats.merged == 1
    # Default backlog limit keeps only the newest item on first sync.
    assert stats.new_items == 1
    assert stats.backlog_skipped == 2
    (stored,) = load_file(state_path)
    assert stored.url == "https://cdn.feed.example/rss"
    assert stored.original_url == sub.original_url
    assert [e.title for e in stored.feed_state.entries] == ["Episode 3", "Episode 2"]
