"""Tests for the feed-tracker command line."""

from pathlib import Path

from typer.testing import CliRunner

from feed_tracker.cli import app
from feed_tracker.storage.store import load_file

runner = CliRunner()


def test_add_merge_show(tmp_path: Path, batch_file: Path):
    state = tmp_path / "subscriptions.msgpack"

    added = runner.invoke(app, ["add", "http://feed.example/rss", "Example Cast", "--state", str(state)])
    assert added.exit_code == 0, added.output
    assert "Subscribed to Example Cast" in added.output

    merged = runner.invoke(app, ["merge", "--input", str(batch_file), "--state", str(state)])
    assert merged.exit_code == 0, merged.output
    assert "Session summary" in merged.output

    (sub,) = load_file(state)
    assert sub.get_latest_entry_name() == "Episode 3"
    assert sub.get_latest_entry_number() == 1

    shown = runner.invoke(app, ["show", "--state", str(state)])
    assert shown.exit_code == 0, shown.output
    assert "Example" in shown.output


def test_add_duplicate_exits_with_error(tmp_path: Path):
    state = tmp_path / "subscriptions.msgpack"
    runner.invoke(app, ["add", "http://feed.example/rss", "Example Cast", "--state", str(state)])

    result = runner.invoke(app, ["add", "http://feed.example/rss", "Again", "--state", str(state)])

    assert result.exit_code == 1
    assert "Already subscribed" in result.output


def test_show_corrupted_state_exits_with_error(tmp_path: Path):
    state = tmp_path / "subscriptions.msgpack"
    state.write_bytes(b"\xc1")

    result = runner.invoke(app, ["show", "--state", str(state)])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_config_file_sets_state_path(tmp_path: Path):
    state = tmp_path / "from-config.msgpack"
    config = tmp_path / "config.yaml"
    config.write_text(f"state:\n  path: {state}\nlogging:\n  console: false\n", encoding="utf-8")

    result = runner.invoke(app, ["add", "http://feed.example/rss", "Example Cast", "--config", str(config)])

    assert result.exit_code == 0, result.output
    assert state.exists()
