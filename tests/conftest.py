"""Shared test fixtures for feed_tracker tests."""

import json
import logging
from pathlib import Path

import pytest


SAMPLE_BATCH = {
    "fetchedAt": "2026-10-19T06:00:00Z",
    "feeds": [
        {
            "url": "http://feed.example/rss",
            "items": [
                {"title": "Episode 3", "urls": ["http://feed.example/3.mp3"]},
                {"title": "Episode 2", "urls": ["http://feed.example/2.mp3"]},
                {"title": "Episode 1", "urls": ["http://feed.example/1.mp3"]},
            ],
        },
        {
            "url": "http://stranger.example/rss",
            "items": [{"title": "Unrelated", "urls": ["http://stranger.example/u.mp3"]}],
        },
    ],
}


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging so later tests can capture records with caplog."""
    yield
    logger = logging.getLogger("feed_tracker")
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def sample_batch():
    """A fetched batch with one subscribed and one unknown feed."""
    return json.loads(json.dumps(SAMPLE_BATCH))


@pytest.fixture
def batch_file(tmp_path: Path, sample_batch) -> Path:
    path = tmp_path / "batch.json"
    path.write_text(json.dumps(sample_batch), encoding="utf-8")
    return path
