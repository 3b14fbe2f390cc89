"""JSON parser for fetched item batches.

The fetch/parse stage writes one batch file per run, listing the items it
observed for each feed in feed-native order (newest first):

    {
        "fetchedAt": "2026-10-19T06:00:00Z",
        "feeds": [
            {
                "url": "http://feed.example/rss",
                "items": [
                    {"title": "Episode 2", "urls": ["http://feed.example/ep2.mp3"]},
                    {"title": "Episode 1", "url": "http://feed.example/ep1.mp3"}
                ]
            }
        ]
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ..core.types import Item

logger = logging.getLogger(__name__)


def parse_batch_json(data: dict[str, Any]) -> dict[str, list[Item]]:
    """Parse a batch document into items keyed by feed URL.

    Args:
        data: The parsed JSON content as a dictionary

    Returns:
        Mapping of feed URL to its items in feed order. Feeds listed more
        than once have their items concatenated in file order. Feeds
        without a url and items without a title are skipped with a warning.

    Raises:
        ValueError: If the JSON is missing the 'feeds' key
    """
    if "feeds" not in data:
        raise ValueError("Invalid batch format: missing 'feeds' key")

    batch: dict[str, list[Item]] = {}

    for position, feed in enumerate(data["feeds"]):
        url = feed.get("url")
        if not url:
            logger.warning("Skipping feed #%d: missing url", position)
            continue

        items = batch.setdefault(url, [])
        for raw in feed.get("items") or []:
            item = _parse_item(raw)
            if item is None:
                logger.warning("Skipping item in %s: missing title", url)
                continue
            items.append(item)

    return batch


def load_batch_file(path: Path) -> dict[str, list[Item]]:
    """Read and parse a batch file."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return parse_batch_json(data)


def _parse_item(raw: dict[str, Any]) -> Item | None:
    """Build an Item from one raw entry.

    An empty title is kept (feeds do publish untitled entries); a missing
    one is not. ``urls`` may be given as a list or as a single ``url``.
    """
    title = raw.get("title")
    if title is None:
        return None

    urls = raw.get("urls")
    if urls is None:
        single = raw.get("url")
        urls = [single] if single else []
    elif isinstance(urls, str):
        urls = [urls]

    return Item(str(title), [str(url) for url in urls if url])
