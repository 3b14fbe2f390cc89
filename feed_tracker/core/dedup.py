"""
Item identity and deduplication for incoming feed batches.

An item is identified by its title together with the set of its URLs, so
the same entry is recognised even when a feed reorders its enclosures.
Titles alone are not unique: feeds reuse titles across fetches.
"""

from __future__ import annotations

from typing import Hashable, Iterable

from .types import Item


def item_key(item: Item) -> Hashable:
    """Return the identity key of an item.

    Args:
        item: The item to identify

    Returns:
        A hashable (title, frozenset of urls) pair
    """
    return (item.title, frozenset(item.urls))


def partition_items(
    items: Iterable[Item], known: Iterable[Item]
) -> tuple[list[Item], list[Item]]:
    """Split a batch into new items and duplicates.

    Duplicates are items matching one of ``known`` and items repeating an
    earlier item of the same batch. Both output lists keep the relative
    order of the input.

    Args:
        items: Incoming items in feed-native order
        known: Items already recorded for the feed

    Returns:
        Tuple of (new items, duplicate items)

    Raises:
        TypeError: If the batch contains something other than an Item
    """
    seen: set[Hashable] = {item_key(item) for item in known}
    new: list[Item] = []
    duplicates: list[Item] = []

    for item in items:
        if not isinstance(item, Item):
            raise TypeError(f"Expected Item, got {type(item).__name__}")
        key = item_key(item)
        if key in seen:
            duplicates.append(item)
            continue
        seen.add(key)
        new.append(item)

    return new, duplicates
