"""
Binary encoding of subscriptions using MessagePack.

Records are packed as arrays in a fixed field order, not as maps:

    subscription = [url, original_url, name, directory,
                    backlog_limit, use_title_as_filename, feed_state]
    feed_state   = [entries, queue, latest_entry_number, summary_queue]
    item         = [title, [url, ...]]
    summary      = [is_current_session, number, name]

A collection written by ``encode_many`` is wrapped in a versioned envelope
``[FORMAT_VERSION, [subscription, ...]]``. ``decode_many`` also reads the
older bare array of subscriptions, which carries no version tag.
"""

from __future__ import annotations

from typing import Any, Iterable

import msgpack

from ..core.feed_state import FeedState
from ..core.subscription import Subscription
from ..core.types import Item, SessionSummaryRecord
from ..errors import DecodeError, EncodeError

FORMAT_VERSION = 1

_UINT64_MAX = 2**64 - 1


def encode_one(sub: Subscription) -> bytes:
    """Encode a single subscription record.

    Raises:
        EncodeError: If the subscription holds values MessagePack cannot carry
    """
    return _pack(_subscription_to_wire(sub))


def encode_many(subs: Iterable[Subscription]) -> bytes:
    """Encode a collection of subscriptions inside a versioned envelope.

    Raises:
        EncodeError: If any subscription holds values MessagePack cannot carry
    """
    return _pack([FORMAT_VERSION, [_subscription_to_wire(sub) for sub in subs]])


def decode_one(data: bytes) -> Subscription | None:
    """Decode a single subscription record.

    Empty input is what a failed encode leaves behind and decodes to None.

    Raises:
        DecodeError: If the bytes are malformed or do not match the schema
    """
    if not data:
        return None
    return _subscription_from_wire(_unpack(data))


def decode_many(data: bytes) -> list[Subscription]:
    """Decode a collection of subscriptions.

    Accepts both the versioned envelope and the legacy bare array.

    Raises:
        DecodeError: If the input is empty, malformed, of an unknown version
            or does not match the schema
    """
    if not data:
        raise DecodeError("Empty input is not a subscription collection")
    obj = _unpack(data)
    if not isinstance(obj, list):
        raise DecodeError(f"Expected an array at top level, got {type(obj).__name__}")

    if obj and _is_uint(obj[0]):
        if len(obj) != 2:
            raise DecodeError("Versioned envelope must hold exactly [version, records]")
        version, records = obj
        if version != FORMAT_VERSION:
            raise DecodeError(f"Unsupported format version {version}")
    else:
        records = obj

    if not isinstance(records, list):
        raise DecodeError("Expected an array of subscription records")
    return [_subscription_from_wire(record) for record in records]


def _pack(obj: Any) -> bytes:
    try:
        return msgpack.packb(obj, use_bin_type=True)
    except (TypeError, ValueError, OverflowError) as exc:
        raise EncodeError(f"Could not encode subscription state: {exc}") from exc


def _unpack(data: bytes) -> Any:
    try:
        return msgpack.unpackb(data, raw=False)
    except (ValueError, TypeError, msgpack.exceptions.UnpackException) as exc:
        raise DecodeError(f"Malformed subscription data: {exc}") from exc


def _subscription_to_wire(sub: Subscription) -> list[Any]:
    state = sub.feed_state
    return [
        sub.url,
        sub.original_url,
        sub.name,
        sub.directory,
        sub.backlog_limit,
        sub.use_title_as_filename,
        [
            [_item_to_wire(item) for item in state.entries],
            [_item_to_wire(item) for item in state.queue],
            state.latest_entry_number,
            [
                [record.is_current_session, record.number, record.name]
                for record in state.summary_queue
            ],
        ],
    ]


def _item_to_wire(item: Item) -> list[Any]:
    return [item.title, list(item.urls)]


def _subscription_from_wire(obj: Any) -> Subscription:
    fields = _expect_array(obj, 7, "subscription")
    url, original_url, name, directory, backlog_limit, use_title, state = fields

    for label, value in (
        ("url", url),
        ("original_url", original_url),
        ("name", name),
        ("directory", directory),
    ):
        _expect_str(value, label)
    if backlog_limit is not None and not _is_uint(backlog_limit):
        raise DecodeError(f"backlog_limit must be an unsigned integer or nil, got {backlog_limit!r}")
    if use_title is not None and not isinstance(use_title, bool):
        raise DecodeError(
            f"use_title_as_filename must be a boolean or nil, got {use_title!r}"
        )

    return Subscription(
        url=url,
        original_url=original_url,
        name=name,
        directory=directory,
        backlog_limit=backlog_limit,
        use_title_as_filename=use_title,
        feed_state=_feed_state_from_wire(state),
    )


def _feed_state_from_wire(obj: Any) -> FeedState:
    entries, queue, latest, summary = _expect_array(obj, 4, "feed_state")
    if not _is_uint(latest):
        raise DecodeError(f"latest_entry_number must be an unsigned integer, got {latest!r}")
    return FeedState(
        entries=[_item_from_wire(item) for item in _expect_list(entries, "entries")],
        queue=[_item_from_wire(item) for item in _expect_list(queue, "queue")],
        latest_entry_number=latest,
        summary_queue=[
            _summary_from_wire(record) for record in _expect_list(summary, "summary_queue")
        ],
    )


def _item_from_wire(obj: Any) -> Item:
    title, urls = _expect_array(obj, 2, "item")
    _expect_str(title, "item title")
    for url in _expect_list(urls, "item urls"):
        _expect_str(url, "item url")
    return Item(title, urls)


def _summary_from_wire(obj: Any) -> SessionSummaryRecord:
    is_current, number, name = _expect_array(obj, 3, "summary record")
    if not isinstance(is_current, bool):
        raise DecodeError(f"is_current_session must be a boolean, got {is_current!r}")
    if not _is_uint(number):
        raise DecodeError(f"summary number must be an unsigned integer, got {number!r}")
    _expect_str(name, "summary name")
    return SessionSummaryRecord(number=number, name=name, is_current_session=is_current)


def _expect_array(obj: Any, length: int, label: str) -> list[Any]:
    if not isinstance(obj, list) or len(obj) != length:
        raise DecodeError(f"Expected {label} as an array of {length} fields")
    return obj


def _expect_list(obj: Any, label: str) -> list[Any]:
    if not isinstance(obj, list):
        raise DecodeError(f"Expected {label} as an array")
    return obj


def _expect_str(value: Any, label: str) -> None:
    if not isinstance(value, str):
        raise DecodeError(f"{label} must be a string, got {type(value).__name__}")


def _is_uint(value: Any) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 <= value <= _UINT64_MAX
    )
