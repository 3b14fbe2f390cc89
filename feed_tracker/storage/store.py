"""
File-backed persistence for subscription collections.

Reads are whole-file; writes go to a temporary file in the target directory
and are moved into place, so a crash mid-write leaves the previous state
file intact.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable

from ..core.subscription import Subscription
from ..errors import FileIOError
from .codec import decode_many, encode_many

logger = logging.getLogger(__name__)


def load_file(path: str | Path) -> list[Subscription]:
    """Load every subscription stored in a state file.

    Args:
        path: Path to a file written by ``save_file`` or the legacy format

    Returns:
        Subscriptions in stored order

    Raises:
        FileIOError: If the file cannot be opened or read
        DecodeError: If the contents are not a subscription collection
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as exc:
        raise FileIOError(str(path), f"couldn't read: {exc.strerror or exc}") from exc

    subs = decode_many(data)
    logger.debug("Loaded %d subscriptions from %s", len(subs), path)
    return subs


def save_file(path: str | Path, subs: Iterable[Subscription]) -> Path:
    """Atomically write subscriptions to a state file.

    Args:
        path: Destination path; missing parent directories are created
        subs: Subscriptions to store, in order

    Returns:
        The path written

    Raises:
        EncodeError: If the subscriptions cannot be encoded
        FileIOError: If the file cannot be written
    """
    path = Path(path)
    data = encode_many(subs)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as exc:
        raise FileIOError(str(path), f"couldn't write: {exc.strerror or exc}") from exc

    logger.debug("Saved %d bytes of subscription state to %s", len(data), path)
    return path
