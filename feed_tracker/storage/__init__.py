"""
Persistence of subscription state.

This package contains the MessagePack codec and the file-backed store.
"""

from .codec import FORMAT_VERSION, decode_many, decode_one, encode_many, encode_one
from .store import load_file, save_file

__all__ = [
    "FORMAT_VERSION",
    "encode_one",
    "encode_many",
    "decode_one",
    "decode_many",
    "load_file",
    "save_file",
]
