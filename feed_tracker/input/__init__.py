"""Input parsers for fetched item batches."""

from .batch_parser import load_batch_file, parse_batch_json

__all__ = ["parse_batch_json", "load_batch_file"]
