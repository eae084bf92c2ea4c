"""Adapters - I/O implementations of ports."""

from .json_store import JsonStore, StorageData

__all__ = [
    "JsonStore",
    "StorageData",
]
