"""Adapters - I/O implementations of ports."""

from .file_store import JsonFileEntryStore, StorageParseError
from .gist_api import GistAdapter, RemoteError

__all__ = [
    "JsonFileEntryStore",
    "StorageParseError",
    "GistAdapter",
    "RemoteError",
]
