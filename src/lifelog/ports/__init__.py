"""Ports - interfaces/protocols for external dependencies."""

from .entry_store import EntryStore
from .remote_store import RemoteStore

__all__ = [
    "EntryStore",
    "RemoteStore",
]
