"""Entry storage interface."""

from typing import Protocol

from lifelog.core.entries import Entry


class EntryStore(Protocol):
    """Interface for reading and rewriting the local entry document."""

    def load(self) -> list[Entry]:
        """Read every entry."""
        ...

    def save(self, entries: list[Entry]) -> None:
        """Overwrite the document with the given entries."""
        ...

    def append(self, content: str, timestamp: str | None = None) -> Entry:
        """Add one entry and persist it."""
        ...

    def remove_by_timestamp(self, timestamp: str) -> int:
        """Remove entries with this timestamp. Returns how many were removed."""
        ...

    def remove_all_for_day(self, key: str) -> int:
        """Remove every entry of a day. Returns how many were removed."""
        ...

    def remove_last(self) -> Entry | None:
        """Remove the newest entry, if any."""
        ...
