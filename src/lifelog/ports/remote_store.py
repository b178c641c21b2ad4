"""Remote document store interface."""

from typing import Protocol

from lifelog.core.entries import Entry


class RemoteStore(Protocol):
    """Interface for mirroring entries to a remote document."""

    def create_remote(self, token: str, entries: list[Entry]) -> str:
        """Create the remote document. Returns its id."""
        ...

    def fetch_remote(self, token: str, remote_id: str) -> list[Entry] | None:
        """Fetch entries. Returns None if the document holds no entry file."""
        ...

    def update_remote(self, token: str, remote_id: str, entries: list[Entry]) -> None:
        """Replace the remote entries."""
        ...

    def is_online(self) -> bool:
        """Cheap reachability check."""
        ...
