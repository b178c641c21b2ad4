"""Shared workflow layer between CLI and dashboard.

Each function ties the local store to the sync coordinator so both surfaces
log and sync entries the same way.
"""

from datetime import datetime, timezone

from .adapters.file_store import JsonFileEntryStore
from .config import storage_file
from .core.entries import Entry, now_timestamp
from .ports import EntryStore
from .sync import SyncCoordinator


def get_store() -> JsonFileEntryStore:
    """Resolve the storage document for the current user."""
    return JsonFileEntryStore(storage_file())


def timestamp_for(value: str | None) -> str | None:
    """Timestamp for a custom ``--date`` value; plain dates mean UTC midnight."""
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return now_timestamp(parsed)


def log_entry(
    store: EntryStore,
    coordinator: SyncCoordinator,
    content: str,
    timestamp: str | None = None,
) -> Entry:
    """Append an entry, then push to the gist in the background if configured."""
    entry = store.append(content, timestamp)
    if coordinator.is_configured():
        coordinator.sync_in_background(store.load())
    return entry


def sync_store(store: EntryStore, coordinator: SyncCoordinator) -> list[Entry]:
    """Full sync with the gist and keep the merged result locally."""
    local = store.load()
    merged = coordinator.perform_full_sync(local)
    if merged is not local:
        store.save(merged)
    return merged


def setup_gist(
    store: EntryStore,
    coordinator: SyncCoordinator,
    token: str,
) -> tuple[list[Entry], str, bool]:
    """
    Connect the store to a gist.

    Returns the resulting entries, the gist id, and whether local entries
    were replaced by what the gist held.
    """
    local = store.load()
    entries, gist_id = coordinator.initialize_sync(token, local)
    changed = entries is not local
    if changed:
        store.save(entries)
    return entries, gist_id, changed
