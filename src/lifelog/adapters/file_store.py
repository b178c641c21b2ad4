"""JSON file entry storage adapter."""

import json
import logging
from pathlib import Path

from lifelog.core.entries import Entry, date_key, latest_entry, now_timestamp

logger = logging.getLogger(__name__)


class StorageParseError(Exception):
    """Raised when the storage document is not a valid entry array."""

    pass


class JsonFileEntryStore:
    """
    JSON file entry storage.

    Implements EntryStore protocol. The whole document is read, transformed
    in memory and written back on every mutation; there is no locking.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def exists(self) -> bool:
        """Check if setup has created the storage document."""
        return self.path.exists()

    def initialize(self) -> None:
        """Create the directory and an empty document."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.save([])
        logger.debug(f"Created storage file: {self.path}")

    def load(self) -> list[Entry]:
        """Read every entry. Raises StorageParseError if the document is malformed."""
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(data, list):
                raise StorageParseError(f"{self.path} does not contain a JSON array")
            return [Entry.from_dict(item) for item in data]
        except json.JSONDecodeError as e:
            raise StorageParseError(f"Failed to parse {self.path}: {e}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise StorageParseError(f"Malformed entry in {self.path}: {e}") from e

    def save(self, entries: list[Entry]) -> None:
        """Overwrite the document."""
        payload = json.dumps([e.to_dict() for e in entries], indent=2, ensure_ascii=False)
        self.path.write_text(payload, encoding="utf-8")

    def append(self, content: str, timestamp: str | None = None) -> Entry:
        """Add one entry and persist it."""
        entries = self.load()
        entry = Entry(timestamp=timestamp or now_timestamp(), content=content)
        entries.append(entry)
        self.save(entries)
        return entry

    def remove_by_timestamp(self, timestamp: str) -> int:
        """Remove entries with this timestamp."""
        entries = self.load()
        kept = [e for e in entries if e.timestamp != timestamp]
        self.save(kept)
        return len(entries) - len(kept)

    def remove_all_for_day(self, key: str) -> int:
        """Remove every entry whose date key matches."""
        entries = self.load()
        kept = [e for e in entries if date_key(e) != key]
        self.save(kept)
        return len(entries) - len(kept)

    def remove_last(self) -> Entry | None:
        """Remove the entry with the greatest timestamp."""
        entries = self.load()
        last = latest_entry(entries)
        if last is None:
            return None
        entries.remove(last)
        self.save(entries)
        return last
