"""Pure entry domain logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime, timezone

SPECIAL_CHARS = set("#!&|;<>(){}[]$`\\")


@dataclass
class Entry:
    """A journal entry. The timestamp doubles as its identity."""

    timestamp: str
    content: str

    @property
    def moment(self) -> datetime:
        """Timestamp parsed as an aware datetime (naive values are taken as UTC)."""
        parsed = datetime.fromisoformat(self.timestamp)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    def to_dict(self) -> dict:
        return {"timestamp": self.timestamp, "content": self.content}

    @classmethod
    def from_dict(cls, data: dict) -> "Entry":
        """
        Create Entry from a stored JSON object.

        Raises KeyError for missing fields, TypeError for non-string fields and
        ValueError for a timestamp that is not ISO-8601.
        """
        timestamp, content = data["timestamp"], data["content"]
        if not isinstance(timestamp, str) or not isinstance(content, str):
            raise TypeError(f"timestamp and content must be strings, got {timestamp!r}")
        datetime.fromisoformat(timestamp)
        return cls(timestamp=timestamp, content=content)


def now_timestamp(now: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2023-01-01T12:00:00.000Z."""
    now = now or datetime.now(timezone.utc)
    now = now.astimezone(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def date_key(entry: Entry) -> str:
    """Calendar-day portion of the timestamp (YYYY-MM-DD)."""
    return entry.timestamp.split("T")[0]


def group_by_date(entries: list[Entry]) -> dict[str, list[Entry]]:
    """
    Group entries by day.

    Within a day entries are always oldest first, so the most recent entry of
    a day is displayed last.
    """
    grouped: dict[str, list[Entry]] = {}
    for entry in entries:
        grouped.setdefault(date_key(entry), []).append(entry)
    for day_entries in grouped.values():
        day_entries.sort(key=lambda e: e.timestamp)
    return grouped


def select_days(
    grouped: dict[str, list[Entry]],
    descending: bool = False,
    limit: int | None = None,
) -> list[str]:
    """Order day keys and optionally keep only the first ``limit`` days."""
    days = sorted(grouped, reverse=descending)
    if limit is not None and limit > 0:
        days = days[:limit]
    return days


def latest_entry(entries: list[Entry]) -> Entry | None:
    """Entry with the greatest timestamp."""
    if not entries:
        return None
    return max(entries, key=lambda e: e.timestamp)


def merge_entries(local: list[Entry], remote: list[Entry]) -> list[Entry]:
    """
    Union merge keyed by timestamp.

    Every local entry is kept; remote entries are added when their timestamp
    is not present locally (ties keep the local copy). Result is newest first.
    """
    seen = {entry.timestamp for entry in local}
    merged = list(local)
    for entry in remote:
        if entry.timestamp not in seen:
            merged.append(entry)
    merged.sort(key=lambda e: e.moment, reverse=True)
    return merged


def format_time(timestamp: str) -> str:
    """Local wall-clock time (HH:MM) for display."""
    return Entry(timestamp, "").moment.astimezone().strftime("%H:%M")


def format_day(key: str) -> str:
    """Human-readable day header for a date key."""
    return date.fromisoformat(key).strftime("%A, %b %d, %Y")


def needs_quoting_hint(text: str) -> bool:
    """True when unquoted shell input may have been cut short."""
    return any(ch in SPECIAL_CHARS for ch in text)
