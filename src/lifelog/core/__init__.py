"""Functional core - pure business logic with no I/O."""

from .entries import (
    Entry,
    date_key,
    group_by_date,
    select_days,
    latest_entry,
    merge_entries,
    now_timestamp,
)
from .tags import extract_tags
from .dashboard import DashboardMode, next_mode, can_save

__all__ = [
    # Entries
    "Entry",
    "date_key",
    "group_by_date",
    "select_days",
    "latest_entry",
    "merge_entries",
    "now_timestamp",
    # Tags
    "extract_tags",
    # Dashboard
    "DashboardMode",
    "next_mode",
    "can_save",
]
