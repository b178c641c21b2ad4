"""Dashboard view logic - focus modes and box contents, no terminal I/O."""

import calendar
from datetime import date
from enum import Enum, auto

from .entries import Entry, format_day, format_time, group_by_date, select_days
from .tags import extract_tags

StyledText = list[tuple[str, str]]


class DashboardMode(Enum):
    """Which part of the dashboard receives keys."""

    LIST_VIEW = auto()
    INPUT_VIEW = auto()
    EDITING_TEXT = auto()


_TRANSITIONS: dict[DashboardMode, dict[str, DashboardMode | None]] = {
    DashboardMode.LIST_VIEW: {
        "e": DashboardMode.LIST_VIEW,
        "i": DashboardMode.INPUT_VIEW,
        "tab": DashboardMode.INPUT_VIEW,
        "enter": DashboardMode.INPUT_VIEW,
        "escape": None,
        "q": None,
        "c-c": None,
    },
    DashboardMode.INPUT_VIEW: {
        "e": DashboardMode.LIST_VIEW,
        "i": DashboardMode.INPUT_VIEW,
        "tab": DashboardMode.LIST_VIEW,
        "enter": DashboardMode.EDITING_TEXT,
        "escape": DashboardMode.LIST_VIEW,
        "q": None,
        "c-c": None,
    },
    # Everything else typed while editing is text.
    DashboardMode.EDITING_TEXT: {
        "escape": DashboardMode.INPUT_VIEW,
        "c-c": None,
    },
}


def next_mode(mode: DashboardMode, key: str) -> DashboardMode | None:
    """
    Mode after a key press. None means the dashboard should exit.

    Keys without a transition leave the mode unchanged.
    """
    return _TRANSITIONS[mode].get(key, mode)


def can_save(mode: DashboardMode, text: str) -> bool:
    """Ctrl+S saves from the input box when there is something to save."""
    return mode in (DashboardMode.INPUT_VIEW, DashboardMode.EDITING_TEXT) and bool(text.strip())


def month_calendar(entries: list[Entry], today: date) -> StyledText:
    """Current month grid with days that have entries in bold."""
    logged_days = set(group_by_date(entries))
    title = today.strftime("%B %Y")
    fragments: StyledText = [("", f"    {title}\n"), ("", " Mo Tu We Th Fr Sa Su\n")]

    for week in calendar.Calendar(firstweekday=calendar.MONDAY).monthdayscalendar(today.year, today.month):
        fragments.append(("", " "))
        for day in week:
            if day == 0:
                fragments.append(("", "   "))
                continue
            key = date(today.year, today.month, day).isoformat()
            style = "bold" if key in logged_days else ""
            if day == today.day:
                style = f"{style} reverse".strip()
            fragments.append((style, f"{day:2d}"))
            fragments.append(("", " "))
        fragments.append(("", "\n"))
    return fragments


def entries_text(entries: list[Entry]) -> str:
    """Entry list grouped by day, newest day first."""
    grouped = group_by_date(entries)
    lines = [""]
    for key in select_days(grouped, descending=True):
        lines.append(f"  ► {format_day(key)}")
        lines.append("")
        for entry in grouped[key]:
            lines.append(f"  [{format_time(entry.timestamp)}] {entry.content}")
        lines.append("")
    return "\n".join(lines)


def tags_text(entries: list[Entry]) -> str:
    tags = extract_tags(entries)
    if not tags:
        return "No tags found"
    return "\n".join(f"{tag} ({count})" for tag, count in tags.items())
