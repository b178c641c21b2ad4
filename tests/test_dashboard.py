"""Tests for dashboard modes, box contents and the save path."""

from datetime import date
from unittest.mock import MagicMock

import pytest
from prompt_toolkit.application import create_app_session
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput

from lifelog.adapters.file_store import JsonFileEntryStore
from lifelog.core.dashboard import (
    DashboardMode,
    can_save,
    entries_text,
    month_calendar,
    next_mode,
    tags_text,
)
from lifelog.core.entries import Entry
from lifelog.dashboard import Dashboard

LIST = DashboardMode.LIST_VIEW
INPUT = DashboardMode.INPUT_VIEW
EDITING = DashboardMode.EDITING_TEXT


class TestNextMode:
    @pytest.mark.parametrize(
        "mode,key,expected",
        [
            (LIST, "e", LIST),
            (LIST, "i", INPUT),
            (LIST, "tab", INPUT),
            (LIST, "enter", INPUT),
            (INPUT, "e", LIST),
            (INPUT, "tab", LIST),
            (INPUT, "enter", EDITING),
            (INPUT, "escape", LIST),
            (EDITING, "escape", INPUT),
        ],
    )
    def test_transitions(self, mode, key, expected):
        assert next_mode(mode, key) is expected

    @pytest.mark.parametrize("key", ["e", "i", "q", "tab", "enter", "x"])
    def test_editing_keeps_text_keys(self, key):
        assert next_mode(EDITING, key) is EDITING

    @pytest.mark.parametrize("mode,key", [(LIST, "q"), (LIST, "escape"), (INPUT, "q"), (EDITING, "c-c")])
    def test_quit(self, mode, key):
        assert next_mode(mode, key) is None

    def test_unknown_key_keeps_mode(self):
        assert next_mode(LIST, "z") is LIST


class TestCanSave:
    def test_needs_text(self):
        assert can_save(EDITING, "   ") is False

    def test_from_input_or_editing(self):
        assert can_save(INPUT, "hello") is True
        assert can_save(EDITING, "hello") is True

    def test_not_from_list(self):
        assert can_save(LIST, "hello") is False


class TestBoxContents:
    @pytest.fixture
    def entries(self):
        return [
            Entry("2025-01-15T10:00:00Z", "gym #health"),
            Entry("2025-01-14T10:00:00Z", "salad #health #food"),
        ]

    def test_calendar_marks_logged_days(self, entries):
        fragments = month_calendar(entries, today=date(2025, 1, 20))
        styles = {text.strip(): style for style, text in fragments if text.strip().isdigit()}

        assert styles["14"] == "bold"
        assert styles["15"] == "bold"
        assert styles["16"] == ""
        assert styles["20"] == "reverse"

    def test_calendar_header(self, entries):
        fragments = month_calendar(entries, today=date(2025, 1, 20))
        text = "".join(t for _, t in fragments)
        assert "January 2025" in text
        assert "Mo Tu We Th Fr Sa Su" in text

    def test_entries_newest_day_first(self, entries):
        text = entries_text(entries)
        assert text.index("Jan 15") < text.index("Jan 14")
        assert "gym #health" in text

    def test_tags(self, entries):
        assert tags_text(entries).splitlines() == ["#health (2)", "#food (1)"]

    def test_no_tags(self):
        assert tags_text([Entry("2025-01-15T10:00:00Z", "plain")]) == "No tags found"


@pytest.fixture
def store(tmp_path):
    s = JsonFileEntryStore(tmp_path / "storage.json")
    s.initialize()
    s.append("first", "2025-01-14T10:00:00.000Z")
    return s


@pytest.fixture
def dashboard(store):
    coordinator = MagicMock()
    coordinator.is_configured.return_value = True
    with create_pipe_input() as pipe_input:
        with create_app_session(input=pipe_input, output=DummyOutput()):
            dash = Dashboard(store, coordinator, store.load(), today=date(2025, 1, 20))
            dash.app.exit = MagicMock()
            yield dash


class TestDashboard:
    def test_starts_in_list_view(self, dashboard):
        assert dashboard.mode is LIST
        assert dashboard.app.layout.current_window is dashboard.entries_window

    def test_enter_twice_starts_editing(self, dashboard):
        dashboard.handle_key("enter")
        dashboard.handle_key("enter")

        assert dashboard.mode is EDITING
        assert dashboard.app.layout.current_window is dashboard.input_window

    def test_input_is_read_only_until_editing(self, dashboard):
        dashboard.handle_key("i")
        assert dashboard.input_buffer.read_only() is True

        dashboard.handle_key("enter")
        assert dashboard.input_buffer.read_only() is False

    def test_quit(self, dashboard):
        dashboard.handle_key("q")
        dashboard.app.exit.assert_called_once()

    def test_save_appends_and_refreshes(self, dashboard, store):
        dashboard.handle_key("i")
        dashboard.handle_key("enter")
        dashboard.input_buffer.insert_text("new entry #focus")

        dashboard.save()

        assert [e.content for e in store.load()] == ["first", "new entry #focus"]
        assert len(dashboard.entries) == 2
        assert "new entry #focus" in dashboard.entries_buffer.text
        assert dashboard.input_buffer.text == ""
        assert dashboard.mode is LIST
        assert "successfully" in dashboard.status
        dashboard.coordinator.sync_in_background.assert_called_once()

    def test_save_ignores_blank_input(self, dashboard, store):
        dashboard.handle_key("i")
        dashboard.handle_key("enter")
        dashboard.input_buffer.insert_text("   ")

        dashboard.save()

        assert len(store.load()) == 1
        assert dashboard.mode is EDITING
