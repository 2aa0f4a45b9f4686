"""Tests for the weekly schedule grid."""

from datetime import date, datetime

import pytest

from backend.app.services.date_resolver import TZ
from backend.app.services.schedule_service import build_week_grid, clear_slot, save_slot


class TestWeekGrid:
    def test_entries_are_keyed_by_day_and_period(self, make_schedule_entry):
        save_slot(1, date(2025, 1, 15), 3, "Math review")
        make_schedule_entry(1, datetime(2025, 1, 17, 18, tzinfo=TZ), title="Cram school")
        make_schedule_entry(1, datetime(2025, 1, 20, 8, tzinfo=TZ), title="Next week")
        make_schedule_entry(2, datetime(2025, 1, 15, 8, tzinfo=TZ), title="Someone else")

        grid = build_week_grid(1, date(2025, 1, 16))

        assert [d["key"] for d in grid["week"]][0] == "1/13"
        assert len(grid["periods"]) == 7
        cells = {(e["date"], e["period"]): e["title"] for e in grid["entries"]}
        assert cells == {("1/15", 3): "Math review", ("1/17", 7): "Cram school"}

    def test_after_school_label(self, make_schedule_entry):
        make_schedule_entry(1, datetime(2025, 1, 14, 20, tzinfo=TZ), title="Late")
        [entry] = build_week_grid(1, date(2025, 1, 14))["entries"]
        assert entry["period_label"] == "放課後"


class TestSlots:
    def test_save_replaces_existing_entry(self):
        save_slot(1, date(2025, 1, 15), 2, "First")
        save_slot(1, date(2025, 1, 15), 2, "Second")

        entries = build_week_grid(1, date(2025, 1, 15))["entries"]

        assert [e["title"] for e in entries] == ["Second"]

    def test_clear_slot(self):
        save_slot(1, date(2025, 1, 15), 5, "PE")
        assert clear_slot(1, date(2025, 1, 15), 5) == 1
        assert build_week_grid(1, date(2025, 1, 15))["entries"] == []

    def test_invalid_period(self):
        with pytest.raises(ValueError):
            save_slot(1, date(2025, 1, 15), 9, "Nope")
