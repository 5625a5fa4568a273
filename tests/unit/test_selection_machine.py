# File: tests/unit/test_selection_machine.py
"""
Unit tests for the click-driven slot selection machine.
"""

import pytest

from slot_calendar.core.config_manager import Config
from slot_calendar.core.exceptions import InvalidMinuteError, NoOpenSessionError
from slot_calendar.core.selection_machine import SlotSelectionMachine, round_up_to_hour
from slot_calendar.models.enums import SelectionPhase
from slot_calendar.models.selection import EditingExisting, Idle, RangeClosed, StartPicked


def test_round_up_to_hour():
    assert round_up_to_hour(630) == 660
    assert round_up_to_hour(660) == 660
    assert round_up_to_hour(601) == 660
    assert round_up_to_hour(0) == 0
    assert round_up_to_hour(1439) == 1439


# ==================== Free Selection ====================

class TestFreeSelection:

    def test_starts_idle(self, machine):
        assert machine.state == Idle()
        assert not machine.is_edit_surface_open

    def test_first_click_picks_start_without_editor(self, machine, day):
        state = machine.click(605, day)

        assert state == StartPicked(day="2025-01-01", start_minute=605)
        assert not machine.is_edit_surface_open

    def test_second_click_rounds_end_up_to_hour(self, machine, day):
        machine.click(605, day)
        state = machine.click(630, day)

        assert isinstance(state, RangeClosed)
        assert (state.selection.start_minute, state.selection.end_minute) == (605, 660)
        assert machine.is_edit_surface_open
        assert (machine.session.start_minute, machine.session.end_minute) == (605, 660)

    def test_second_click_on_hour_boundary_stays(self, machine, day):
        machine.click(605, day)
        state = machine.click(660, day)

        assert state.selection.end_minute == 660

    def test_second_click_before_start_orders_range(self, machine, day):
        machine.click(700, day)
        state = machine.click(605, day)

        assert (state.selection.start_minute, state.selection.end_minute) == (605, 720)

    def test_end_never_passes_last_minute(self, machine, day):
        machine.click(1430, day)
        state = machine.click(1439, day)

        assert state.selection.end_minute == 1439

    def test_range_stays_on_first_clicked_day(self, machine, day):
        machine.click(605, day)
        state = machine.click(630, "2025-01-02")

        assert state.selection.day == "2025-01-01"
        assert machine.session.day == "2025-01-01"

    def test_new_session_defaults(self, machine, day):
        machine.click(605, day)
        machine.click(630, day)

        assert machine.session.title == ""
        assert machine.session.color == Config.DEFAULT_COLOR
        assert machine.session.video_ref is None


# ==================== Fixed Duration ====================

class TestFixedDuration:

    def test_duration_from_first_click(self, store, day):
        machine = SlotSelectionMachine(store, video_duration=45)
        machine.click(90, day)
        state = machine.click(1000, day)

        assert (state.selection.start_minute, state.selection.end_minute) == (90, 135)

    def test_second_click_minute_is_irrelevant(self, store, day):
        results = set()
        for second in (0, 91, 500, 1439):
            machine = SlotSelectionMachine(store, video_duration=45)
            machine.click(90, day)
            state = machine.click(second, day)
            results.add((state.selection.start_minute, state.selection.end_minute))

        assert results == {(90, 135)}

    def test_fractional_duration_is_floored(self, store, day):
        machine = SlotSelectionMachine(store, video_duration=45.9)
        machine.click(90, day)

        assert machine.click(95, day).selection.end_minute == 135

    def test_duration_capped_at_end_of_day(self, store, day):
        machine = SlotSelectionMachine(store, video_duration=45)
        machine.click(1420, day)

        assert machine.click(0, day).selection.end_minute == 1439

    def test_video_context_prefills_session(self, store, day):
        machine = SlotSelectionMachine(
            store, video_title="Lecture 1", video_duration=45, video_id="abc123"
        )
        machine.click(90, day)
        machine.click(91, day)

        assert machine.session.title == "Lecture 1"
        assert machine.session.video_ref == "abc123"


# ==================== Existing Events ====================

class TestEditingExisting:

    @pytest.mark.parametrize("minute", [600, 601, 630, 659])
    def test_click_inside_event_edits_exact_bounds(self, store, machine, day, minute):
        store.put(day, 600, 659, title="Review", details="PRs", color="#ffa500")

        state = machine.click(minute, day)

        assert isinstance(state, EditingExisting)
        assert (state.event.start_minute, state.event.end_minute) == (600, 659)
        session = machine.session
        assert (session.start_minute, session.end_minute) == (600, 659)
        assert (session.title, session.details, session.color) == ("Review", "PRs", "#ffa500")

    def test_existing_event_wins_over_pending_start(self, store, machine, day):
        store.put(day, 600, 659, title="Review")
        machine.click(500, day)

        state = machine.click(630, day)

        assert state.phase == SelectionPhase.EDITING_EXISTING

    def test_shortening_clicked_event_replaces_it(self, store, machine, day):
        store.put(day, 600, 660, title="Standup")
        machine.click(620, day)
        machine.session.set_end_time(10, 30)
        machine.save()

        assert [(e.title, e.start_minute, e.end_minute) for e in store.events_for_day(day)] == [
            ("Standup", 600, 630),
        ]

    def test_video_ref_is_preloaded(self, store, machine, day):
        store.put(day, 600, 659, title="Talk", video_ref="xyz")
        machine.click(610, day)

        assert machine.session.video_ref == "xyz"


# ==================== Cancel / Save / Delete ====================

class TestTransitions:

    def test_clicks_ignored_while_editor_open(self, machine, day):
        machine.click(605, day)
        closed = machine.click(630, day)

        assert machine.click(900, day) == closed

    def test_cancel_returns_to_idle_without_writing(self, store, machine, day):
        machine.click(605, day)
        machine.click(630, day)
        machine.cancel()

        assert machine.state == Idle()
        assert machine.session is None
        assert store.days() == []

    def test_cancel_from_start_picked_clears_start(self, machine, day):
        machine.click(605, day)
        machine.cancel()

        assert machine.click(700, day) == StartPicked(day="2025-01-01", start_minute=700)

    def test_save_commits_and_resets(self, store, machine, day):
        machine.click(605, day)
        machine.click(630, day)
        machine.session.set_title("Standup")
        machine.save()

        assert machine.state == Idle()
        assert store.get(day, 660).title == "Standup"
        assert store.get(day, 605).start_minute == 605

    def test_delete_existing_and_reset(self, store, machine, day):
        store.put(day, 600, 659, title="Review")
        machine.click(630, day)
        machine.delete()

        assert machine.state == Idle()
        assert not store.has_day(day)

    def test_save_without_session_raises(self, machine):
        with pytest.raises(NoOpenSessionError):
            machine.save()

    def test_delete_without_session_raises(self, machine, day):
        machine.click(605, day)
        with pytest.raises(NoOpenSessionError):
            machine.delete()

    def test_invalid_minute_raises(self, machine, day):
        with pytest.raises(InvalidMinuteError):
            machine.click(1440, day)
