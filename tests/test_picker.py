from datetime import date, datetime, time

from timeentry.core.allowed_map import FlatAllowedMap, MeridiemAllowedMap
from timeentry.core.parser import ParseStatus
from timeentry.core.picker import TimePickerState
from timeentry.core.settings import PickerSettings

DAY = date(2024, 3, 1)
MIN = datetime(2024, 3, 1, 10, 0)
MAX = datetime(2024, 3, 1, 18, 0)


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2024, 3, 1, hour, minute)


def make_state(**kwargs) -> TimePickerState:
    return TimePickerState(kwargs.pop("mode", "24h"), MIN, MAX, **kwargs)


class TestCommitText:
    def test_below_min_with_notify(self) -> None:
        state = make_state(notify_out_of_range=True, value=at(12))
        out = state.commit_text("9:45am")
        assert out.value == MIN
        assert out.changed
        assert out.notify
        assert out.out_of_range
        assert out.direction == "below"
        assert state.value == MIN

    def test_clamping_happens_without_notify(self) -> None:
        state = make_state(value=at(12))
        out = state.commit_text("7pm")
        assert out.value == MAX
        assert out.direction == "above"
        assert not out.notify

    def test_in_range_commit(self) -> None:
        state = make_state(value=at(12))
        out = state.commit_text("1630")
        assert out.value == at(16, 30)
        assert not out.out_of_range
        assert state.display_text() == "16:30"

    def test_unparseable_clears_without_notice(self) -> None:
        state = make_state(notify_out_of_range=True, value=at(12))
        out = state.commit_text("abc")
        assert out.value is None
        assert out.changed
        assert not out.notify
        assert out.status is ParseStatus.UNPARSEABLE
        assert state.value is None

    def test_empty_clears(self) -> None:
        state = make_state(value=at(12))
        out = state.commit_text("")
        assert out.status is ParseStatus.EMPTY
        assert state.value is None

    def test_clearing_twice_reports_no_change(self) -> None:
        state = make_state()
        assert not state.commit_text("").changed

    def test_uses_date_of_current_value(self) -> None:
        state = TimePickerState("24h", value=datetime(2023, 12, 24, 8, 0))
        state.commit_text("14")
        assert state.value == datetime(2023, 12, 24, 14, 0)

    def test_recommitting_same_text_is_stable(self) -> None:
        state = make_state(notify_out_of_range=True, value=at(12))
        state.commit_text("9")
        again = state.commit_text(state.display_text())
        assert again.value == MIN
        assert not again.changed
        assert not again.notify


class TestSelectAndWrite:
    def test_select_is_reconciled(self) -> None:
        state = make_state(notify_out_of_range=True)
        out = state.select(at(22))
        assert out.value == MAX
        assert out.notify

    def test_select_none_keeps_value(self) -> None:
        state = make_state(value=at(12))
        out = state.select(None)
        assert out.value == at(12)
        assert not out.changed

    def test_write_value_truncates_and_reports_change(self) -> None:
        state = make_state()
        assert state.write_value(datetime(2024, 3, 1, 11, 5, 30))
        assert state.value == at(11, 5)
        assert not state.write_value(at(11, 5))

    def test_write_value_does_not_clamp(self) -> None:
        state = make_state()
        state.write_value(at(6))
        assert state.value == at(6)
        assert not state.check_validity()

    def test_ensure_default(self) -> None:
        state = make_state()
        assert state.ensure_default(at(21, 14)) == at(18, 0)
        assert state.ensure_default(at(12, 0)) == at(18, 0)


class TestDisplay:
    def test_12h_display(self) -> None:
        state = TimePickerState("12h", value=at(13, 5))
        assert state.display_text() == "1:05 pm"

    def test_switching_mode_rerenders(self) -> None:
        state = TimePickerState("24h", value=at(0, 30))
        assert state.display_text() == "00:30"
        state.set_mode("12h")
        assert state.display_text() == "12:30 am"


class TestAllowedMap:
    def test_snapshot_follows_mode(self) -> None:
        state = make_state()
        assert isinstance(state.allowed_map, FlatAllowedMap)
        state.set_mode("12h")
        assert isinstance(state.allowed_map, MeridiemAllowedMap)
        assert state.allowed_map_rebuilds == 2

    def test_rebuild_only_on_effective_change(self) -> None:
        state = make_state()
        first = state.allowed_map
        state.set_bounds(datetime(2024, 3, 1, 10, 0, 30), datetime(2024, 3, 1, 18, 0))
        assert state.allowed_map is first
        assert state.allowed_map_rebuilds == 1
        state.set_bounds(at(11), MAX)
        assert state.allowed_map is not first
        assert state.allowed_map_rebuilds == 2


class TestValidation:
    def test_check_validity(self) -> None:
        state = make_state()
        assert not state.check_validity()
        assert not state.check_validity(at(9))
        assert state.check_validity(at(12))

    def test_validate(self) -> None:
        state = make_state()
        assert state.validate().ok
        assert state.validate(required=True).field_errors == {"time": "Time is required."}
        state.write_value(at(9))
        assert state.validate().field_errors == {"time": "Time must not be earlier than 10:00."}


def test_from_settings() -> None:
    settings = PickerSettings(mode="12h", min_time=time(9, 0), max_time=time(17, 30), notify_out_of_range=True)
    state = TimePickerState.from_settings(settings, day=DAY)
    assert state.mode == "12h"
    assert state.min_date == datetime(2024, 3, 1, 9, 0)
    assert state.max_date == datetime(2024, 3, 1, 17, 30)
    assert state.notify_out_of_range


class TestAcrossDays:
    def test_commit_text_on_earlier_day_keeps_time_and_date(self) -> None:
        state = make_state(notify_out_of_range=True, value=datetime(2024, 2, 28, 9, 0))
        assert state.allowed_map.is_allowed(12, 0)
        out = state.commit_text("12:00")
        assert out.value == datetime(2024, 2, 28, 12, 0)
        assert not out.out_of_range
        assert not out.notify

    def test_select_on_later_day_keeps_time_and_date(self) -> None:
        state = make_state(notify_out_of_range=True, value=datetime(2024, 3, 5, 9, 0))
        out = state.select(datetime(2024, 3, 5, 12, 0))
        assert out.value == datetime(2024, 3, 5, 12, 0)
        assert out.direction is None
        assert not out.notify

    def test_clamped_bound_lands_on_value_date(self) -> None:
        state = make_state(notify_out_of_range=True, value=datetime(2024, 3, 5, 12, 0))
        out = state.commit_text("7")
        assert out.value == datetime(2024, 3, 5, 10, 0)
        assert out.direction == "below"
        assert out.notify
        assert state.validate().ok

    def test_rollover_past_midnight_clamps_on_next_day(self) -> None:
        state = make_state(value=at(12))
        out = state.commit_text("24")
        assert out.value == datetime(2024, 3, 2, 10, 0)
        assert out.direction == "below"
