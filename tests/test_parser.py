from datetime import date, datetime

import pytest

from timeentry.core.clock import format_display
from timeentry.core.parser import ParseStatus, parse_time_text

ON = date(2024, 3, 1)


def parse(text, mode="24h"):
    return parse_time_text(text, mode, on=ON)


def hm(text, mode="24h"):
    r = parse(text, mode)
    assert r.ok, text
    return r.hour, r.minute


class TestEmptyAndUnparseable:
    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_empty_input(self, text) -> None:
        r = parse(text)
        assert r.status is ParseStatus.EMPTY
        assert r.value is None
        assert r.clears_value

    @pytest.mark.parametrize("text", ["abc", "9:xx", "x5", "am", "1a23", "1_0:30", "\uff11\uff12:00", "+:30", "--3"])
    def test_unparseable_input(self, text) -> None:
        r = parse(text)
        assert r.status is ParseStatus.UNPARSEABLE
        assert r.value is None
        assert r.clears_value


class TestShorthand:
    def test_single_digit_is_hour(self) -> None:
        assert hm("5", "12h") == (5, 0)
        assert parse("5", "12h").value == datetime(2024, 3, 1, 5, 0)

    def test_two_digits_is_hour(self) -> None:
        assert hm("17") == (17, 0)

    def test_colon_form(self) -> None:
        assert hm("9:45") == (9, 45)
        assert hm("09:05") == (9, 5)

    def test_colon_with_blank_parts(self) -> None:
        assert hm("12:") == (12, 0)
        assert hm(":30") == (0, 30)

    def test_extra_colon_parts_ignored(self) -> None:
        assert hm("12:30:15") == (12, 30)

    def test_concatenated_digits(self) -> None:
        assert hm("1630") == (16, 30)
        assert hm("0905") == (9, 5)
        assert hm("123") == (12, 3)

    def test_surrounding_whitespace(self) -> None:
        assert hm("  7:15  ") == (7, 15)


class TestMeridiem:
    def test_am_pm_suffix(self) -> None:
        assert hm("9:45am") == (9, 45)
        assert hm("4:30 PM") == (16, 30)
        assert hm("11pm") == (23, 0)
        assert hm("5pm", "12h") == (17, 0)

    def test_am_with_afternoon_hour_subtracts(self) -> None:
        assert hm("13am") == (1, 0)

    def test_twelve_is_not_special_cased(self) -> None:
        assert hm("12am") == (12, 0)
        assert hm("12pm") == (12, 0)

    def test_pm_on_afternoon_hour_is_left_alone(self) -> None:
        assert hm("130pm") == (13, 0)

    def test_token_anywhere(self) -> None:
        assert hm("pm 3:15") == (15, 15)


class TestClamping:
    def test_24h_hour_clamped_to_24_and_rolls_over(self) -> None:
        r = parse("930")
        assert (r.hour, r.minute) == (24, 0)
        assert r.value == datetime(2024, 3, 2, 0, 0)

    def test_24h_negative_hour_clamped_to_zero(self) -> None:
        assert hm("-3") == (0, 0)

    def test_12h_hour_below_one(self) -> None:
        assert hm("0", "12h") == (1, 0)

    def test_12h_has_no_upper_clamp(self) -> None:
        r = parse("25", "12h")
        assert r.hour == 25
        assert r.value == datetime(2024, 3, 2, 1, 0)

    def test_minutes_clamped(self) -> None:
        assert hm("9:75") == (9, 59)
        assert hm("9:-5") == (9, 0)


def test_value_has_no_seconds() -> None:
    r = parse("10:10")
    assert r.value.second == 0
    assert r.value.microsecond == 0


def test_defaults_to_today() -> None:
    r = parse_time_text("10")
    assert r.value.date() == date.today()


def test_unknown_mode_raises() -> None:
    with pytest.raises(ValueError):
        parse_time_text("10", "13h")


def test_24h_display_round_trip() -> None:
    for h in range(24):
        for m in range(60):
            text = format_display(datetime(2024, 3, 1, h, m), "24h")
            r = parse(text)
            assert (r.hour, r.minute) == (h, m), text
            assert r.value == datetime(2024, 3, 1, h, m)


def test_signed_parts() -> None:
    assert hm("+9:15") == (9, 15)
    assert hm("-3") == (0, 0)
