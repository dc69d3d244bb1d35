import random
from datetime import date, datetime, timedelta

import pytest

from src.attendance_payroll.attendance_payroll.core.enums import CheckoutTiming
from src.attendance_payroll.attendance_payroll.core.exceptions import ValidationError
from src.attendance_payroll.attendance_payroll.timewindow.calculator import (
    END_OF_DAY,
    checkout_boundaries,
    classify_check_in,
    classify_check_out,
    is_outside_window,
    is_within_overtime_window,
    overlap_minutes,
    overtime_boundaries,
    resolve_window,
)

DAY = date(2025, 3, 3)


def test_resolve_window_same_day():
    window = resolve_window("08:00", "17:00", DAY)

    assert window.start == datetime(2025, 3, 3, 8, 0)
    assert window.end == datetime(2025, 3, 3, 17, 0)
    assert not window.is_overnight
    assert window.duration_minutes == 540


def test_resolve_window_overnight_moves_end_to_next_day():
    window = resolve_window("22:00", "06:00", DAY)

    assert window.start == datetime(2025, 3, 3, 22, 0)
    assert window.end == datetime(2025, 3, 4, 6, 0)
    assert window.is_overnight
    assert window.duration_minutes == 480


def test_resolve_window_equal_boundaries_is_zero_length():
    window = resolve_window("09:30", "09:30", DAY)

    assert window.start == window.end
    assert window.duration_minutes == 0


def test_resolve_window_random_boundaries_end_never_before_start():
    rng = random.Random(20250303)
    for _ in range(500):
        start = f"{rng.randrange(24):02d}:{rng.randrange(60):02d}"
        end = f"{rng.randrange(24):02d}:{rng.randrange(60):02d}"

        window = resolve_window(start, end, DAY)

        assert window.end >= window.start
        assert window.duration < timedelta(days=1)
        assert window.start.date() == DAY
        assert window.is_overnight == (end < start)


def test_open_end_defaults_to_end_of_day_only_when_allowed():
    window = resolve_window("20:00", None, DAY, allow_open_end=True)
    assert window.end == datetime.combine(DAY, END_OF_DAY)

    with pytest.raises(ValidationError) as exc:
        resolve_window("20:00", None, DAY)
    assert exc.value.code == "missing_time"


@pytest.mark.parametrize("value", ["8:00", "24:00", "12:60", "ab:cd", "08:00:00", "0800"])
def test_malformed_time_is_rejected(value):
    with pytest.raises(ValidationError) as exc:
        resolve_window(value, "17:00", DAY)
    assert exc.value.code == "invalid_time"


def test_window_bounds_are_inclusive():
    window = resolve_window("18:00", "20:00", DAY)

    assert not is_outside_window(window.start, window)
    assert not is_outside_window(window.end, window)
    assert is_outside_window(window.end + timedelta(seconds=1), window)
    assert is_within_overtime_window(datetime(2025, 3, 3, 19, 0), window)
    assert not is_within_overtime_window(datetime(2025, 3, 3, 17, 59), window)


def test_check_in_lateness_counts_from_window_start():
    window = resolve_window("08:00", "17:00", DAY)

    timing = classify_check_in(datetime(2025, 3, 3, 8, 5), window, late_threshold_min=5)
    assert timing.is_late
    assert timing.minutes_late == 5
    assert timing.within_grace

    timing = classify_check_in(datetime(2025, 3, 3, 8, 6), window, late_threshold_min=5)
    assert timing.minutes_late == 6
    assert not timing.within_grace


def test_check_in_too_early():
    window = resolve_window("08:00", "17:00", DAY)

    timing = classify_check_in(datetime(2025, 3, 3, 7, 31), window, early_threshold_min=29)
    assert timing.is_early and not timing.is_late
    assert timing.minutes_early == 29
    assert not timing.is_too_early

    timing = classify_check_in(datetime(2025, 3, 3, 7, 30), window, early_threshold_min=29)
    assert timing.is_too_early


@pytest.mark.parametrize(
    "hhmm, expected",
    [
        ((16, 54), CheckoutTiming.EARLY),
        ((16, 55), CheckoutTiming.ON_TIME),
        ((17, 15), CheckoutTiming.ON_TIME),
        ((17, 16), CheckoutTiming.LATE),
        ((17, 30), CheckoutTiming.LATE),
        ((17, 31), CheckoutTiming.VERY_LATE),
    ],
)
def test_classify_check_out(hhmm, expected):
    bounds = checkout_boundaries(datetime(2025, 3, 3, 17, 0), 5, 15, 30)

    assert classify_check_out(datetime(2025, 3, 3, *hhmm), bounds) == expected


def test_overtime_boundaries():
    bounds = overtime_boundaries(datetime(2025, 3, 3, 18, 0), datetime(2025, 3, 3, 20, 0))

    assert bounds.early_check_in_window == datetime(2025, 3, 3, 17, 31)
    assert bounds.late_check_out_window == datetime(2025, 3, 3, 20, 15)


def test_overlap_minutes_clips_to_window():
    window = resolve_window("18:00", "20:00", DAY)

    assert overlap_minutes(datetime(2025, 3, 3, 17, 30), datetime(2025, 3, 3, 20, 45), window) == 120
    assert overlap_minutes(datetime(2025, 3, 3, 18, 30), datetime(2025, 3, 3, 19, 0), window) == 30
    assert overlap_minutes(datetime(2025, 3, 3, 20, 30), datetime(2025, 3, 3, 21, 0), window) == 0
