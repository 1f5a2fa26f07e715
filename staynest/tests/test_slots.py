from __future__ import annotations

from datetime import date
from types import SimpleNamespace

from staynest.utils.slots import (
    MACHINES,
    TIME_SLOTS,
    bookable_days,
    build_availability,
    day_label,
    in_booking_window,
    is_peak,
)


def _row(machine, slot, user="u1"):
    return SimpleNamespace(machine=machine, time_slot=slot, user_id=user)


def test_catalog_shape():
    assert len(MACHINES) == 3
    assert len(TIME_SLOTS) == 16
    assert TIME_SLOTS[0] == "06:00 - 07:00"
    assert TIME_SLOTS[-1] == "21:00 - 22:00"


def test_peak_hours_are_morning_and_evening():
    peaks = [s for s in TIME_SLOTS if is_peak(s)]
    assert peaks == [
        "07:00 - 08:00",
        "08:00 - 09:00",
        "17:00 - 18:00",
        "18:00 - 19:00",
        "19:00 - 20:00",
    ]


def test_booked_set_matches_rows_exactly():
    rows = [
        _row("Machine 1", "07:00 - 08:00"),
        _row("Machine 3", "21:00 - 22:00", user="u2"),
    ]
    machines = build_availability(rows, user_id="u1")

    booked = {
        (m["machine"], s["time_slot"])
        for m in machines
        for s in m["slots"]
        if s["is_booked"]
    }
    assert booked == {("Machine 1", "07:00 - 08:00"), ("Machine 3", "21:00 - 22:00")}

    mine = {
        (m["machine"], s["time_slot"])
        for m in machines
        for s in m["slots"]
        if s["is_mine"]
    }
    assert mine == {("Machine 1", "07:00 - 08:00")}


def test_counts_per_machine():
    rows = [_row("Machine 2", s) for s in TIME_SLOTS[:4]]
    machines = {m["machine"]: m for m in build_availability(rows)}
    assert machines["Machine 2"]["booked"] == 4
    assert machines["Machine 2"]["free"] == 12
    assert machines["Machine 1"]["free"] == 16


def test_rows_outside_catalog_are_ignored():
    machines = build_availability([_row("Machine 9", "03:00 - 04:00")])
    assert all(not s["is_booked"] for m in machines for s in m["slots"])


def test_no_user_means_nothing_is_mine():
    machines = build_availability([_row("Machine 1", "06:00 - 07:00")])
    assert not any(s["is_mine"] for m in machines for s in m["slots"])


def test_booking_window_is_seven_days():
    today = date(2026, 3, 10)
    days = bookable_days(today)
    assert len(days) == 7
    assert days[0] == (today, "Today")
    assert days[1][1] == "Tomorrow"
    assert days[2][1] == "Thu, Mar 12"

    assert in_booking_window(today, today)
    assert in_booking_window(date(2026, 3, 16), today)
    assert not in_booking_window(date(2026, 3, 17), today)
    assert not in_booking_window(date(2026, 3, 9), today)


def test_day_label_past_tomorrow():
    assert day_label(date(2026, 1, 5), date(2026, 1, 1)) == "Mon, Jan 5"
