# staynest/utils/slots.py
"""
Laundry slot catalog and availability.

The catalog is fixed: every machine offers the same sixteen one-hour slots
each day. A (machine, slot) pair is booked for a day exactly when a booking
row exists for that triple; peak slots are flagged for the UI only.
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Protocol, Set, Tuple

MACHINES: Tuple[str, ...] = ("Machine 1", "Machine 2", "Machine 3")

TIME_SLOTS: Tuple[str, ...] = tuple(
    f"{h:02d}:00 - {h + 1:02d}:00" for h in range(6, 22)
)

# 7-9 AM and 5-8 PM
PEAK_SLOTS = frozenset(
    {
        "07:00 - 08:00",
        "08:00 - 09:00",
        "17:00 - 18:00",
        "18:00 - 19:00",
        "19:00 - 20:00",
    }
)

BOOKING_WINDOW_DAYS = 7


class BookingLike(Protocol):
    machine: str
    time_slot: str
    user_id: str


def is_peak(time_slot: str) -> bool:
    return time_slot in PEAK_SLOTS


def slot_catalog() -> List[Dict]:
    return [{"time_slot": s, "is_peak": is_peak(s)} for s in TIME_SLOTS]


def day_label(day: date, today: date) -> str:
    offset = (day - today).days
    if offset == 0:
        return "Today"
    if offset == 1:
        return "Tomorrow"
    return f"{day:%a}, {day:%b} {day.day}"


def bookable_days(today: date) -> List[Tuple[date, str]]:
    days = [today + timedelta(days=i) for i in range(BOOKING_WINDOW_DAYS)]
    return [(d, day_label(d, today)) for d in days]


def in_booking_window(day: date, today: date) -> bool:
    return 0 <= (day - today).days < BOOKING_WINDOW_DAYS


def booked_pairs(bookings: Iterable[BookingLike]) -> Set[Tuple[str, str]]:
    return {(b.machine, b.time_slot) for b in bookings}


def build_availability(
    bookings: Iterable[BookingLike],
    user_id: Optional[str] = None,
) -> List[Dict]:
    """
    Cross the catalog with one day's booking rows.

    Returns one entry per machine, each carrying all sixteen slots with
    ``is_booked`` / ``is_mine`` flags. Rows for machines or slots outside the
    catalog are ignored.
    """
    rows = list(bookings)
    taken = booked_pairs(rows)
    mine = {(b.machine, b.time_slot) for b in rows if user_id and b.user_id == user_id}

    out: List[Dict] = []
    for machine in MACHINES:
        slots = []
        for s in TIME_SLOTS:
            slots.append(
                {
                    "time_slot": s,
                    "is_peak": is_peak(s),
                    "is_booked": (machine, s) in taken,
                    "is_mine": (machine, s) in mine,
                }
            )
        free = sum(1 for s in slots if not s["is_booked"])
        out.append(
            {
                "machine": machine,
                "slots": slots,
                "free": free,
                "booked": len(slots) - free,
            }
        )
    return out
