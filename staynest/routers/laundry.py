# staynest/routers/laundry.py
from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import get_current_user, require_guest, require_head
from ..models import LaundryBooking, User
from ..schemas.laundry import (
    AvailabilityOut,
    BookingIn,
    BookingOut,
    CatalogOut,
    DayOut,
)
from ..utils.slots import (
    MACHINES,
    TIME_SLOTS,
    bookable_days,
    build_availability,
    in_booking_window,
    is_peak,
    slot_catalog,
)

router = APIRouter(prefix="/laundry", tags=["Laundry"])
log = logging.getLogger(__name__)


def _serialize(b: LaundryBooking) -> BookingOut:
    profile = b.user.profile if b.user else None
    return BookingOut(
        id=b.id,
        user_id=b.user_id,
        machine=b.machine,
        time_slot=b.time_slot,
        booking_date=b.booking_date,
        status=b.status,
        is_peak=is_peak(b.time_slot),
        created_at=b.created_at,
        resident_name=profile.name if profile else None,
        room_number=profile.room_number if profile else None,
    )


def _bookings_for(db: Session, day: date) -> List[LaundryBooking]:
    return (
        db.query(LaundryBooking)
        .filter(LaundryBooking.booking_date == day)
        .all()
    )


@router.get("/days", response_model=List[DayOut])
def days(_: User = Depends(get_current_user)):
    return [DayOut(date=d, label=label) for d, label in bookable_days(date.today())]


@router.get("/slots", response_model=CatalogOut)
def catalog(_: User = Depends(get_current_user)):
    return CatalogOut(machines=list(MACHINES), slots=slot_catalog())


@router.get("/availability", response_model=AvailabilityOut)
def availability(
    day: Optional[date] = Query(None, alias="date"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    d = day or date.today()
    machines = build_availability(_bookings_for(db, d), user_id=current_user.id)
    booked = sum(m["booked"] for m in machines)
    free = sum(m["free"] for m in machines)
    return AvailabilityOut(date=d, machines=machines, free=free, booked=booked)


@router.post("/bookings", response_model=BookingOut, status_code=status.HTTP_201_CREATED)
def book(
    payload: BookingIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_guest),
):
    if payload.machine not in MACHINES:
        raise HTTPException(status_code=400, detail=f"Machine must be one of {list(MACHINES)}")
    if payload.time_slot not in TIME_SLOTS:
        raise HTTPException(status_code=400, detail="Unknown time slot")
    if not in_booking_window(payload.booking_date, date.today()):
        raise HTTPException(status_code=400, detail="Bookings are open for the next 7 days only")

    booking = LaundryBooking(
        user_id=current_user.id,
        machine=payload.machine,
        time_slot=payload.time_slot,
        booking_date=payload.booking_date,
        status="booked",
    )
    db.add(booking)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        log.warning(
            "Slot conflict: %s %s on %s requested by %s",
            payload.machine, payload.time_slot, payload.booking_date, current_user.id,
        )
        raise HTTPException(status_code=409, detail="Slot already booked")
    db.refresh(booking)

    log.info(
        "Laundry booked: %s %s on %s by %s",
        booking.machine, booking.time_slot, booking.booking_date, current_user.id,
    )
    return _serialize(booking)


@router.get("/bookings/mine", response_model=List[BookingOut])
def my_bookings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rows = (
        db.query(LaundryBooking)
        .filter(LaundryBooking.user_id == current_user.id)
        .filter(LaundryBooking.booking_date >= date.today())
        .order_by(LaundryBooking.booking_date.asc(), LaundryBooking.time_slot.asc())
        .all()
    )
    return [_serialize(b) for b in rows]


@router.get("/bookings", response_model=List[BookingOut])
def bookings_for_day(
    day: Optional[date] = Query(None, alias="date"),
    db: Session = Depends(get_db),
    _: User = Depends(require_head),
):
    d = day or date.today()
    rows = sorted(_bookings_for(db, d), key=lambda b: (b.machine, b.time_slot))
    return [_serialize(b) for b in rows]


@router.delete("/bookings/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
def cancel_booking(
    booking_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    booking = db.query(LaundryBooking).filter(LaundryBooking.id == booking_id).first()
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")

    # Guests may only cancel their own slots
    if current_user.role != "head" and booking.user_id != current_user.id:
        raise HTTPException(status_code=403, detail="Not authorized")

    db.delete(booking)
    db.commit()
    log.info("Laundry booking %s cancelled by %s", booking_id, current_user.id)
