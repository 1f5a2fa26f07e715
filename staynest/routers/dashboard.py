# staynest/routers/dashboard.py
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import require_guest, require_head
from ..models import (
    Bill,
    Complaint,
    FoodPoll,
    LaundryBooking,
    LostFoundItem,
    MaintenanceRequest,
    User,
)
from ..schemas.food import MenuOut
from ..schemas.laundry import BookingOut
from ..utils.slots import is_peak
from .menus import menu_for

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


# ---------- Schemas ----------
class HeadStats(BaseModel):
    total_residents: int
    pending_complaints: int
    unclaimed_items: int
    pending_bills: int
    active_polls: int
    pending_maintenance: int


class GuestHome(BaseModel):
    greeting: str
    name: str
    today_menu: Optional[MenuOut] = None
    next_laundry: Optional[BookingOut] = None
    pending_bills: int
    pending_amount: float
    open_complaints: int


# ---------- Helpers ----------
def greeting_for(hour: int) -> str:
    if hour < 12:
        return "Good Morning"
    if hour < 17:
        return "Good Afternoon"
    return "Good Evening"


# ---------- Routes ----------
@router.get("/head", response_model=HeadStats)
def head_stats(
    db: Session = Depends(get_db),
    _: User = Depends(require_head),
):
    return HeadStats(
        total_residents=db.query(User).filter(User.role == "guest").count(),
        pending_complaints=db.query(Complaint).filter(Complaint.status == "pending").count(),
        unclaimed_items=db.query(LostFoundItem).filter(LostFoundItem.status == "found").count(),
        pending_bills=db.query(Bill).filter(Bill.status == "pending").count(),
        active_polls=db.query(FoodPoll).filter(FoodPoll.is_active == True).count(),
        pending_maintenance=db.query(MaintenanceRequest)
        .filter(MaintenanceRequest.status == "pending")
        .count(),
    )


@router.get("/guest", response_model=GuestHome)
def guest_home(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_guest),
):
    today = date.today()

    nxt = (
        db.query(LaundryBooking)
        .filter(LaundryBooking.user_id == current_user.id)
        .filter(LaundryBooking.booking_date >= today)
        .order_by(LaundryBooking.booking_date.asc(), LaundryBooking.time_slot.asc())
        .first()
    )
    next_laundry = None
    if nxt:
        next_laundry = BookingOut(
            id=nxt.id,
            user_id=nxt.user_id,
            machine=nxt.machine,
            time_slot=nxt.time_slot,
            booking_date=nxt.booking_date,
            status=nxt.status,
            is_peak=is_peak(nxt.time_slot),
            created_at=nxt.created_at,
        )

    pending_count, pending_amount = (
        db.query(func.count(Bill.id), func.coalesce(func.sum(Bill.amount), 0.0))
        .filter(Bill.user_id == current_user.id, Bill.status == "pending")
        .one()
    )
    open_complaints = (
        db.query(Complaint)
        .filter(Complaint.user_id == current_user.id, Complaint.status != "resolved")
        .count()
    )
    menu = menu_for(db, today)

    return GuestHome(
        greeting=greeting_for(datetime.now().hour),
        name=current_user.name or "Guest",
        today_menu=MenuOut.model_validate(menu) if menu else None,
        next_laundry=next_laundry,
        pending_bills=int(pending_count or 0),
        pending_amount=round(float(pending_amount or 0.0), 2),
        open_complaints=open_complaints,
    )
