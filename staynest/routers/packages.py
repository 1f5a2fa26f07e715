# staynest/routers/packages.py
from __future__ import annotations

import calendar
import logging
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import get_current_user, require_guest
from ..models import PackageSubscription, User
from ..schemas.facility import PackagePlanOut, SubscribeIn, SubscriptionOut

router = APIRouter(prefix="/packages", tags=["Packages"])
log = logging.getLogger(__name__)

PLANS = {
    "Normal": {
        "price": 8000,
        "yearly_price": 88000,
        "popular": False,
        "features": [
            "Basic room amenities",
            "2 meals per day",
            "Common WiFi access",
            "Weekly cleaning",
            "Shared bathroom",
        ],
    },
    "Mid": {
        "price": 12000,
        "yearly_price": 132000,
        "popular": True,
        "features": [
            "AC room with balcony",
            "3 meals per day",
            "High-speed WiFi",
            "Daily cleaning",
            "Attached bathroom",
            "Laundry service (2x/week)",
        ],
    },
    "Premium": {
        "price": 18000,
        "yearly_price": 198000,
        "popular": False,
        "features": [
            "Deluxe AC room",
            "All meals + snacks",
            "Premium WiFi + TV",
            "Daily housekeeping",
            "Private bathroom",
            "Unlimited laundry",
            "24/7 room service",
            "Gym access",
        ],
    },
}


def add_months(d: date, months: int) -> date:
    """Same day ``months`` later, clamped to the end of shorter months."""
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


@router.get("", response_model=List[PackagePlanOut])
def catalog(_: User = Depends(get_current_user)):
    return [PackagePlanOut(name=name, **plan) for name, plan in PLANS.items()]


@router.post("/subscribe", response_model=SubscriptionOut, status_code=status.HTTP_201_CREATED)
def subscribe(
    payload: SubscribeIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_guest),
):
    plan = PLANS[payload.package_type]
    yearly = payload.billing_cycle == "yearly"
    start = date.today()

    # Only one active plan per resident.
    (
        db.query(PackageSubscription)
        .filter(
            PackageSubscription.user_id == current_user.id,
            PackageSubscription.status == "active",
        )
        .update({"status": "cancelled"}, synchronize_session=False)
    )

    sub = PackageSubscription(
        user_id=current_user.id,
        package_type=payload.package_type,
        billing_cycle=payload.billing_cycle,
        payment_method=payload.payment_method,
        amount=float(plan["yearly_price"] if yearly else plan["price"]),
        start_date=start,
        end_date=add_months(start, 12 if yearly else 1),
        status="active",
    )
    db.add(sub)
    db.commit()
    db.refresh(sub)
    log.info("%s subscribed to %s (%s)", current_user.id, sub.package_type, sub.billing_cycle)
    return sub


@router.get("/mine", response_model=List[SubscriptionOut])
def my_subscriptions(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_guest),
):
    return (
        db.query(PackageSubscription)
        .filter(PackageSubscription.user_id == current_user.id)
        .order_by(PackageSubscription.created_at.desc())
        .all()
    )
