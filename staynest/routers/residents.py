# staynest/routers/residents.py
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import get_current_user, require_head
from ..models.user import User, Profile
from ..schemas.facility import (
    ResidentDirectoryOut,
    ResidentOut,
    RoomAssignIn,
    SuspendIn,
)

router = APIRouter(prefix="/residents", tags=["Residents"])
log = logging.getLogger(__name__)


def resident_out(profile: Profile) -> ResidentOut:
    user = profile.user
    return ResidentOut(
        user_id=profile.user_id,
        email=user.email if user else None,
        name=profile.name,
        mobile=profile.mobile,
        occupation=profile.occupation,
        course=profile.course,
        year=profile.year,
        work_type=profile.work_type,
        room_number=profile.room_number,
        photo_url=profile.photo_url,
        is_active=bool(user.is_active) if user else True,
    )


def guest_profiles(db: Session):
    return db.query(Profile).join(User, Profile.user_id == User.id).filter(User.role == "guest")


def get_guest(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == user_id, User.role == "guest").first()
    if not user:
        raise HTTPException(status_code=404, detail="Resident not found")
    return user


@router.get("", response_model=ResidentDirectoryOut)
def directory(
    q: Optional[str] = Query(None, description="name / room / mobile search"),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    base = guest_profiles(db)
    total = base.count()
    students = base.filter(Profile.occupation == "student").count()
    working = base.filter(Profile.occupation == "working").count()

    rows = base
    if q and q.strip():
        term = q.strip().lower()
        rows = rows.filter(
            or_(
                func.lower(Profile.name).contains(term),
                func.lower(Profile.room_number).contains(term),
                Profile.mobile.contains(term),
            )
        )
    # rooms first, unassigned last
    rows = rows.order_by(Profile.room_number.is_(None), Profile.room_number.asc(), Profile.name.asc())

    return ResidentDirectoryOut(
        total=total,
        students=students,
        working=working,
        residents=[resident_out(p) for p in rows.all()],
    )


@router.get("/{user_id}", response_model=ResidentOut)
def resident(
    user_id: str,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    profile = db.query(Profile).filter(Profile.user_id == user_id).first()
    if not profile:
        raise HTTPException(status_code=404, detail="Resident not found")
    return resident_out(profile)


@router.patch("/{user_id}/room", response_model=ResidentOut)
def assign_room(
    user_id: str,
    payload: RoomAssignIn,
    db: Session = Depends(get_db),
    _: User = Depends(require_head),
):
    user = get_guest(db, user_id)
    if user.profile is None:
        raise HTTPException(status_code=404, detail="Resident has no profile")
    user.profile.room_number = payload.room_number.strip()
    db.commit()
    db.refresh(user.profile)
    log.info("Room %s assigned to %s", user.profile.room_number, user_id)
    return resident_out(user.profile)


@router.patch("/{user_id}/status")
def set_active(
    user_id: str,
    payload: SuspendIn,
    db: Session = Depends(get_db),
    head: User = Depends(require_head),
):
    if user_id == head.id:
        raise HTTPException(status_code=400, detail="You cannot change your own status")
    user = get_guest(db, user_id)
    user.is_active = payload.is_active
    db.commit()
    log.info("Resident %s is_active=%s", user_id, user.is_active)
    return {"status": "ok", "id": user.id, "is_active": user.is_active}
