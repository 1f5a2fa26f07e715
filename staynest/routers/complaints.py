# staynest/routers/complaints.py
from __future__ import annotations

import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import require_guest, require_head
from ..models import Complaint, User
from ..schemas.facility import ComplaintIn, ComplaintOut, StatusIn
from ..utils.workflow import COMPLAINT_TRANSITIONS, apply_status

router = APIRouter(prefix="/complaints", tags=["Complaints"])
log = logging.getLogger(__name__)


def _serialize(c: Complaint) -> ComplaintOut:
    return ComplaintOut(
        id=c.id,
        user_id=c.user_id,
        room_number=c.room_number,
        category=c.category,
        description=c.description,
        status=c.status,
        created_at=c.created_at,
        updated_at=c.updated_at,
        resolved_at=c.resolved_at,
        resident_name=c.user.name if c.user else None,
    )


@router.post("", response_model=ComplaintOut, status_code=status.HTTP_201_CREATED)
def file_complaint(
    payload: ComplaintIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_guest),
):
    complaint = Complaint(
        user_id=current_user.id,
        room_number=payload.room_number,
        category=payload.category,
        description=payload.description,
        status="pending",
    )
    db.add(complaint)
    db.commit()
    db.refresh(complaint)
    log.info("Complaint %s filed by %s (room %s)", complaint.id, current_user.id, complaint.room_number)
    return _serialize(complaint)


@router.get("/mine", response_model=List[ComplaintOut])
def my_complaints(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_guest),
):
    rows = (
        db.query(Complaint)
        .filter(Complaint.user_id == current_user.id)
        .order_by(Complaint.created_at.desc())
        .all()
    )
    return [_serialize(c) for c in rows]


@router.get("", response_model=List[ComplaintOut])
def list_complaints(
    complaint_status: Optional[Literal["pending", "in_progress", "resolved"]] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    _: User = Depends(require_head),
):
    q = db.query(Complaint).order_by(Complaint.created_at.desc())
    if complaint_status:
        q = q.filter(Complaint.status == complaint_status)
    return [_serialize(c) for c in q.all()]


@router.patch("/{complaint_id}/status", response_model=ComplaintOut)
def update_complaint_status(
    complaint_id: str,
    payload: StatusIn,
    db: Session = Depends(get_db),
    _: User = Depends(require_head),
):
    complaint = db.query(Complaint).filter(Complaint.id == complaint_id).first()
    if not complaint:
        raise HTTPException(status_code=404, detail="Complaint not found")

    if apply_status(complaint, payload.status, COMPLAINT_TRANSITIONS):
        db.commit()
        db.refresh(complaint)
        log.info("Complaint %s -> %s", complaint.id, complaint.status)
    return _serialize(complaint)
