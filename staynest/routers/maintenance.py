# staynest/routers/maintenance.py
from __future__ import annotations

import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import require_guest, require_head
from ..models import MaintenanceRequest, User
from ..schemas.facility import (
    MaintenanceBoardOut,
    MaintenanceIn,
    MaintenanceOut,
    StatusIn,
)
from ..utils.workflow import MAINTENANCE_TRANSITIONS, apply_status

router = APIRouter(prefix="/maintenance", tags=["Maintenance"])
log = logging.getLogger(__name__)


def _serialize(r: MaintenanceRequest) -> MaintenanceOut:
    return MaintenanceOut(
        id=r.id,
        user_id=r.user_id,
        room_number=r.room_number,
        category=r.category,
        description=r.description,
        priority=r.priority,
        status=r.status,
        created_at=r.created_at,
        updated_at=r.updated_at,
        resolved_at=r.resolved_at,
        resident_name=r.user.name if r.user else None,
    )


@router.post("", response_model=MaintenanceOut, status_code=status.HTTP_201_CREATED)
def submit_request(
    payload: MaintenanceIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_guest),
):
    req = MaintenanceRequest(
        user_id=current_user.id,
        room_number=payload.room_number,
        category=payload.category,
        description=payload.description,
        priority=payload.priority,
        status="pending",
    )
    db.add(req)
    db.commit()
    db.refresh(req)
    log.info("Maintenance request %s (%s, %s) from %s", req.id, req.category, req.priority, current_user.id)
    return _serialize(req)


@router.get("/mine", response_model=List[MaintenanceOut])
def my_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_guest),
):
    rows = (
        db.query(MaintenanceRequest)
        .filter(MaintenanceRequest.user_id == current_user.id)
        .order_by(MaintenanceRequest.created_at.desc())
        .all()
    )
    return [_serialize(r) for r in rows]


@router.get("", response_model=MaintenanceBoardOut)
def board(
    request_status: Optional[Literal["pending", "in_progress", "resolved"]] = Query(None, alias="status"),
    q: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    _: User = Depends(require_head),
):
    counts = {"pending": 0, "in_progress": 0, "resolved": 0}
    for st, n in (
        db.query(MaintenanceRequest.status, func.count(MaintenanceRequest.id))
        .group_by(MaintenanceRequest.status)
        .all()
    ):
        counts[st] = int(n)

    rows = db.query(MaintenanceRequest).order_by(MaintenanceRequest.created_at.desc())
    if request_status:
        rows = rows.filter(MaintenanceRequest.status == request_status)
    if q and q.strip():
        term = q.strip().lower()
        rows = rows.filter(
            or_(
                func.lower(MaintenanceRequest.room_number).contains(term),
                func.lower(MaintenanceRequest.category).contains(term),
                func.lower(MaintenanceRequest.description).contains(term),
            )
        )
    return MaintenanceBoardOut(counts=counts, requests=[_serialize(r) for r in rows.all()])


@router.patch("/{request_id}/status", response_model=MaintenanceOut)
def update_request_status(
    request_id: str,
    payload: StatusIn,
    db: Session = Depends(get_db),
    _: User = Depends(require_head),
):
    req = db.query(MaintenanceRequest).filter(MaintenanceRequest.id == request_id).first()
    if not req:
        raise HTTPException(status_code=404, detail="Request not found")

    if apply_status(req, payload.status, MAINTENANCE_TRANSITIONS):
        db.commit()
        db.refresh(req)
        log.info("Maintenance request %s -> %s", req.id, req.status)
    return _serialize(req)
