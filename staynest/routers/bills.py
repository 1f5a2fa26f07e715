# staynest/routers/bills.py
from __future__ import annotations

import csv
import io
import logging
from collections import defaultdict
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import require_guest, require_head
from ..models import Bill, User
from ..schemas.facility import BillIn, BillOut, BillStatusIn, MyBillsOut
from .residents import get_guest

router = APIRouter(prefix="/bills", tags=["Bills"])
log = logging.getLogger(__name__)


def _serialize(b: Bill) -> BillOut:
    profile = b.user.profile if b.user else None
    return BillOut(
        id=b.id,
        user_id=b.user_id,
        bill_type=b.bill_type,
        amount=b.amount,
        month=b.month,
        year=b.year,
        due_date=b.due_date,
        status=b.status,
        created_at=b.created_at,
        resident_name=profile.name if profile else None,
        room_number=profile.room_number if profile else None,
    )


@router.post("", response_model=BillOut, status_code=status.HTTP_201_CREATED)
def post_bill(
    payload: BillIn,
    db: Session = Depends(get_db),
    head: User = Depends(require_head),
):
    get_guest(db, payload.user_id)

    bill = Bill(
        user_id=payload.user_id,
        bill_type=payload.bill_type,
        amount=payload.amount,
        month=payload.month,
        year=payload.year,
        due_date=payload.due_date,
        status="pending",
        created_by=head.id,
    )
    db.add(bill)
    db.commit()
    db.refresh(bill)
    log.info("Bill %s posted: %s %.2f for %s", bill.id, bill.bill_type, bill.amount, bill.user_id)
    return _serialize(bill)


@router.get("", response_model=List[BillOut])
def list_bills(
    bill_status: Optional[Literal["pending", "paid"]] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    _: User = Depends(require_head),
):
    q = db.query(Bill).order_by(Bill.created_at.desc())
    if bill_status:
        q = q.filter(Bill.status == bill_status)
    return [_serialize(b) for b in q.all()]


@router.get("/mine", response_model=MyBillsOut)
def my_bills(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_guest),
):
    rows = (
        db.query(Bill)
        .filter(Bill.user_id == current_user.id)
        .order_by(Bill.created_at.desc())
        .all()
    )
    totals: dict[str, float] = defaultdict(float)
    pending = [b for b in rows if b.status == "pending"]
    for b in rows:
        totals[b.bill_type] += b.amount
    return MyBillsOut(
        bills=[_serialize(b) for b in rows],
        totals_by_type=dict(totals),
        pending_total=round(sum(b.amount for b in pending), 2),
        pending_count=len(pending),
    )


@router.get("/export")
def export_bills(
    db: Session = Depends(get_db),
    _: User = Depends(require_head),
):
    rows = db.query(Bill).order_by(Bill.year.desc(), Bill.created_at.desc()).all()

    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(
        ["id", "resident", "room", "bill_type", "amount", "month", "year", "due_date", "status"]
    )
    for b in rows:
        out = _serialize(b)
        writer.writerow(
            [
                out.id,
                out.resident_name or "",
                out.room_number or "",
                out.bill_type,
                f"{out.amount:.2f}",
                out.month,
                out.year,
                out.due_date.isoformat(),
                out.status,
            ]
        )
    buf.seek(0)
    return StreamingResponse(
        iter([buf.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="bills.csv"'},
    )


@router.patch("/{bill_id}/status", response_model=BillOut)
def update_bill_status(
    bill_id: str,
    payload: BillStatusIn,
    db: Session = Depends(get_db),
    _: User = Depends(require_head),
):
    bill = db.query(Bill).filter(Bill.id == bill_id).first()
    if not bill:
        raise HTTPException(status_code=404, detail="Bill not found")

    bill.status = payload.status
    db.commit()
    db.refresh(bill)
    log.info("Bill %s marked %s", bill.id, bill.status)
    return _serialize(bill)
