# staynest/routers/lost_found.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import get_current_user, require_head
from ..models import LostFoundItem, User
from ..schemas.facility import ClaimIn, LostFoundOut
from ..utils.uploads import save_image
from .residents import get_guest

router = APIRouter(prefix="/lost-found", tags=["Lost & Found"])
log = logging.getLogger(__name__)


def _serialize(item: LostFoundItem) -> LostFoundOut:
    return LostFoundOut(
        id=item.id,
        user_id=item.user_id,
        item_name=item.item_name,
        description=item.description or "",
        location_found=item.location_found,
        image_url=item.image_url,
        status=item.status,
        created_at=item.created_at,
        claimed_by=item.claimed_by,
        claimed_at=item.claimed_at,
        reporter_name=item.reporter.name if item.reporter else None,
        claimant_name=item.claimant.name if item.claimant else None,
    )


# -------------------------------------------------------------
# Anyone logged in can report a found item, optionally with a photo
# -------------------------------------------------------------
@router.post("", response_model=LostFoundOut, status_code=status.HTTP_201_CREATED)
async def report_item(
    item_name: str = Form(...),
    location_found: str = Form(...),
    description: str = Form(""),
    file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not item_name.strip() or not location_found.strip():
        raise HTTPException(status_code=400, detail="Please fill required fields")

    image_url = save_image(file, prefix="lostfound")

    item = LostFoundItem(
        user_id=current_user.id,
        item_name=item_name.strip(),
        description=description.strip(),
        location_found=location_found.strip(),
        image_url=image_url,
        status="found",
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    log.info("Found item %s reported by %s", item.id, current_user.id)
    return _serialize(item)


@router.get("", response_model=List[LostFoundOut])
def list_items(
    item_status: Optional[Literal["found", "claimed"]] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    q = db.query(LostFoundItem).order_by(LostFoundItem.created_at.desc())
    if item_status:
        q = q.filter(LostFoundItem.status == item_status)
    return [_serialize(i) for i in q.all()]


# -------------------------------------------------------------
# Head hands an item over to the resident who claimed it
# -------------------------------------------------------------
@router.post("/{item_id}/claim", response_model=LostFoundOut)
def approve_claim(
    item_id: str,
    payload: ClaimIn,
    db: Session = Depends(get_db),
    _: User = Depends(require_head),
):
    item = db.query(LostFoundItem).filter(LostFoundItem.id == item_id).first()
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")
    if item.status == "claimed":
        raise HTTPException(status_code=400, detail="Item already claimed")

    claimant = get_guest(db, payload.claimant_id)

    item.status = "claimed"
    item.claimed_by = claimant.id
    item.claimed_at = datetime.utcnow()
    db.commit()
    db.refresh(item)
    log.info("Item %s claimed by %s", item.id, claimant.id)
    return _serialize(item)
