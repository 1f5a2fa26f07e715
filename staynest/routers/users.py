# staynest/routers/users.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import get_current_user
from ..models.user import User, Profile
from ..schemas.auth import ProfileUpdateIn, UserOut, clean_detail, occupation_problem
from ..utils.uploads import save_image

router = APIRouter(prefix="/users", tags=["users"])
log = logging.getLogger(__name__)


def _own_profile(db: Session, user: User) -> Profile:
    if user.profile is None:
        # Accounts created outside signup (e.g. the seeded head) may lack one.
        user.profile = Profile(name=user.email.split("@")[0], mobile="", occupation="working")
        db.flush()
    return user.profile


@router.get("/me", response_model=UserOut)
def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.patch("/me", response_model=UserOut)
def update_me(
    payload: ProfileUpdateIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    profile = _own_profile(db, current_user)
    changes = payload.model_dump(exclude_unset=True)

    if "name" in changes:
        name = (changes["name"] or "").strip()
        if not name:
            raise HTTPException(status_code=400, detail="Name cannot be empty")
        changes["name"] = name
    for field in ("room_number", "course", "year", "work_type"):
        if field in changes:
            changes[field] = clean_detail(changes[field])
    if "mobile" in changes and changes["mobile"] is None:
        changes.pop("mobile")

    if current_user.role == "guest":
        merged = {f: getattr(profile, f) for f in ("course", "year", "work_type")}
        merged.update({k: v for k, v in changes.items() if k in merged})
        problem = occupation_problem(profile.occupation, **merged)
        if problem:
            raise HTTPException(status_code=400, detail=problem)

    for field, value in changes.items():
        setattr(profile, field, value)

    db.commit()
    db.refresh(current_user)
    return current_user


@router.post("/me/photo", response_model=UserOut)
def upload_photo(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    profile = _own_profile(db, current_user)
    profile.photo_url = save_image(file, prefix=f"profile_{current_user.id[:8]}")
    db.commit()
    db.refresh(current_user)
    log.info("Profile photo updated for %s", current_user.id)
    return current_user
