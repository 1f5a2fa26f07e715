# staynest/routers/auth.py
from __future__ import annotations
import hmac
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..db import get_db
from ..models.user import User, Profile
from ..schemas.auth import SignupIn, UserLogin, UserOut, Token
from ..security import get_password_hash, issue_token, verify_password
from ..config import settings

router = APIRouter(prefix="/auth", tags=["auth"])
log = logging.getLogger(__name__)


def check_invite_code(code: Optional[str]) -> bool:
    """Head signups need the configured invite code; no code configured means no head signups."""
    expected = settings.HEAD_INVITE_CODE
    if not expected or not code:
        return False
    return hmac.compare_digest(code.strip(), expected)


def email_taken(db: Session, email: str) -> bool:
    return db.query(User.id).filter(User.email == email).first() is not None


@router.post("/signup", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def signup(payload: SignupIn, db: Session = Depends(get_db)):
    if payload.role == "head" and not check_invite_code(payload.invite_code):
        log.warning("Head signup refused for %s: bad invite code", payload.email)
        raise HTTPException(status_code=403, detail="Invalid invite code")

    if email_taken(db, payload.email):
        raise HTTPException(status_code=400, detail="Email already registered")

    user = User(
        email=payload.email,
        hashed_password=get_password_hash(payload.password),
        role=payload.role,
        is_active=True,
    )
    is_guest = payload.role == "guest"
    student = is_guest and payload.occupation == "student"
    user.profile = Profile(
        name=payload.name,
        mobile=payload.mobile,
        occupation=payload.occupation if is_guest else "working",
        course=payload.course if student else None,
        year=payload.year if student else None,
        work_type=payload.work_type if is_guest and not student else None,
        room_number=(payload.room_number or "").strip() or None,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with another signup for the same email.
        db.rollback()
        raise HTTPException(status_code=400, detail="Email already registered")
    db.refresh(user)
    log.info("New %s account: %s", user.role, user.email)
    return user


@router.post("/login", response_model=Token)
def login(payload: UserLogin, db: Session = Depends(get_db)):
    user: Optional[User] = db.query(User).filter(User.email == payload.email).first()
    if not user or not verify_password(payload.password, user.hashed_password):
        log.warning("Failed login for %s", payload.email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect email or password")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="Account is inactive")
    log.info("%s logged in as %s", user.email, user.role)
    return Token(access_token=issue_token(user.id, user.role))
