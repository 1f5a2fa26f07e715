# staynest/routers/polls.py
from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from ..db import get_db
from ..deps import get_current_user, require_guest, require_head
from ..models import FoodPoll, FoodPollRating, FoodPollVote, User
from ..schemas.food import PollActiveIn, PollIn, PollOut, RatingIn, VoteIn
from ..utils.polls import is_open, summarize, to_naive_utc

router = APIRouter(prefix="/polls", tags=["Food Polls"])
log = logging.getLogger(__name__)


def _load_poll(db: Session, poll_id: str) -> FoodPoll:
    poll = (
        db.query(FoodPoll)
        .options(selectinload(FoodPoll.votes), selectinload(FoodPoll.ratings))
        .filter(FoodPoll.id == poll_id)
        .first()
    )
    if not poll:
        raise HTTPException(status_code=404, detail="Poll not found")
    return poll


def _upsert_response(db: Session, model, poll_id: str, user_id: str, **values) -> None:
    """
    One row per (poll, user). Update it if present, otherwise insert; an insert
    that loses a race against the unique constraint falls back to the update.
    """
    row = db.query(model).filter(model.poll_id == poll_id, model.user_id == user_id).first()
    if row is None:
        db.add(model(poll_id=poll_id, user_id=user_id, **values))
        try:
            db.commit()
            return
        except IntegrityError:
            db.rollback()
            row = db.query(model).filter(model.poll_id == poll_id, model.user_id == user_id).one()
    for key, value in values.items():
        setattr(row, key, value)
    db.commit()


@router.post("", response_model=PollOut, status_code=status.HTTP_201_CREATED)
def create_poll(
    payload: PollIn,
    db: Session = Depends(get_db),
    head: User = Depends(require_head),
):
    poll = FoodPoll(
        question=payload.question,
        options=payload.options,
        ends_at=to_naive_utc(payload.ends_at),
        is_active=True,
        created_by=head.id,
    )
    db.add(poll)
    db.commit()
    log.info("Poll %s created with %d options", poll.id, len(payload.options))
    return summarize(_load_poll(db, poll.id), head.id)


@router.get("", response_model=List[PollOut])
def list_polls(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    polls = (
        db.query(FoodPoll)
        .options(selectinload(FoodPoll.votes), selectinload(FoodPoll.ratings))
        .order_by(FoodPoll.created_at.desc())
        .all()
    )
    return [summarize(p, current_user.id) for p in polls]


@router.patch("/{poll_id}/active", response_model=PollOut)
def set_active(
    poll_id: str,
    payload: PollActiveIn,
    db: Session = Depends(get_db),
    head: User = Depends(require_head),
):
    poll = _load_poll(db, poll_id)
    poll.is_active = payload.is_active
    db.commit()
    log.info("Poll %s %s", poll_id, "activated" if payload.is_active else "deactivated")
    return summarize(_load_poll(db, poll_id), head.id)


@router.put("/{poll_id}/vote", response_model=PollOut)
def vote(
    poll_id: str,
    payload: VoteIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_guest),
):
    poll = _load_poll(db, poll_id)
    if not is_open(poll):
        raise HTTPException(status_code=400, detail="Poll is closed")
    if payload.option not in (poll.options or []):
        raise HTTPException(status_code=400, detail="Option is not part of this poll")

    _upsert_response(db, FoodPollVote, poll_id, current_user.id, option=payload.option)
    db.expire_all()
    return summarize(_load_poll(db, poll_id), current_user.id)


@router.put("/{poll_id}/rating", response_model=PollOut)
def rate(
    poll_id: str,
    payload: RatingIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_guest),
):
    poll = _load_poll(db, poll_id)
    if not is_open(poll):
        raise HTTPException(status_code=400, detail="Poll is closed")

    _upsert_response(db, FoodPollRating, poll_id, current_user.id, rating=payload.rating)
    db.expire_all()
    return summarize(_load_poll(db, poll_id), current_user.id)
