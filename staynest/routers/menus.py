# staynest/routers/menus.py
from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..db import get_db
from ..deps import get_current_user, require_head
from ..models import DailyMenu, User
from ..schemas.food import MenuIn, MenuOut, MenuSaved
from ..utils.menu import MEALS, parse_items

router = APIRouter(prefix="/menus", tags=["Menu"])
log = logging.getLogger(__name__)

RECENT_MENUS = 14


def menu_for(db: Session, day: date) -> Optional[DailyMenu]:
    return db.query(DailyMenu).filter(DailyMenu.date == day).first()


@router.get("", response_model=List[MenuOut])
def recent_menus(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    return (
        db.query(DailyMenu)
        .order_by(DailyMenu.date.desc())
        .limit(RECENT_MENUS)
        .all()
    )


@router.get("/today", response_model=Optional[MenuOut])
def today_menu(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    return menu_for(db, date.today())


@router.get("/{day}", response_model=MenuOut)
def menu_on(
    day: date,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    menu = menu_for(db, day)
    if not menu:
        raise HTTPException(status_code=404, detail="No menu for this date")
    return menu


@router.put("/{day}", response_model=MenuSaved)
def save_menu(
    day: date,
    payload: MenuIn,
    db: Session = Depends(get_db),
    head: User = Depends(require_head),
):
    menu = menu_for(db, day)
    created = menu is None
    if created:
        menu = DailyMenu(date=day, created_by=head.id)
        db.add(menu)

    for meal in MEALS:
        setattr(menu, meal, parse_items(getattr(payload, meal)))

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Menu for this date was saved concurrently, retry")
    db.refresh(menu)
    log.info("Menu for %s %s", day, "created" if created else "updated")
    return MenuSaved(**MenuOut.model_validate(menu).model_dump(), created=created)
