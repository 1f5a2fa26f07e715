from __future__ import annotations

import logging
import os

from sqlalchemy.orm import Session

from staynest.db import Base, engine, SessionLocal
from staynest import models  # noqa: F401
from staynest.models.user import User, Profile
from staynest.security import get_password_hash

log = logging.getLogger(__name__)


def seed_head() -> None:
    """Create the first head account from HEAD_EMAIL / HEAD_PASSWORD if it doesn't exist."""
    Base.metadata.create_all(bind=engine)
    head_email = os.getenv("HEAD_EMAIL", "head@staynest.in")
    head_password = os.getenv("HEAD_PASSWORD", "Head123!")

    db: Session = SessionLocal()
    try:
        existing = db.query(User).filter(User.email == head_email).first()
        if existing:
            log.info("Head already exists: %s", head_email)
            return
        head = User(
            email=head_email,
            hashed_password=get_password_hash(head_password),
            role="head",
        )
        head.profile = Profile(
            name=os.getenv("HEAD_NAME", "PG Head"),
            mobile=os.getenv("HEAD_MOBILE", "0000000000"),
            occupation="working",
        )
        db.add(head)
        db.commit()
        log.info("Head user created: %s", head_email)
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    seed_head()
