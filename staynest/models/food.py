from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    Column,
    Integer,
    String,
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    JSON,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from ..db import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class DailyMenu(Base):
    __tablename__ = "daily_menus"

    id = Column(String, primary_key=True, default=_uuid)
    date = Column(Date, unique=True, nullable=False, index=True)

    # Each meal is a JSON list of item names, or NULL when not served.
    breakfast = Column(JSON, nullable=True)
    lunch = Column(JSON, nullable=True)
    snacks = Column(JSON, nullable=True)
    dinner = Column(JSON, nullable=True)

    created_by = Column(String, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class FoodPoll(Base):
    __tablename__ = "food_polls"

    id = Column(String, primary_key=True, default=_uuid)
    question = Column(String, nullable=False)
    options = Column(JSON, nullable=False)  # list[str]
    is_active = Column(Boolean, nullable=False, default=True)
    ends_at = Column(DateTime, nullable=True)

    created_by = Column(String, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    votes = relationship(
        "FoodPollVote",
        back_populates="poll",
        cascade="all, delete-orphan",
    )
    ratings = relationship(
        "FoodPollRating",
        back_populates="poll",
        cascade="all, delete-orphan",
    )


class FoodPollVote(Base):
    __tablename__ = "food_poll_votes"
    __table_args__ = (UniqueConstraint("poll_id", "user_id", name="uq_poll_vote_user"),)

    id = Column(Integer, primary_key=True, index=True)
    poll_id = Column(String, ForeignKey("food_polls.id"), nullable=False, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    option = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    poll = relationship("FoodPoll", back_populates="votes")


class FoodPollRating(Base):
    __tablename__ = "food_poll_ratings"
    __table_args__ = (UniqueConstraint("poll_id", "user_id", name="uq_poll_rating_user"),)

    id = Column(Integer, primary_key=True, index=True)
    poll_id = Column(String, ForeignKey("food_polls.id"), nullable=False, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    rating = Column(Integer, nullable=False)  # 1..5
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    poll = relationship("FoodPoll", back_populates="ratings")
