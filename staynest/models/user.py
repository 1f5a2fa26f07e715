# staynest/models/user.py
from __future__ import annotations

import uuid

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship, validates

from ..db import Base


ROLES = ("head", "guest")


class User(Base):
    __tablename__ = "users"

    id = Column(
        String,
        primary_key=True,
        index=True,
        default=lambda: str(uuid.uuid4()),
    )
    email = Column(String, unique=True, nullable=False, index=True)
    hashed_password = Column(String, nullable=False)

    # Roles: "head", "guest"
    role = Column(String, nullable=False, default="guest")

    is_active = Column(Boolean, default=True)
    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    profile = relationship(
        "Profile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )

    @validates("role")
    def normalize_role(self, key, value: str | None) -> str:
        """
        Role strings are stored lower-case; anything empty falls back to guest.
        """
        role = (value or "").strip().lower() or "guest"
        if role not in ROLES:
            raise ValueError(f"Unknown role: {value}")
        return role

    @property
    def name(self) -> str | None:
        return self.profile.name if self.profile else None


class Profile(Base):
    """
    Resident details captured at signup. One per user.
    """

    __tablename__ = "profiles"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id"), unique=True, nullable=False, index=True)

    name = Column(String, nullable=False)
    mobile = Column(String, nullable=False)
    occupation = Column(String, nullable=False, default="student")  # student / working

    course = Column(String, nullable=True)
    year = Column(String, nullable=True)
    work_type = Column(String, nullable=True)

    room_number = Column(String, nullable=True)
    photo_url = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    user = relationship("User", back_populates="profile")
