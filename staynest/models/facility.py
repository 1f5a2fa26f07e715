# staynest/models/facility.py
from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    Date,
    DateTime,
    ForeignKey,
    Text,
)
from sqlalchemy.orm import relationship

from ..db import Base


def _uuid() -> str:
    return str(uuid.uuid4())


# ---------- Bills ----------

class Bill(Base):
    """
    Utility / rent bill posted by the head for one guest.
    """

    __tablename__ = "bills"

    id = Column(String, primary_key=True, default=_uuid)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)

    bill_type = Column(String, nullable=False)   # electricity / water / rent / other
    amount = Column(Float, nullable=False)
    month = Column(String, nullable=False)       # "January" .. "December"
    year = Column(Integer, nullable=False)
    due_date = Column(Date, nullable=False)

    # pending → paid
    status = Column(String, nullable=False, default="pending")

    created_by = Column(String, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", foreign_keys=[user_id], lazy="joined")


# ---------- Packages ----------

class PackageSubscription(Base):
    __tablename__ = "packages"

    id = Column(String, primary_key=True, default=_uuid)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)

    package_type = Column(String, nullable=False)     # Normal / Mid / Premium
    billing_cycle = Column(String, nullable=False)    # monthly / yearly
    payment_method = Column(String, nullable=False)   # upi / card
    amount = Column(Float, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)

    # active / cancelled
    status = Column(String, nullable=False, default="active")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


# ---------- Complaints & maintenance ----------

class Complaint(Base):
    __tablename__ = "complaints"

    id = Column(String, primary_key=True, default=_uuid)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)

    room_number = Column(String, nullable=False)
    category = Column(String, nullable=False)
    description = Column(Text, nullable=False)

    # pending → in_progress → resolved
    status = Column(String, nullable=False, default="pending")

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )
    resolved_at = Column(DateTime, nullable=True)

    user = relationship("User", lazy="joined")


class MaintenanceRequest(Base):
    """
    Room repair request. Same lifecycle as a complaint but can be reopened.
    """

    __tablename__ = "maintenance_requests"

    id = Column(String, primary_key=True, default=_uuid)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)

    room_number = Column(String, nullable=False)
    category = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    priority = Column(String, nullable=False, default="medium")  # low / medium / high / urgent

    status = Column(String, nullable=False, default="pending")

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )
    resolved_at = Column(DateTime, nullable=True)

    user = relationship("User", lazy="joined")


# ---------- Lost & found ----------

class LostFoundItem(Base):
    __tablename__ = "lost_found_items"

    id = Column(String, primary_key=True, default=_uuid)
    # reporter
    user_id = Column(String, ForeignKey("users.id"), nullable=False)

    item_name = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    location_found = Column(String, nullable=False)
    image_url = Column(String, nullable=True)

    # found → claimed
    status = Column(String, nullable=False, default="found")
    claimed_by = Column(String, ForeignKey("users.id"), nullable=True)
    claimed_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    reporter = relationship("User", foreign_keys=[user_id], lazy="joined")
    claimant = relationship("User", foreign_keys=[claimed_by], lazy="joined")
