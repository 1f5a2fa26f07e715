from __future__ import annotations

import uuid

from sqlalchemy import Column, String, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..db import Base


class LaundryBooking(Base):
    __tablename__ = "laundry_bookings"
    # One row per (machine, slot, day); the loser of a concurrent insert gets an IntegrityError.
    __table_args__ = (
        UniqueConstraint("machine", "time_slot", "booking_date", name="uq_laundry_machine_slot_date"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)

    machine = Column(String, nullable=False)
    time_slot = Column(String, nullable=False)
    booking_date = Column(Date, nullable=False, index=True)
    status = Column(String, nullable=False, default="booked")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", lazy="joined")
