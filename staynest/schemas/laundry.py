from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel


class DayOut(BaseModel):
    date: date
    label: str


class SlotOut(BaseModel):
    time_slot: str
    is_peak: bool


class CatalogOut(BaseModel):
    machines: List[str]
    slots: List[SlotOut]
    peak_hours: str = "7-9 AM and 5-8 PM"


class SlotStateOut(SlotOut):
    is_booked: bool
    is_mine: bool = False


class MachineAvailability(BaseModel):
    machine: str
    free: int
    booked: int
    slots: List[SlotStateOut]


class AvailabilityOut(BaseModel):
    date: date
    machines: List[MachineAvailability]
    free: int
    booked: int


class BookingIn(BaseModel):
    machine: str
    time_slot: str
    booking_date: date


class BookingOut(BaseModel):
    id: str
    user_id: str
    machine: str
    time_slot: str
    booking_date: date
    status: str
    is_peak: bool = False
    created_at: Optional[datetime] = None
    resident_name: Optional[str] = None
    room_number: Optional[str] = None
    model_config = {"from_attributes": True}
