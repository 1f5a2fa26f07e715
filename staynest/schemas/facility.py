# staynest/schemas/facility.py
from datetime import date, datetime
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field, field_validator

# ---------- Residents ----------

class ResidentOut(BaseModel):
    user_id: str
    email: Optional[str] = None
    name: str
    mobile: str
    occupation: str
    course: Optional[str] = None
    year: Optional[str] = None
    work_type: Optional[str] = None
    room_number: Optional[str] = None
    photo_url: Optional[str] = None
    is_active: bool = True


class ResidentDirectoryOut(BaseModel):
    total: int
    students: int
    working: int
    residents: List[ResidentOut]


class RoomAssignIn(BaseModel):
    room_number: str = Field(min_length=1, max_length=20)


class SuspendIn(BaseModel):
    is_active: bool = Field(..., description="false = suspend, true = re-activate")


# ---------- Bills ----------

BillType = Literal["electricity", "water", "rent", "other"]
BillStatus = Literal["pending", "paid"]
MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


class BillIn(BaseModel):
    user_id: str
    bill_type: BillType
    amount: float = Field(gt=0)
    month: str
    year: int = Field(ge=2000, le=2100)
    due_date: date

    @field_validator("month")
    @classmethod
    def _known_month(cls, v: str) -> str:
        v = v.strip().capitalize()
        if v not in MONTHS:
            raise ValueError("month must be a full month name")
        return v


class BillOut(BaseModel):
    id: str
    user_id: str
    bill_type: str
    amount: float
    month: str
    year: int
    due_date: date
    status: str
    created_at: datetime
    resident_name: Optional[str] = None
    room_number: Optional[str] = None
    model_config = {"from_attributes": True}


class BillStatusIn(BaseModel):
    status: BillStatus


class MyBillsOut(BaseModel):
    bills: List[BillOut]
    totals_by_type: Dict[str, float]
    pending_total: float
    pending_count: int


# ---------- Complaints / maintenance ----------

TicketStatus = Literal["pending", "in_progress", "resolved"]

MAINTENANCE_CATEGORIES = (
    "Electrical",
    "Plumbing",
    "AC/Cooling",
    "Furniture",
    "Cleaning",
    "Internet/WiFi",
    "Door/Lock",
    "Other",
)


class _NonBlank(BaseModel):
    @field_validator("room_number", "category", "description", check_fields=False)
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please fill all fields")
        return v


class ComplaintIn(_NonBlank):
    room_number: str
    category: str
    description: str


class ComplaintOut(BaseModel):
    id: str
    user_id: str
    room_number: str
    category: str
    description: str
    status: str
    created_at: datetime
    updated_at: datetime
    resolved_at: Optional[datetime] = None
    resident_name: Optional[str] = None


class StatusIn(BaseModel):
    status: TicketStatus


class MaintenanceIn(_NonBlank):
    room_number: str
    category: str
    description: str
    priority: Literal["low", "medium", "high", "urgent"] = "medium"

    @field_validator("category")
    @classmethod
    def _known_category(cls, v: str) -> str:
        if v not in MAINTENANCE_CATEGORIES:
            raise ValueError(f"category must be one of {list(MAINTENANCE_CATEGORIES)}")
        return v


class MaintenanceOut(ComplaintOut):
    priority: str


class MaintenanceBoardOut(BaseModel):
    counts: Dict[str, int]
    requests: List[MaintenanceOut]


# ---------- Lost & found ----------

class LostFoundOut(BaseModel):
    id: str
    user_id: str
    item_name: str
    description: str
    location_found: str
    image_url: Optional[str] = None
    status: str
    created_at: datetime
    claimed_by: Optional[str] = None
    claimed_at: Optional[datetime] = None
    reporter_name: Optional[str] = None
    claimant_name: Optional[str] = None


class ClaimIn(BaseModel):
    claimant_id: str


# ---------- Packages ----------

class PackagePlanOut(BaseModel):
    name: str
    price: float
    yearly_price: float
    popular: bool
    features: List[str]


class SubscribeIn(BaseModel):
    package_type: Literal["Normal", "Mid", "Premium"]
    billing_cycle: Literal["monthly", "yearly"] = "monthly"
    payment_method: Literal["upi", "card"] = "upi"


class SubscriptionOut(BaseModel):
    id: str
    package_type: str
    billing_cycle: str
    payment_method: str
    amount: float
    start_date: date
    end_date: date
    status: str
    created_at: datetime
    model_config = {"from_attributes": True}
