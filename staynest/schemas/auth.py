# staynest/schemas/auth.py
from __future__ import annotations
from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

MOBILE_PATTERN = r"^[0-9]{10}$"


def clean_detail(value: Optional[str]) -> Optional[str]:
    value = (value or "").strip()
    return value or None


def occupation_problem(
    occupation: Optional[str],
    course: Optional[str],
    year: Optional[str],
    work_type: Optional[str],
) -> Optional[str]:
    """Message for missing resident details, or None when the profile is complete."""
    if occupation == "student" and (not clean_detail(course) or not clean_detail(year)):
        return "Please select your course and year"
    if occupation == "working" and not clean_detail(work_type):
        return "Please enter your work type"
    return None


class SignupIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    name: str = Field(min_length=1, max_length=120)
    mobile: str = Field(pattern=MOBILE_PATTERN)
    role: Literal["guest", "head"] = "guest"
    occupation: Literal["student", "working"] = "student"
    course: Optional[str] = None
    year: Optional[str] = None
    work_type: Optional[str] = None
    room_number: Optional[str] = None
    invite_code: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please enter your name")
        return v

    @field_validator("course", "year", "work_type")
    @classmethod
    def _strip_details(cls, v: Optional[str]) -> Optional[str]:
        return clean_detail(v)

    @model_validator(mode="after")
    def _occupation_details(self) -> "SignupIn":
        # Heads don't fill in resident details.
        if self.role != "guest":
            return self
        problem = occupation_problem(self.occupation, self.course, self.year, self.work_type)
        if problem:
            raise ValueError(problem)
        return self


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class ProfileOut(BaseModel):
    user_id: str
    name: str
    mobile: str
    occupation: str
    course: Optional[str] = None
    year: Optional[str] = None
    work_type: Optional[str] = None
    room_number: Optional[str] = None
    photo_url: Optional[str] = None
    model_config = {"from_attributes": True}


class UserOut(BaseModel):
    id: str
    email: EmailStr
    role: str
    is_active: bool
    created_at: datetime
    profile: Optional[ProfileOut] = None
    model_config = {
        "from_attributes": True,
    }


class ProfileUpdateIn(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=120)
    mobile: Optional[str] = Field(None, pattern=MOBILE_PATTERN)
    room_number: Optional[str] = None
    course: Optional[str] = None
    year: Optional[str] = None
    work_type: Optional[str] = None


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class TokenPayload(BaseModel):
    sub: str
    role: str
    exp: int
