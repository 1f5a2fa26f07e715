# staynest/schemas/food.py
from datetime import date, datetime
from typing import Dict, List, Optional, Union
from pydantic import BaseModel, Field, field_validator

MealIn = Union[str, List[str], None]


class MenuIn(BaseModel):
    breakfast: MealIn = None
    lunch: MealIn = None
    snacks: MealIn = None
    dinner: MealIn = None


class MenuOut(BaseModel):
    id: str
    date: date
    breakfast: Optional[List[str]] = None
    lunch: Optional[List[str]] = None
    snacks: Optional[List[str]] = None
    dinner: Optional[List[str]] = None
    updated_at: Optional[datetime] = None
    model_config = {"from_attributes": True}


class MenuSaved(MenuOut):
    created: bool


class PollIn(BaseModel):
    question: str = Field(min_length=1, max_length=300)
    options: List[str]
    ends_at: Optional[datetime] = None

    @field_validator("question")
    @classmethod
    def _strip_question(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please enter a question")
        return v

    @field_validator("options")
    @classmethod
    def _clean_options(cls, v: List[str]) -> List[str]:
        seen: set[str] = set()
        cleaned: List[str] = []
        for opt in v:
            opt = opt.strip()
            if not opt or opt in seen:
                continue
            seen.add(opt)
            cleaned.append(opt)
        if len(cleaned) < 2:
            raise ValueError("Please enter at least 2 options")
        if len(cleaned) > 6:
            raise ValueError("A poll can have at most 6 options")
        return cleaned


class PollActiveIn(BaseModel):
    is_active: bool


class VoteIn(BaseModel):
    option: str


class RatingIn(BaseModel):
    rating: int = Field(ge=1, le=5)


class RatingBucket(BaseModel):
    rating: int
    count: int


class PollOut(BaseModel):
    id: str
    question: str
    options: List[str]
    is_active: bool
    ends_at: Optional[datetime] = None
    created_at: datetime
    votes: Dict[str, int]
    total_votes: int
    ratings: List[RatingBucket]
    average_rating: float
    user_vote: Optional[str] = None
    user_rating: Optional[int] = None
