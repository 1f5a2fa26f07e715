# staynest/models/__init__.py

from .user import User, Profile

from .facility import (
    Bill,
    PackageSubscription,
    Complaint,
    MaintenanceRequest,
    LostFoundItem,
)

from .laundry import LaundryBooking
from .food import DailyMenu, FoodPoll, FoodPollVote, FoodPollRating

__all__ = [
    "User",
    "Profile",
    "Bill",
    "PackageSubscription",
    "Complaint",
    "MaintenanceRequest",
    "LostFoundItem",
    "LaundryBooking",
    "DailyMenu",
    "FoodPoll",
    "FoodPollVote",
    "FoodPollRating",
]
