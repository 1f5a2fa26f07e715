# staynest/utils/polls.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

RATING_SCALE = (1, 2, 3, 4, 5)


def vote_counts(options: Iterable[str], votes: Iterable) -> Dict[str, int]:
    """Votes per option; every option appears, votes for unknown options are dropped."""
    counts = {opt: 0 for opt in options}
    for v in votes:
        if v.option in counts:
            counts[v.option] += 1
    return counts


def rating_histogram(ratings: Iterable) -> List[Dict[str, int]]:
    buckets = {r: 0 for r in RATING_SCALE}
    for r in ratings:
        if r.rating in buckets:
            buckets[r.rating] += 1
    return [{"rating": r, "count": c} for r, c in buckets.items()]


def average_rating(histogram: List[Dict[str, int]]) -> float:
    total = sum(b["rating"] * b["count"] for b in histogram)
    count = sum(b["count"] for b in histogram)
    return round(total / count, 1) if count else 0.0


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def is_open(poll, now: Optional[datetime] = None) -> bool:
    now = now or datetime.utcnow()
    if not poll.is_active:
        return False
    return poll.ends_at is None or poll.ends_at > now


def summarize(poll, user_id: Optional[str] = None) -> Dict:
    options = list(poll.options or [])
    votes = vote_counts(options, poll.votes)
    hist = rating_histogram(poll.ratings)
    user_vote = next((v.option for v in poll.votes if user_id and v.user_id == user_id), None)
    user_rating = next((r.rating for r in poll.ratings if user_id and r.user_id == user_id), None)
    return {
        "id": poll.id,
        "question": poll.question,
        "options": options,
        "is_active": bool(poll.is_active),
        "ends_at": poll.ends_at,
        "created_at": poll.created_at,
        "votes": votes,
        "total_votes": sum(votes.values()),
        "ratings": hist,
        "average_rating": average_rating(hist),
        "user_vote": user_vote,
        "user_rating": user_rating,
    }
