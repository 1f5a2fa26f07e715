# staynest/utils/workflow.py
from __future__ import annotations

from datetime import datetime
from typing import Dict, FrozenSet

from fastapi import HTTPException

Transitions = Dict[str, FrozenSet[str]]

COMPLAINT_TRANSITIONS: Transitions = {
    "pending": frozenset({"in_progress", "resolved"}),
    "in_progress": frozenset({"pending", "resolved"}),
    "resolved": frozenset(),
}

# Maintenance requests can be reopened after resolution.
MAINTENANCE_TRANSITIONS: Transitions = {
    **COMPLAINT_TRANSITIONS,
    "resolved": frozenset({"pending", "in_progress"}),
}


def apply_status(record, new_status: str, transitions: Transitions) -> bool:
    """
    Move ``record`` to ``new_status`` and keep ``resolved_at`` in step.

    Returns False when the record already has that status. Raises a 400 for a
    transition the table doesn't allow.
    """
    current = record.status or "pending"
    if new_status == current:
        return False
    if new_status not in transitions.get(current, frozenset()):
        raise HTTPException(
            status_code=400,
            detail=f"Cannot move from {current} to {new_status}",
        )
    record.status = new_status
    record.resolved_at = datetime.utcnow() if new_status == "resolved" else None
    return True
