from __future__ import annotations

from typing import Iterable, List, Optional, Union

MEALS = ("breakfast", "lunch", "snacks", "dinner")


def parse_items(value: Union[str, Iterable[str], None]) -> Optional[List[str]]:
    """Normalize a meal to a list of item names; blank input means the meal isn't served (None)."""
    if value is None:
        return None
    parts = value.split(",") if isinstance(value, str) else list(value)
    items = [str(p).strip() for p in parts]
    items = [i for i in items if i]
    return items or None
