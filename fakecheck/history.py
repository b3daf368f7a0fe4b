# fakecheck/history.py

from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, List, Optional

from . import config
from .models import Assessment


class RecentChecks:
    """
    Caller-owned list of past assessments, most recent first. The oldest
    entry drops off once `limit` is reached.
    """

    def __init__(self, limit: Optional[int] = None) -> None:
        limit = config.HISTORY_LIMIT if limit is None else limit
        if limit < 1:
            raise ValueError("history limit must be at least 1")
        self._items: Deque[Assessment] = deque(maxlen=limit)

    @property
    def limit(self) -> int:
        return self._items.maxlen or 0

    def add(self, assessment: Assessment) -> None:
        self._items.appendleft(assessment)

    def items(self) -> List[Assessment]:
        return list(self._items)

    def latest(self) -> Optional[Assessment]:
        return self._items[0] if self._items else None

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Assessment]:
        return iter(list(self._items))
