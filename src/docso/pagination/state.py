"""Browsing state for one paginated listing."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Union

from docso.models import DocIndex, FunctionEntry, TypeEntry

PAGE_SIZE = 10


class ListingKind(str, Enum):
    FUNCTIONS = "functions"
    TYPES = "types"


def page_limit_for(count: int, page_size: int = PAGE_SIZE) -> int:
    return math.ceil(count / page_size)


@dataclass(slots=True)
class PaginationState:
    """Mutable paging position over a shared, read-only DocIndex.

    ``current_page`` is 1-indexed and always within ``[1, page_limit]``; an
    empty listing has ``page_limit == 0`` and ``current_page == 0``.
    """

    kind: ListingKind
    index: DocIndex
    owner_id: str
    channel_id: str
    last_used: float
    current_page: int = 1
    page_limit: int = 0

    @classmethod
    def create(
        cls,
        kind: ListingKind,
        index: DocIndex,
        *,
        owner_id: str,
        channel_id: str,
        now: float,
    ) -> "PaginationState":
        state = cls(kind=kind, index=index, owner_id=owner_id, channel_id=channel_id, last_used=now)
        state.page_limit = page_limit_for(len(state.items))
        state.current_page = 1 if state.page_limit else 0
        return state

    @property
    def items(self) -> Sequence[Union[FunctionEntry, TypeEntry]]:
        if self.kind is ListingKind.FUNCTIONS:
            return self.index.functions
        return self.index.types

    def clamp_page(self, page: int) -> int:
        if self.page_limit == 0:
            return 0
        return min(max(page, 1), self.page_limit)

    def page_items(self) -> Sequence[Union[FunctionEntry, TypeEntry]]:
        if self.current_page == 0:
            return ()
        start = (self.current_page - 1) * PAGE_SIZE
        return self.items[start : start + PAGE_SIZE]

    def is_idle(self, now: float, timeout: float) -> bool:
        return now - self.last_used > timeout
