"""Concurrency-safe table of live paginated listings.

Every method must be called from the event loop that owns the registry. Each
handle carries its own :class:`asyncio.Lock`, so navigation on one listing is
serialized while different listings never wait on each other.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Awaitable, Callable, Dict, List, Optional

from docso.errors import NotFoundError, NotOwnerError
from docso.pagination.state import PaginationState

LOGGER = logging.getLogger(__name__)

DEFAULT_IDLE_TIMEOUT = 600.0

PageListener = Callable[[str, PaginationState], Awaitable[None]]


class NavigationAction(str, Enum):
    PREVIOUS = "previous"
    NEXT = "next"
    DESTROY = "destroy"


@dataclass(slots=True)
class _Entry:
    state: PaginationState
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    removed: bool = False


class PaginationRegistry:
    """Maps result-set handles to their :class:`PaginationState`.

    ``on_page_change`` runs under the handle's lock after the page moved, so
    the rendered message is replaced before any other navigation on the same
    handle proceeds. ``on_destroy`` runs once the handle is already gone.
    """

    def __init__(
        self,
        *,
        idle_timeout: float = DEFAULT_IDLE_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
        on_page_change: Optional[PageListener] = None,
        on_destroy: Optional[PageListener] = None,
        owner_only: bool = False,
    ) -> None:
        self.idle_timeout = idle_timeout
        self._clock = clock
        self._on_page_change = on_page_change
        self._on_destroy = on_destroy
        self._owner_only = owner_only
        self._entries: Dict[str, _Entry] = {}
        self._sweeper: Optional[asyncio.Task] = None

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, handle: object) -> bool:
        return handle in self._entries

    def register(self, handle: str, state: PaginationState) -> None:
        if handle in self._entries:
            raise ValueError(f"Handle {handle!r} is already registered")
        state.last_used = self._clock()
        self._entries[handle] = _Entry(state)
        LOGGER.debug("Registered %s listing %s (%d pages)", state.kind.value, handle, state.page_limit)

    def get(self, handle: str) -> PaginationState:
        """Return a snapshot of the state without refreshing its timestamp."""
        entry = self._lookup(handle)
        if not entry.lock.locked():
            self._check_live(handle, entry)
        return replace(entry.state)

    async def advance(self, handle: str, *, actor_id: Optional[str] = None) -> PaginationState:
        return await self._move(handle, 1, actor_id)

    async def retreat(self, handle: str, *, actor_id: Optional[str] = None) -> PaginationState:
        return await self._move(handle, -1, actor_id)

    async def destroy(self, handle: str, *, actor_id: Optional[str] = None) -> PaginationState:
        entry = self._lookup(handle)
        async with entry.lock:
            self._check_live(handle, entry)
            self._check_owner(entry.state, actor_id)
            self._remove(handle, entry)
            snapshot = replace(entry.state)

        LOGGER.debug("Destroyed listing %s", handle)
        if self._on_destroy is not None:
            await self._on_destroy(handle, snapshot)
        return snapshot

    async def navigate(
        self, handle: str, action: NavigationAction, *, actor_id: Optional[str] = None
    ) -> PaginationState:
        if action is NavigationAction.NEXT:
            return await self.advance(handle, actor_id=actor_id)
        if action is NavigationAction.PREVIOUS:
            return await self.retreat(handle, actor_id=actor_id)
        return await self.destroy(handle, actor_id=actor_id)

    def evict_idle(self) -> List[str]:
        """Drop every listing idle for longer than ``idle_timeout``.

        Listings with a mutation in flight are skipped; they are checked again
        on the next pass or lazily on their next access.
        """
        now = self._clock()
        evicted: List[str] = []
        for handle, entry in list(self._entries.items()):
            if entry.lock.locked():
                continue
            if entry.state.is_idle(now, self.idle_timeout):
                self._remove(handle, entry)
                evicted.append(handle)
        if evicted:
            LOGGER.info("Evicted %d idle listings", len(evicted))
        return evicted

    def start_sweeper(self, interval: float) -> asyncio.Task:
        if self._sweeper is None or self._sweeper.done():
            self._sweeper = asyncio.create_task(self._sweep(interval))
        return self._sweeper

    async def stop_sweeper(self) -> None:
        if self._sweeper is None:
            return
        self._sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._sweeper
        self._sweeper = None

    async def _sweep(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            self.evict_idle()

    async def _move(self, handle: str, step: int, actor_id: Optional[str]) -> PaginationState:
        entry = self._lookup(handle)
        async with entry.lock:
            self._check_live(handle, entry)
            state = entry.state
            self._check_owner(state, actor_id)

            target = state.clamp_page(state.current_page + step)
            if target == state.current_page:
                return replace(state)

            previous = (state.current_page, state.last_used)
            state.current_page = target
            state.last_used = self._clock()
            snapshot = replace(state)
            if self._on_page_change is not None:
                try:
                    await self._on_page_change(handle, snapshot)
                except Exception:
                    # keep the state in line with what is still displayed
                    state.current_page, state.last_used = previous
                    raise
            return snapshot

    def _lookup(self, handle: str) -> _Entry:
        entry = self._entries.get(handle)
        if entry is None:
            raise NotFoundError(handle)
        return entry

    def _check_live(self, handle: str, entry: _Entry) -> None:
        if entry.removed:
            raise NotFoundError(handle)
        if entry.state.is_idle(self._clock(), self.idle_timeout):
            self._remove(handle, entry)
            LOGGER.debug("Listing %s expired", handle)
            raise NotFoundError(handle)

    def _check_owner(self, state: PaginationState, actor_id: Optional[str]) -> None:
        if self._owner_only and actor_id is not None and actor_id != state.owner_id:
            raise NotOwnerError("Only the user who requested this listing can browse it")

    def _remove(self, handle: str, entry: _Entry) -> None:
        entry.removed = True
        if self._entries.get(handle) is entry:
            del self._entries[handle]
