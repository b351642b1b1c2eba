"""Index provider interface."""

from __future__ import annotations

from typing import Protocol

from docso.models import DocIndex


class IndexProvider(Protocol):
    async def fetch_index(self, package: str) -> DocIndex:
        """Return the index for ``package`` or raise :class:`~docso.errors.FetchError`."""
        ...
