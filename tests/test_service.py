"""Tests for the query pipeline."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from docso.errors import FetchError, NoMatchError, TooManyArgumentsError
from docso.models import DocIndex
from docso.query.service import DocsService


class TestDocsService:
    """Test DocsService.query."""

    def test_help_skips_fetch(self) -> None:
        provider = AsyncMock()
        service = DocsService(provider, prefix="?", command="doc")

        block = asyncio.run(service.query(["doc"]))

        assert block.title == "Docs help!"
        assert "`?doc <package>`" in block.description
        provider.fetch_index.assert_not_awaited()

    def test_too_many_skips_fetch(self) -> None:
        provider = AsyncMock()
        service = DocsService(provider)

        with pytest.raises(TooManyArgumentsError):
            asyncio.run(service.query(["docs", "a", "b", "c"]))
        provider.fetch_index.assert_not_awaited()

    def test_fetches_package(self, strings_index: DocIndex) -> None:
        provider = AsyncMock()
        provider.fetch_index.return_value = strings_index
        service = DocsService(provider)

        block = asyncio.run(service.query(["docs", "strings", "*.Write*"]))

        provider.fetch_index.assert_awaited_once_with("strings")
        assert block.title == "Matches"

    def test_propagates_fetch_error(self) -> None:
        provider = AsyncMock()
        provider.fetch_index.side_effect = FetchError("offline")
        service = DocsService(provider)

        with pytest.raises(FetchError):
            asyncio.run(service.query(["docs", "strings"]))

    def test_propagates_no_match(self, strings_index: DocIndex) -> None:
        provider = AsyncMock()
        provider.fetch_index.return_value = strings_index
        service = DocsService(provider)

        with pytest.raises(NoMatchError):
            asyncio.run(service.query(["docs", "strings", "Missing"]))
