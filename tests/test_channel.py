"""Tests for the in-memory channel."""

from __future__ import annotations

import asyncio

import pytest

from docso.bot.channel import MemoryChannel
from docso.errors import SendError
from docso.models import Block


def _send(channel: MemoryChannel, title: str) -> str:
    return asyncio.run(channel.send_block("c1", Block(title=title, description="")))


class TestMemoryChannel:
    """Test MemoryChannel storage."""

    def test_unbounded_by_default(self) -> None:
        channel = MemoryChannel()
        for i in range(50):
            _send(channel, f"m{i}")
        assert len(channel.messages) == 50

    def test_rejects_long_description(self) -> None:
        channel = MemoryChannel(max_description=5)
        with pytest.raises(SendError):
            asyncio.run(channel.send_block("c1", Block(title="t", description="x" * 6)))
        assert channel.messages == {}

    def test_edit_unknown_message(self) -> None:
        with pytest.raises(SendError):
            asyncio.run(MemoryChannel().edit_block("c1", "1", Block(title="t", description="")))


class TestMessageCap:
    """Test the max_messages bound."""

    def test_drops_oldest(self) -> None:
        channel = MemoryChannel(max_messages=3)
        ids = [_send(channel, f"m{i}") for i in range(5)]
        assert list(channel.messages) == ids[2:]
        assert channel.get(ids[0]) is None

    def test_keeps_listings_longer(self) -> None:
        """Messages carrying reactions are dropped after plain replies."""
        channel = MemoryChannel(max_messages=2)
        listing = _send(channel, "listing")
        asyncio.run(channel.add_reaction("c1", listing, "➡️"))
        plain = _send(channel, "plain")

        newest = _send(channel, "newest")

        assert channel.get(plain) is None
        assert list(channel.messages) == [listing, newest]

    def test_new_message_is_never_dropped(self) -> None:
        channel = MemoryChannel(max_messages=1)
        first = _send(channel, "first")
        asyncio.run(channel.add_reaction("c1", first, "➡️"))

        second = _send(channel, "second")

        assert list(channel.messages) == [second]
