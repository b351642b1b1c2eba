"""Channel transport interface and an in-memory implementation."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Protocol

from docso.errors import SendError
from docso.models import Block, SentMessage

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class MessageEvent:
    channel_id: str
    author_id: str
    content: str


@dataclass(slots=True, frozen=True)
class ReactionEvent:
    channel_id: str
    message_id: str
    user_id: str
    emoji: str


class Channel(Protocol):
    async def send_block(self, channel_id: str, block: Block) -> str: ...

    async def edit_block(self, channel_id: str, message_id: str, block: Block) -> None: ...

    async def delete_message(self, channel_id: str, message_id: str) -> None: ...

    async def add_reaction(self, channel_id: str, message_id: str, emoji: str) -> None: ...

    async def remove_reaction(
        self, channel_id: str, message_id: str, emoji: str, user_id: str
    ) -> None: ...


class MemoryChannel:
    """Keeps sent messages in a dict; backs the web adapter and the tests.

    With ``max_messages`` set, the oldest messages are dropped once the store
    is full. Messages without reactions go first so live listings survive as
    long as possible.
    """

    def __init__(
        self, *, max_description: Optional[int] = None, max_messages: Optional[int] = None
    ) -> None:
        self.messages: Dict[str, SentMessage] = {}
        self.max_description = max_description
        self.max_messages = max_messages
        self._ids = itertools.count(1)

    def get(self, message_id: str) -> Optional[SentMessage]:
        return self.messages.get(message_id)

    def _check(self, block: Block) -> None:
        if self.max_description is not None and len(block.description) > self.max_description:
            raise SendError(f"Description longer than {self.max_description} characters")

    def _prune(self, keep: str) -> None:
        if self.max_messages is None:
            return
        while len(self.messages) > self.max_messages:
            older = [mid for mid in self.messages if mid != keep]
            if not older:
                return
            victim = next((mid for mid in older if not self.messages[mid].reactions), older[0])
            del self.messages[victim]
            LOGGER.debug("Dropped message %s from the store", victim)

    async def send_block(self, channel_id: str, block: Block) -> str:
        self._check(block)
        message_id = str(next(self._ids))
        self.messages[message_id] = SentMessage(channel_id, message_id, block)
        self._prune(keep=message_id)
        return message_id

    async def edit_block(self, channel_id: str, message_id: str, block: Block) -> None:
        message = self.messages.get(message_id)
        if message is None or message.channel_id != channel_id:
            raise SendError(f"Unknown message {message_id}")
        self._check(block)
        message.block = block

    async def delete_message(self, channel_id: str, message_id: str) -> None:
        if self.messages.pop(message_id, None) is None:
            LOGGER.debug("Message %s already deleted", message_id)

    async def add_reaction(self, channel_id: str, message_id: str, emoji: str) -> None:
        message = self.messages.get(message_id)
        if message is None:
            raise SendError(f"Unknown message {message_id}")
        if emoji not in message.reactions:
            message.reactions.append(emoji)

    async def remove_reaction(
        self, channel_id: str, message_id: str, emoji: str, user_id: str
    ) -> None:
        # only the bot's own reactions are tracked
        return None
