"""Event handlers wiring the query and pagination layers to a channel."""

from __future__ import annotations

import logging
import time
from typing import Callable, Dict, List, Optional, Sequence

from docso.bot.channel import Channel, MessageEvent, ReactionEvent
from docso.config import AppConfig
from docso.errors import DocsoError, FetchError, SendError
from docso.models import Block
from docso.pagination.registry import NavigationAction, PaginationRegistry
from docso.pagination.state import ListingKind, PaginationState
from docso.providers.base import IndexProvider
from docso.query.service import DocsService
from docso.render.formatter import error_block, listing_usage_block, render_page

LOGGER = logging.getLogger(__name__)


class DocsBot:
    """Answers doc commands and drives reaction-paged listings.

    Commands (with the default configuration):
        !docs [package [name | Type.Method]] - look up documentation
        !getfuncs <package> - page through the functions of a package
        !gettypes <package> - page through the types of a package
    """

    def __init__(
        self,
        config: AppConfig,
        provider: IndexProvider,
        channel: Channel,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config
        self.provider = provider
        self.channel = channel
        self.service = DocsService(provider, prefix=config.prefix, command=config.doc_command)
        self.registry = PaginationRegistry(
            idle_timeout=config.idle_timeout,
            clock=clock,
            on_page_change=self._show_page,
            on_destroy=self._delete_listing,
            owner_only=config.owner_only,
        )
        self._clock = clock
        self._actions: Dict[str, NavigationAction] = {
            config.previous_emoji: NavigationAction.PREVIOUS,
            config.next_emoji: NavigationAction.NEXT,
            config.destroy_emoji: NavigationAction.DESTROY,
        }
        self._listings: Dict[str, ListingKind] = {
            config.functions_command: ListingKind.FUNCTIONS,
            config.types_command: ListingKind.TYPES,
        }

    @property
    def navigation_emoji(self) -> List[str]:
        return list(self._actions)

    def start(self) -> None:
        self.registry.start_sweeper(self.config.sweep_interval)

    async def close(self) -> None:
        await self.registry.stop_sweeper()

    async def handle_message(self, event: MessageEvent) -> Optional[str]:
        """Dispatch a chat message; returns the id of the reply, if any."""
        prefix = self.config.prefix
        if event.author_id == self.config.bot_user_id or not event.content.startswith(prefix):
            return None

        fields = event.content[len(prefix) :].split()
        if not fields:
            return None

        command = fields[0]
        if command == self.config.doc_command:
            return await self.handle_doc(event.channel_id, fields)
        if command in self._listings:
            return await self.handle_listing(event, fields, self._listings[command])
        return None

    async def handle_doc(self, channel_id: str, fields: Sequence[str]) -> Optional[str]:
        try:
            block = await self.service.query(fields)
        except DocsoError as exc:
            LOGGER.info("Query %s failed: %s", " ".join(fields), exc)
            block = error_block(exc)
        return await self._send(channel_id, block)

    async def handle_listing(
        self, event: MessageEvent, fields: Sequence[str], kind: ListingKind
    ) -> Optional[str]:
        if len(fields) != 2:
            return await self._send(event.channel_id, listing_usage_block(self.config.prefix, fields[0]))

        package = fields[1]
        try:
            index = await self.provider.fetch_index(package)
        except FetchError as exc:
            LOGGER.info("Listing %s for %s failed: %s", kind.value, package, exc)
            return await self._send(event.channel_id, error_block(exc))

        state = PaginationState.create(
            kind,
            index,
            owner_id=event.author_id,
            channel_id=event.channel_id,
            now=self._clock(),
        )
        message_id = await self._send(event.channel_id, render_page(state))
        if message_id is None:
            return None

        self.registry.register(message_id, state)
        try:
            for emoji in self.navigation_emoji:
                await self.channel.add_reaction(event.channel_id, message_id, emoji)
        except SendError as exc:
            LOGGER.warning("Unable to add navigation reactions to %s: %s", message_id, exc)
        return message_id

    async def handle_reaction(self, event: ReactionEvent) -> Optional[PaginationState]:
        """Apply a navigation reaction.

        Returns ``None`` for reactions that are not navigation signals. Raises
        :class:`~docso.errors.NotFoundError` when the listing is gone.
        """
        if event.user_id == self.config.bot_user_id:
            return None
        action = self._actions.get(event.emoji)
        if action is None:
            return None

        state = await self.registry.navigate(event.message_id, action, actor_id=event.user_id)
        if action is not NavigationAction.DESTROY:
            try:
                await self.channel.remove_reaction(
                    event.channel_id, event.message_id, event.emoji, event.user_id
                )
            except SendError as exc:
                LOGGER.debug("Unable to clear reaction on %s: %s", event.message_id, exc)
        return state

    async def _send(self, channel_id: str, block: Block) -> Optional[str]:
        try:
            return await self.channel.send_block(channel_id, block)
        except SendError as exc:
            LOGGER.warning("Unable to send message to %s: %s", channel_id, exc)
            return None

    async def _show_page(self, handle: str, state: PaginationState) -> None:
        await self.channel.edit_block(state.channel_id, handle, render_page(state))

    async def _delete_listing(self, handle: str, state: PaginationState) -> None:
        await self.channel.delete_message(state.channel_id, handle)
