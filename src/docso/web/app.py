"""FastAPI application exposing the bot over HTTP.

The app plays the part of the chat channel: posted messages are handed to the
bot, the bot's replies are kept in a :class:`MemoryChannel`, and reactions on
those replies drive the paginated listings.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from docso.bot.channel import MemoryChannel, MessageEvent, ReactionEvent
from docso.bot.handlers import DocsBot
from docso.config import AppConfig, locate_index_dir
from docso.errors import NotFoundError, NotOwnerError, SendError
from docso.models import SentMessage
from docso.providers.json_files import JsonIndexProvider

LOGGER = logging.getLogger(__name__)


class MessagePayload(BaseModel):
    content: str
    author_id: str
    channel_id: str = "web"


class ReactionPayload(BaseModel):
    emoji: str
    user_id: str


def _serialize(message: SentMessage) -> dict[str, Any]:
    return {
        "id": message.message_id,
        "channel_id": message.channel_id,
        "block": message.block.to_dict(),
        "reactions": list(message.reactions),
    }


def create_app(config: AppConfig | None = None) -> FastAPI:
    config = config or AppConfig()
    channel = MemoryChannel(max_description=2000, max_messages=config.max_messages)
    provider = JsonIndexProvider(locate_index_dir(config.index_dir))
    bot = DocsBot(config, provider, channel)

    app = FastAPI(title="docso", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.bot = bot
    app.state.channel = channel

    @app.on_event("startup")
    async def startup_event() -> None:
        logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
        bot.start()

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        await bot.close()

    @app.get("/health")
    async def health() -> dict[str, Any]:
        return {"status": "ok", "listings": len(bot.registry)}

    @app.post("/messages")
    async def post_message(payload: MessagePayload) -> dict[str, Any]:
        if not payload.content.strip():
            raise HTTPException(status_code=400, detail="Empty message")

        event = MessageEvent(
            channel_id=payload.channel_id,
            author_id=payload.author_id,
            content=payload.content,
        )
        message_id = await bot.handle_message(event)
        message = channel.get(message_id) if message_id is not None else None
        return {"messages": [_serialize(message)] if message is not None else []}

    @app.get("/messages/{message_id}")
    async def get_message(message_id: str) -> dict[str, Any]:
        message = channel.get(message_id)
        if message is None:
            raise HTTPException(status_code=404, detail=f"Message {message_id} not found")
        return {"message": _serialize(message)}

    @app.post("/messages/{message_id}/reactions")
    async def post_reaction(message_id: str, payload: ReactionPayload) -> dict[str, Any]:
        message = channel.get(message_id)
        event = ReactionEvent(
            channel_id=message.channel_id if message is not None else "web",
            message_id=message_id,
            user_id=payload.user_id,
            emoji=payload.emoji,
        )
        try:
            state = await bot.handle_reaction(event)
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except NotOwnerError as exc:
            raise HTTPException(status_code=403, detail=str(exc)) from exc
        except SendError as exc:
            LOGGER.error("Unable to update message %s: %s", message_id, exc)
            raise HTTPException(status_code=502, detail=str(exc)) from exc

        message = channel.get(message_id)
        if message is None:
            return {"status": "deleted", "message": None}
        status = "ok" if state is not None else "ignored"
        return {"status": status, "message": _serialize(message)}

    return app


app = create_app()
