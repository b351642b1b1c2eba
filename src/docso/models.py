"""Core docso data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class FunctionKind(str, Enum):
    PLAIN = "plain"
    METHOD = "method"


@dataclass(slots=True, frozen=True)
class FunctionEntry:
    """A documented function or method."""

    name: str
    signature: str
    kind: FunctionKind = FunctionKind.PLAIN
    method_of: str = ""
    comments: tuple[str, ...] = ()
    example: Optional[str] = None


@dataclass(slots=True, frozen=True)
class TypeEntry:
    """A documented type definition."""

    name: str
    signature: str
    comments: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class DocIndex:
    """Read-only documentation snapshot for one package."""

    url: str
    types: tuple[TypeEntry, ...] = ()
    functions: tuple[FunctionEntry, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.types and not self.functions


@dataclass(slots=True)
class Block:
    """Structured output sent back to a channel."""

    title: str
    description: str = ""
    footer: Optional[str] = None

    def to_dict(self) -> dict:
        return {"title": self.title, "description": self.description, "footer": self.footer}


@dataclass(slots=True)
class SentMessage:
    channel_id: str
    message_id: str
    block: Block
    reactions: List[str] = field(default_factory=list)
