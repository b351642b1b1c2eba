"""Query pipeline: parse, fetch the index, resolve."""

from __future__ import annotations

import logging
from typing import Sequence

from docso.errors import TooManyArgumentsError
from docso.models import Block
from docso.providers.base import IndexProvider
from docso.query.parser import HelpQuery, TooManyArgumentsQuery, parse_query
from docso.query.resolver import resolve
from docso.render.formatter import help_block

LOGGER = logging.getLogger(__name__)


class DocsService:
    """High-level API answering doc commands from an index provider."""

    def __init__(self, provider: IndexProvider, *, prefix: str = "!", command: str = "docs") -> None:
        self.provider = provider
        self.prefix = prefix
        self.command = command

    async def query(self, fields: Sequence[str]) -> Block:
        query = parse_query(fields)
        if isinstance(query, HelpQuery):
            return help_block(self.prefix, self.command)
        if isinstance(query, TooManyArgumentsQuery):
            raise TooManyArgumentsError("Too many arguments.")

        LOGGER.debug("Fetching index for %s to answer %r", query.package, query)
        index = await self.provider.fetch_index(query.package)
        return resolve(index, query)
