"""Rendering of matched entries and listing pages into bounded blocks."""

from __future__ import annotations

from typing import Iterable, Sequence, Union

from docso.errors import CompileError, DocsoError
from docso.models import Block, FunctionEntry, TypeEntry
from docso.pagination.state import PaginationState

MAX_DESCRIPTION = 2000
TRIM_AT = 1950
TRIM_NOTICE = "\n\n*note: trimmed to fit the 2k character limit*"
NO_INFORMATION = "*no information*"
CODE_LANGUAGE = "go"

Entry = Union[FunctionEntry, TypeEntry]


def truncate(text: str) -> str:
    """Cut ``text`` to the description limit, appending the trim notice."""
    if len(text) > MAX_DESCRIPTION:
        return text[:TRIM_AT] + TRIM_NOTICE
    return text


def _first_comment(comments: Sequence[str]) -> str:
    return comments[0] if comments else NO_INFORMATION


def format_function(entry: FunctionEntry) -> str:
    text = f"`{entry.signature}`\n{_first_comment(entry.comments)}\n"
    if entry.example:
        text += f"\nExample:\n```{CODE_LANGUAGE}\n{entry.example}\n```\n"
    return text


def format_type(entry: TypeEntry) -> str:
    return f"```{CODE_LANGUAGE}\n{entry.signature}\n```\n{_first_comment(entry.comments)}\n"


def format_entry(entry: Entry) -> str:
    if isinstance(entry, FunctionEntry):
        return format_function(entry)
    return format_type(entry)


def format_entries(entries: Iterable[Entry]) -> str:
    """Concatenate the templates of all entries and apply truncation once.

    Returns an empty string when there is nothing to show, so callers can
    report a missing match instead of an empty block.
    """
    text = "".join(format_entry(entry) for entry in entries).rstrip("\n")
    return truncate(text)


def _list_line(entry: Entry) -> str:
    if isinstance(entry, FunctionEntry):
        return f"`{entry.signature}`"
    return f"**{entry.name}**: {_first_comment(entry.comments)}"


def render_page(state: PaginationState) -> Block:
    """Render the current page of a listing with its ``Page X/Y`` footer."""
    lines = [_list_line(entry) for entry in state.page_items()]
    description = truncate("\n".join(lines)) if lines else f"*no {state.kind.value} to list*"
    return Block(
        title=state.kind.value,
        description=description,
        footer=f"Page {state.current_page}/{state.page_limit}",
    )


def help_block(prefix: str, command: str) -> Block:
    invocation = f"{prefix}{command}"
    return Block(
        title="Docs help!",
        description=(
            f"`{invocation} <package>` - count the types and functions of a package\n"
            f"`{invocation} <package> <name>` - look up a function or a type\n"
            f"`{invocation} <package> <Type.Method>` - look up a method\n"
            f"`{invocation} <package> <Type*.Write*>` - find methods with wildcard patterns"
        ),
    )


def listing_usage_block(prefix: str, command: str) -> Block:
    return Block(
        title=f"Help {command}",
        description=(
            "This command takes exactly one package name, here's an example!\n\n"
            f"{prefix}{command} strings"
        ),
    )


def error_block(exc: DocsoError) -> Block:
    if isinstance(exc, CompileError):
        return Block(title="Error", description=f"Error processing glob pattern:\n```\n{exc}\n```")
    return Block(title="Error", description=str(exc))
