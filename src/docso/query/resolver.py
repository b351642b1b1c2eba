"""Resolution of parsed queries against a documentation index."""

from __future__ import annotations

import logging

from docso.errors import NoMatchError, TooManyArgumentsError
from docso.models import Block, DocIndex, FunctionKind
from docso.query.parser import (
    MethodGlobQuery,
    MethodQuery,
    PackageQuery,
    ParsedQuery,
    SymbolQuery,
    TooManyArgumentsQuery,
)
from docso.query.pattern import compile_pattern
from docso.render.formatter import format_entries

LOGGER = logging.getLogger(__name__)


def resolve(index: DocIndex, query: ParsedQuery) -> Block:
    """Answer ``query`` from ``index``.

    Raises:
        NoMatchError: the query is well formed but nothing matched.
        CompileError: a wildcard expression is malformed.
        TooManyArgumentsError: the request had more fields than any query shape.
        TypeError: ``query`` is a help request, which callers answer without
            an index.
    """
    if isinstance(query, TooManyArgumentsQuery):
        raise TooManyArgumentsError("Too many arguments.")
    if isinstance(query, PackageQuery):
        return resolve_package(index, query)
    if isinstance(query, SymbolQuery):
        return resolve_symbol(index, query)
    if isinstance(query, MethodQuery):
        return resolve_method(index, query)
    if isinstance(query, MethodGlobQuery):
        return resolve_method_glob(index, query)
    raise TypeError(f"Unsupported query: {query!r}")


def resolve_package(index: DocIndex, query: PackageQuery) -> Block:
    return Block(
        title=f"Info for {query.package}",
        description=f"Types: {len(index.types)}\nFunctions: {len(index.functions)}",
    )


def resolve_symbol(index: DocIndex, query: SymbolQuery) -> Block:
    wanted = query.name.casefold()
    matches = [
        fn
        for fn in index.functions
        if fn.kind is FunctionKind.PLAIN and fn.name.casefold() == wanted
    ]
    if not matches:
        matches = [t for t in index.types if t.name.casefold() == wanted]
    if not matches:
        raise NoMatchError(
            f"No type or function `{query.name}` found in package `{query.package}`"
        )

    name = matches[0].name
    LOGGER.debug("Resolved %s.%s to %d entries", query.package, name, len(matches))
    return Block(
        title=f"{query.package}: {name}",
        description=format_entries(matches),
        footer=f"{index.url}#{name}",
    )


def resolve_method(index: DocIndex, query: MethodQuery) -> Block:
    if not index.functions:
        raise NoMatchError(f"Package `{query.package}` seems to have no functions")

    method = query.method.casefold()
    owner = query.type_name.casefold()
    matches = [
        fn
        for fn in index.functions
        if fn.kind is FunctionKind.METHOD
        and fn.name.casefold() == method
        and fn.method_of.casefold() == owner
    ]
    if not matches:
        raise NoMatchError(
            f"Package `{query.package}` does not have `func({query.type_name}) {query.method}`"
        )

    first = matches[0]
    return Block(
        title=f"{query.package}: func({first.method_of}) {first.name}",
        description=format_entries(matches),
        footer=f"{index.url}#{first.method_of}.{first.name}",
    )


def resolve_method_glob(index: DocIndex, query: MethodGlobQuery) -> Block:
    missing = NoMatchError(
        f"No results found matching the expression "
        f"`{query.type_pattern}.{query.method_pattern}` in package `{query.package}`"
    )
    if index.is_empty:
        raise missing

    owner = compile_pattern(query.type_pattern)
    method = compile_pattern(query.method_pattern)
    matches = [
        fn
        for fn in index.functions
        if fn.kind is FunctionKind.METHOD and owner.matches(fn.method_of) and method.matches(fn.name)
    ]
    if not matches:
        raise missing

    return Block(title="Matches", description=format_entries(matches), footer=index.url)
