"""Command token parsing into typed query variants."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from docso.query.pattern import has_wildcard

# invocation + package + symbol
MAX_FIELDS = 3


@dataclass(slots=True, frozen=True)
class HelpQuery:
    pass


@dataclass(slots=True, frozen=True)
class PackageQuery:
    package: str


@dataclass(slots=True, frozen=True)
class SymbolQuery:
    package: str
    name: str


@dataclass(slots=True, frozen=True)
class MethodQuery:
    package: str
    type_name: str
    method: str


@dataclass(slots=True, frozen=True)
class MethodGlobQuery:
    package: str
    type_pattern: str
    method_pattern: str


@dataclass(slots=True, frozen=True)
class TooManyArgumentsQuery:
    count: int


ParsedQuery = Union[
    HelpQuery, PackageQuery, SymbolQuery, MethodQuery, MethodGlobQuery, TooManyArgumentsQuery
]


def parse_query(fields: Sequence[str]) -> ParsedQuery:
    """Classify whitespace-separated command fields.

    ``fields[0]`` is the invocation itself; the remaining fields are the
    package and, optionally, a symbol or ``Type.Method`` expression.
    """
    if len(fields) <= 1:
        return HelpQuery()
    if len(fields) > MAX_FIELDS:
        return TooManyArgumentsQuery(count=len(fields) - 1)

    package = fields[1]
    if len(fields) == 2:
        return PackageQuery(package)

    symbol = fields[2]
    if "." not in symbol:
        return SymbolQuery(package, symbol)

    type_name, method = symbol.split(".", 1)
    if has_wildcard(type_name) or has_wildcard(method):
        return MethodGlobQuery(package, type_name, method)
    return MethodQuery(package, type_name, method)
