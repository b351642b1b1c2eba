"""Wildcard pattern compilation.

Patterns are matched against whole symbol names, ignoring case. The syntax is
the usual shell-style one:

* ``*`` matches any run of characters, including none
* ``?`` matches exactly one character
* ``[abc]``, ``[a-z]`` and ``[!abc]`` match one character from (or outside) a set
* ``{Read,Write}`` matches any of the comma separated alternatives
* ``\\`` escapes the following character
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from docso.errors import CompileError

WILDCARD_CHARS = frozenset("*?[]{}")


@dataclass(slots=True, frozen=True)
class Matcher:
    """Compiled, reusable predicate for one pattern."""

    pattern: str
    regex: re.Pattern[str]

    def matches(self, candidate: str) -> bool:
        return self.regex.fullmatch(candidate) is not None


def has_wildcard(text: str) -> bool:
    return any(char in WILDCARD_CHARS for char in text)


def compile_pattern(pattern: str) -> Matcher:
    """Compile ``pattern`` or raise :class:`CompileError` describing the problem."""
    return Matcher(pattern, re.compile(_translate(pattern), re.IGNORECASE | re.DOTALL))


def _translate(pattern: str) -> str:
    parts: list[str] = []
    open_braces: list[int] = []
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if char == "\\":
            if i + 1 >= len(pattern):
                raise CompileError(pattern, "dangling escape", i)
            parts.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        if char == "[":
            i, klass = _translate_class(pattern, i)
            parts.append(klass)
        elif char == "*":
            if not parts or parts[-1] != ".*":
                parts.append(".*")
        elif char == "?":
            parts.append(".")
        elif char == "{":
            open_braces.append(i)
            parts.append("(?:")
        elif char == "}":
            if not open_braces:
                raise CompileError(pattern, "unmatched '}'", i)
            open_braces.pop()
            parts.append(")")
        elif char == "]":
            raise CompileError(pattern, "unmatched ']'", i)
        elif char == "," and open_braces:
            parts.append("|")
        else:
            parts.append(re.escape(char))
        i += 1

    if open_braces:
        raise CompileError(pattern, "unclosed '{'", open_braces[-1])
    return "".join(parts)


def _translate_class(pattern: str, start: int) -> tuple[int, str]:
    """Translate the class opened at ``start``; returns the index of its ``]``."""
    i = start + 1
    negate = i < len(pattern) and pattern[i] in "!^"
    if negate:
        i += 1

    members: list[str] = []
    while i < len(pattern) and pattern[i] != "]":
        char = pattern[i]
        if char == "\\":
            if i + 1 >= len(pattern):
                raise CompileError(pattern, "dangling escape", i)
            i += 1
            char = pattern[i]
        if i + 2 < len(pattern) and pattern[i + 1] == "-" and pattern[i + 2] != "]":
            high = pattern[i + 2]
            if char > high:
                raise CompileError(pattern, f"invalid range '{char}-{high}'", i)
            members.append(f"{re.escape(char)}-{re.escape(high)}")
            i += 3
            continue
        members.append(re.escape(char))
        i += 1

    if i >= len(pattern):
        raise CompileError(pattern, "unclosed '['", start)
    if not members:
        raise CompileError(pattern, "empty character class", start)
    return i, "[" + ("^" if negate else "") + "".join(members) + "]"
