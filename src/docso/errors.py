"""Exception hierarchy shared by the query and pagination layers."""

from __future__ import annotations


class DocsoError(Exception):
    """Base class for every non-fatal docso failure."""


class FetchError(DocsoError):
    """The index provider could not produce a DocIndex."""


class NoMatchError(DocsoError):
    """A well-formed query matched no entries."""


class CompileError(DocsoError):
    """A wildcard pattern is malformed."""

    def __init__(self, pattern: str, reason: str, position: int) -> None:
        super().__init__(f"{reason} at position {position} in pattern {pattern!r}")
        self.pattern = pattern
        self.reason = reason
        self.position = position


class TooManyArgumentsError(DocsoError):
    """The request carried more tokens than any query shape allows."""


class NotFoundError(DocsoError):
    """Navigation on a handle that is unknown, destroyed or evicted."""

    def __init__(self, handle: str) -> None:
        super().__init__(f"No pagination state for message `{handle}`")
        self.handle = handle


class NotOwnerError(DocsoError):
    """Navigation attempted by someone other than the listing's requester."""


class SendError(DocsoError):
    """The channel refused to send or edit a message."""
