"""Query, state, and outcome types for find/replace."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True, slots=True)
class SearchQuery:
    text: str
    case_sensitive: bool = False
    whole_words: bool = False


@dataclass(slots=True)
class SearchState:
    """Position retained between successive find invocations.

    ``last_match_end`` is ``None`` after a failed search or before any
    search; otherwise it indexes into the text that was searched.
    """

    last_match_end: Optional[int] = None
    active_query: Optional[SearchQuery] = None
    last_match_start: Optional[int] = None
    # start of the current replace run and whether it has wrapped past the end
    replace_origin: Optional[int] = None
    replace_wrapped: bool = False

    @property
    def has_last_match(self) -> bool:
        return self.last_match_end is not None

    def remember(
        self, end: int, query: SearchQuery, *, start: Optional[int] = None
    ) -> None:
        self.last_match_start = start
        self.last_match_end = end
        self.active_query = query
        self.replace_origin = None
        self.replace_wrapped = False

    def clear(self) -> None:
        self.last_match_start = None
        self.last_match_end = None
        self.active_query = None
        self.replace_origin = None
        self.replace_wrapped = False


@dataclass(frozen=True, slots=True)
class Found:
    start: int
    end: int
    wrapped: bool = False

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True, slots=True)
class NotFound:
    """No match; ``cursor`` is the position the host should restore."""

    cursor: int = 0


SearchOutcome = Union[Found, NotFound]


@dataclass(frozen=True, slots=True)
class ReplaceResult:
    text: str
    count: int
    match: Optional[Found] = None

    @property
    def changed(self) -> bool:
        return self.count > 0


class SearchValidationError(ValueError):
    """Raised when a caller passes a cursor outside the document."""

    def __init__(self, message: str, *, cursor: int | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor


__all__ = [
    "Found",
    "NotFound",
    "ReplaceResult",
    "SearchOutcome",
    "SearchQuery",
    "SearchState",
    "SearchValidationError",
]
