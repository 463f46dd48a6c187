"""Index-based bracket matching used by auto-indent and validation."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

DEFAULT_PAIRS: tuple[tuple[str, str], ...] = (("(", ")"), ("[", "]"), ("{", "}"))


class InvalidBraceIndexError(ValueError):
    """Raised when an index does not point at a configured brace of the expected kind."""

    def __init__(self, message: str, *, index: int, character: str | None = None):
        super().__init__(message)
        self.index = index
        self.character = character


@dataclass(frozen=True, slots=True)
class BraceQuery:
    """A span of text plus the index of a candidate opening brace."""

    context: str
    open_brace_index: int


def _normalize_pairs(pairs: Iterable[tuple[str, str]]) -> tuple[tuple[str, str], ...]:
    normalized = tuple((str(opening), str(closing)) for opening, closing in pairs)
    if not normalized:
        raise ValueError("at least one brace pair is required")
    seen: set[str] = set()
    for opening, closing in normalized:
        if len(opening) != 1 or len(closing) != 1:
            raise ValueError(f"brace pair {opening!r}{closing!r} must be single characters")
        if opening == closing:
            raise ValueError(f"brace pair {opening!r} cannot open and close with the same character")
        if opening in seen or closing in seen:
            raise ValueError(f"brace character reused in pair {opening!r}{closing!r}")
        seen.update((opening, closing))
    return normalized


class BraceBalanceChecker:
    """Matches opening and closing braces for a fixed set of brace pairs."""

    def __init__(self, *, pairs: Iterable[tuple[str, str]] = DEFAULT_PAIRS) -> None:
        self.pairs = _normalize_pairs(pairs)
        self._closing_for: Mapping[str, str] = MappingProxyType(dict(self.pairs))
        self._opening_for: Mapping[str, str] = MappingProxyType(
            {closing: opening for opening, closing in self.pairs}
        )

    def is_opening(self, char: str) -> bool:
        return char in self._closing_for

    def is_closing(self, char: str) -> bool:
        return char in self._opening_for

    def _require_opening(self, context: str, index: int) -> str:
        if index < 0 or index >= len(context):
            raise InvalidBraceIndexError(
                f"Brace index {index} is outside a context of length {len(context)}",
                index=index,
            )
        char = context[index]
        if not self.is_opening(char):
            raise InvalidBraceIndexError(
                f"Character {char!r} at index {index} is not an opening brace",
                index=index,
                character=char,
            )
        return char

    def _require_closing(self, context: str, index: int) -> str:
        if index < 0 or index >= len(context):
            raise InvalidBraceIndexError(
                f"Brace index {index} is outside a context of length {len(context)}",
                index=index,
            )
        char = context[index]
        if not self.is_closing(char):
            raise InvalidBraceIndexError(
                f"Character {char!r} at index {index} is not a closing brace",
                index=index,
                character=char,
            )
        return char

    def matching_brace_index(self, context: str, open_brace_index: int) -> Optional[int]:
        """Return the index of the brace closing ``open_brace_index``.

        Only braces of the same kind affect the depth; other kinds are
        ignored. Returns ``None`` when the brace is never closed.
        """

        opening = self._require_opening(context, open_brace_index)
        closing = self._closing_for[opening]
        depth = 0
        for index in range(open_brace_index, len(context)):
            char = context[index]
            if char == opening:
                depth += 1
            elif char == closing:
                depth -= 1
                if depth == 0:
                    return index
        return None

    def opening_brace_index(self, context: str, close_brace_index: int) -> Optional[int]:
        """Return the index of the brace opened by ``close_brace_index``.

        The mirror of ``matching_brace_index``, scanning right to left.
        """

        closing = self._require_closing(context, close_brace_index)
        opening = self._opening_for[closing]
        depth = 0
        for index in range(close_brace_index, -1, -1):
            char = context[index]
            if char == closing:
                depth += 1
            elif char == opening:
                depth -= 1
                if depth == 0:
                    return index
        return None

    def is_balanced(self, context: str, open_brace_index: int) -> bool:
        return self.matching_brace_index(context, open_brace_index) is not None

    def check(self, query: BraceQuery) -> bool:
        return self.is_balanced(query.context, query.open_brace_index)

    def first_unbalanced_closing_brace_index(self, context: str) -> Optional[int]:
        """Return the index of the first closing brace without an opener.

        A closing brace that does not close the innermost open brace counts
        as unbalanced too. With a single configured pair this is plain depth
        counting.
        """

        open_stack: list[str] = []
        for index, char in enumerate(context):
            if char in self._closing_for:
                open_stack.append(char)
            elif char in self._opening_for:
                if not open_stack or open_stack[-1] != self._opening_for[char]:
                    return index
                open_stack.pop()
        return None


_DEFAULT_CHECKER = BraceBalanceChecker()


def is_balanced(context: str, open_brace_index: int) -> bool:
    """Module-level shortcut using the default ``()[]{}`` pairs."""

    return _DEFAULT_CHECKER.is_balanced(context, open_brace_index)


def matching_brace_index(context: str, open_brace_index: int) -> Optional[int]:
    return _DEFAULT_CHECKER.matching_brace_index(context, open_brace_index)


def opening_brace_index(context: str, close_brace_index: int) -> Optional[int]:
    return _DEFAULT_CHECKER.opening_brace_index(context, close_brace_index)


def first_unbalanced_closing_brace_index(context: str) -> Optional[int]:
    return _DEFAULT_CHECKER.first_unbalanced_closing_brace_index(context)


__all__ = [
    "DEFAULT_PAIRS",
    "BraceBalanceChecker",
    "BraceQuery",
    "InvalidBraceIndexError",
    "first_unbalanced_closing_brace_index",
    "is_balanced",
    "matching_brace_index",
    "opening_brace_index",
]
