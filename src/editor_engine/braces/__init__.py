"""Bracket balance checks over arbitrary text spans."""

from .checker import (
    DEFAULT_PAIRS,
    BraceBalanceChecker,
    BraceQuery,
    InvalidBraceIndexError,
    first_unbalanced_closing_brace_index,
    is_balanced,
    matching_brace_index,
    opening_brace_index,
)

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
