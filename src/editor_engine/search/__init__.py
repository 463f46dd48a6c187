"""Find/replace with case, whole-word, and wraparound support."""

from .controller import SearchController
from .matcher import find_match, iter_matches
from .models import (
    Found,
    NotFound,
    ReplaceResult,
    SearchOutcome,
    SearchQuery,
    SearchState,
    SearchValidationError,
)

__all__ = [
    "Found",
    "NotFound",
    "ReplaceResult",
    "SearchController",
    "SearchOutcome",
    "SearchQuery",
    "SearchState",
    "SearchValidationError",
    "find_match",
    "iter_matches",
]
