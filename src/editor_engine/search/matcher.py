"""Plain-text match primitive with case and whole-word options."""

from __future__ import annotations

from typing import Iterator, Optional

from .models import Found, SearchQuery


def _fold(text: str) -> list[str]:
    # per-character lowering keeps offsets aligned with the original text
    return [char.lower() for char in text]


def _is_word_boundary(text: str, start: int, end: int) -> bool:
    before = start == 0 or not text[start - 1].isalnum()
    after = end == len(text) or not text[end].isalnum()
    return before and after


class PreparedText:
    """Text prepared once for repeated lookups with the same query."""

    def __init__(self, text: str, query: SearchQuery) -> None:
        self.text = text
        self.query = query
        self._haystack: Optional[str] = text
        self._needle: Optional[str] = query.text
        self._folded_text: Optional[list[str]] = None
        self._folded_needle: Optional[list[str]] = None
        if not query.case_sensitive:
            folded_text = _fold(text)
            folded_needle = _fold(query.text)
            joined_text = "".join(folded_text)
            joined_needle = "".join(folded_needle)
            if len(joined_text) == len(text) and len(joined_needle) == len(query.text):
                # every character lowered to a single character
                self._haystack = joined_text
                self._needle = joined_needle
            else:
                self._haystack = self._needle = None
                self._folded_text = folded_text
                self._folded_needle = folded_needle

    def _candidate(self, start: int) -> int:
        if self._haystack is not None and self._needle is not None:
            return self._haystack.find(self._needle, start)
        assert self._folded_text is not None
        width = len(self.query.text)
        last = len(self.text) - width
        for index in range(start, last + 1):
            if self._folded_text[index : index + width] == self._folded_needle:
                return index
        return -1

    def find(self, start: int, *, limit: Optional[int] = None) -> Optional[Found]:
        """Return the first match at or after ``start`` ending by ``limit``."""

        width = len(self.query.text)
        if width == 0:
            return None
        bound = len(self.text) if limit is None else min(limit, len(self.text))
        position = max(start, 0)
        while position <= bound - width:
            index = self._candidate(position)
            end = index + width
            if index < 0 or end > bound:
                return None
            if not self.query.whole_words or _is_word_boundary(self.text, index, end):
                return Found(index, end)
            position = index + 1
        return None


def find_match(
    text: str,
    query: str,
    start: int = 0,
    *,
    case_sensitive: bool = False,
    whole_words: bool = False,
) -> Optional[Found]:
    """Return the first match of ``query`` at or after ``start``."""

    search = SearchQuery(query, case_sensitive=case_sensitive, whole_words=whole_words)
    return PreparedText(text, search).find(start)


def iter_matches(
    text: str,
    query: str,
    *,
    case_sensitive: bool = False,
    whole_words: bool = False,
) -> Iterator[Found]:
    """Yield every non-overlapping match from the start of ``text``."""

    search = SearchQuery(query, case_sensitive=case_sensitive, whole_words=whole_words)
    haystack = PreparedText(text, search)
    position = 0
    while True:
        match = haystack.find(position)
        if match is None:
            return
        yield match
        position = match.end


__all__ = ["PreparedText", "find_match", "iter_matches"]
