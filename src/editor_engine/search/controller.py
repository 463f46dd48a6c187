"""Stateful find/replace controller with Find Next wraparound."""

from __future__ import annotations

from dataclasses import replace as _replace
from typing import Optional

from editor_engine.runtime import telemetry

from .matcher import PreparedText, iter_matches
from .models import (
    Found,
    NotFound,
    ReplaceResult,
    SearchOutcome,
    SearchQuery,
    SearchState,
    SearchValidationError,
)


class SearchController:
    """Tracks the last match of one document across find invocations.

    States are ``Idle`` (no remembered match) and ``HasLastMatch``. A plain
    find always scans from the start of the document. Find Next resumes
    after the remembered match and, when that scan comes up empty, retries
    once from the start with the same options.
    """

    def __init__(
        self,
        *,
        state: Optional[SearchState] = None,
        logger_name: str | None = None,
    ) -> None:
        self.state = state or SearchState()
        self._logger_name = logger_name

    @property
    def is_idle(self) -> bool:
        return not self.state.has_last_match

    def reset(self) -> None:
        """Forget the last match; hosts call this whenever the text changes."""

        self.state.clear()

    def find(
        self,
        document: str,
        query: str,
        *,
        find_next: bool = False,
        case_sensitive: bool = False,
        whole_words: bool = False,
        cursor: int = 0,
    ) -> SearchOutcome:
        _ensure_cursor(document, cursor)
        search = SearchQuery(query, case_sensitive=case_sensitive, whole_words=whole_words)
        with telemetry.span(
            "search::find",
            logger_name=self._logger_name,
            component="search",
            metadata={"find_next": find_next, "query_length": len(query)},
        ) as handle:
            outcome = self._find(document, search, find_next=find_next, cursor=cursor)
            handle.add_metadata("outcome", type(outcome).__name__)
        return outcome

    def _resume_offset(self, document: str, find_next: bool) -> int:
        last_end = self.state.last_match_end
        if not find_next or last_end is None:
            return 0
        if last_end > len(document):
            telemetry.record_event(
                "search.stale_state",
                level="warning",
                data={"last_match_end": last_end, "length": len(document)},
                logger_name=self._logger_name,
            )
            self.reset()
            return 0
        return last_end

    def _find(
        self, document: str, search: SearchQuery, *, find_next: bool, cursor: int
    ) -> SearchOutcome:
        if not search.text:
            self.reset()
            return NotFound(cursor=cursor)

        haystack = PreparedText(document, search)
        start = self._resume_offset(document, find_next)
        match = haystack.find(start)
        if match is None and find_next and start > 0:
            match = haystack.find(0)
            if match is not None:
                match = _replace(match, wrapped=True)

        if match is None:
            self.reset()
            telemetry.record_event(
                "search.not_found",
                data={"query": search.text, "find_next": find_next},
                logger_name=self._logger_name,
            )
            return NotFound(cursor=cursor)

        self.state.remember(match.end, search, start=match.start)
        return match

    def _selected_match(self, document: str, search: SearchQuery) -> Optional[Found]:
        start = self.state.last_match_start
        end = self.state.last_match_end
        if start is None or end is None or end > len(document):
            return None
        if end - start != len(search.text):
            return None
        match = PreparedText(document, search).find(start)
        if match is None or match.start != start:
            return None
        return match

    def replace(
        self,
        document: str,
        query: str,
        replacement: str,
        *,
        case_sensitive: bool = False,
        whole_words: bool = False,
        cursor: int = 0,
    ) -> ReplaceResult:
        """Replace one match with ``replacement``.

        Successive calls with the same query form a run. The first call
        replaces the match selected by the previous find when it still
        matches, otherwise the next match found with Find Next semantics.
        Later calls continue after the inserted text, wrap to the start of
        the document once, and stop before the offset where the run began,
        so text inserted by the run is never matched again. An exhausted run
        keeps returning a count of 0 until the text or the query changes.
        """

        _ensure_cursor(document, cursor)
        search = SearchQuery(query, case_sensitive=case_sensitive, whole_words=whole_words)
        if not search.text:
            self.reset()
            return ReplaceResult(text=document, count=0, match=None)

        state = self.state
        if self._continues_run(document, search):
            origin = state.replace_origin
            match = self._continue_run(document, search)
            if match is None:
                telemetry.record_event(
                    "search.not_found",
                    data={"query": search.text, "replace_run": True},
                    logger_name=self._logger_name,
                )
                return ReplaceResult(text=document, count=0, match=None)
            wrapped = state.replace_wrapped or match.wrapped
        else:
            selected = self._selected_match(document, search)
            outcome: SearchOutcome
            if selected is not None:
                outcome = selected
            else:
                outcome = self.find(
                    document,
                    query,
                    find_next=True,
                    case_sensitive=case_sensitive,
                    whole_words=whole_words,
                    cursor=cursor,
                )
            if isinstance(outcome, NotFound):
                return ReplaceResult(text=document, count=0, match=None)
            match = outcome
            origin = match.start
            wrapped = False

        assert origin is not None
        if wrapped:
            # matches before the origin shift it by the size difference
            origin += len(replacement) - match.length
        text = document[: match.start] + replacement + document[match.end :]
        state.remember(match.start + len(replacement), search)
        state.replace_origin = origin
        state.replace_wrapped = wrapped
        return ReplaceResult(text=text, count=1, match=match)

    def _continues_run(self, document: str, search: SearchQuery) -> bool:
        state = self.state
        if state.replace_origin is None or state.active_query != search:
            return False
        last_end = state.last_match_end
        return last_end is not None and last_end <= len(document)

    def _continue_run(self, document: str, search: SearchQuery) -> Optional[Found]:
        state = self.state
        haystack = PreparedText(document, search)
        last_end = state.last_match_end or 0
        if state.replace_wrapped:
            return haystack.find(last_end, limit=state.replace_origin)
        match = haystack.find(last_end)
        if match is None:
            match = haystack.find(0, limit=state.replace_origin)
            if match is not None:
                match = _replace(match, wrapped=True)
        return match

    def replace_all(
        self,
        document: str,
        query: str,
        replacement: str,
        *,
        case_sensitive: bool = False,
        whole_words: bool = False,
    ) -> ReplaceResult:
        """Replace every non-overlapping match and reset the search state."""

        with telemetry.span(
            "search::replace_all",
            logger_name=self._logger_name,
            component="search",
            metadata={"query_length": len(query)},
        ) as handle:
            pieces: list[str] = []
            position = 0
            count = 0
            if query:
                for match in iter_matches(
                    document,
                    query,
                    case_sensitive=case_sensitive,
                    whole_words=whole_words,
                ):
                    pieces.append(document[position : match.start])
                    pieces.append(replacement)
                    position = match.end
                    count += 1
            pieces.append(document[position:])
            handle.add_metadata("count", count)

        self.reset()
        return ReplaceResult(text="".join(pieces), count=count, match=None)


def _ensure_cursor(document: str, cursor: int) -> int:
    if cursor < 0 or cursor > len(document):
        raise SearchValidationError(
            f"Cursor {cursor} is outside a document of length {len(document)}",
            cursor=cursor,
        )
    return cursor


__all__ = ["SearchController"]
