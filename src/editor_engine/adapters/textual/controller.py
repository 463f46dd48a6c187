"""UI-free bridge between Textual widget events and an ``EditorDocument``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from editor_engine.braces import InvalidBraceIndexError
from editor_engine.document import (
    DocumentValidationError,
    EditorDocument,
    IndentEdit,
    Location,
    location_to_offset,
    offset_to_location,
)
from editor_engine.metrics import DocumentMetrics
from editor_engine.search import Found, ReplaceResult, SearchOutcome

NO_RESULTS = "No results found."
FOUND = "Found match."
FOUND_WRAPPED = "Found match (wrapped to start)."
INVALID_LINE = "Invalid line number."


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_status: Callable[[str], None]
    update_text: Callable[[str], None] = _noop
    update_metrics: Callable[[DocumentMetrics], None] = _noop
    select_range: Callable[[Location, Location], None] = _noop
    show_find_result: Callable[[str], None] = _noop
    show_goto_result: Callable[[str], None] = _noop
    replace_range: Callable[[Location, Location, str], None] = _noop
    log: Callable[[str], None] = _noop


@dataclass(frozen=True, slots=True)
class FindRequest:
    """Options collected from the find/replace bar."""

    query: str
    replacement: str = ""
    case_sensitive: bool = False
    whole_words: bool = False


def describe_outcome(outcome: SearchOutcome) -> str:
    if isinstance(outcome, Found):
        return FOUND_WRAPPED if outcome.wrapped else FOUND
    return NO_RESULTS


def describe_replacement(result: ReplaceResult) -> str:
    if result.count == 0:
        return NO_RESULTS
    noun = "occurrence" if result.count == 1 else "occurrences"
    return f"Replaced {result.count} {noun}."


class TextualEditorAdapter:
    """Translates widget events into document calls and pushes results back."""

    def __init__(self, document: EditorDocument, hooks: TextualUIHooks) -> None:
        self.document = document
        self.hooks = hooks
        self._refresh_status()

    def handle_text_changed(self, text: str, cursor: Location) -> DocumentMetrics:
        """The widget's text was edited by the user."""

        self._sync(text, cursor)
        self._refresh_status()
        return self.document.metrics

    def _sync(self, text: str, cursor: Location) -> None:
        offset = location_to_offset(text, cursor)
        if text != self.document.text:
            self.document.set_text(text, cursor=offset)
            self._log_state("edit ->", length=len(text))
        else:
            self.document.move_cursor(offset)

    def handle_cursor_moved(self, cursor: Location) -> DocumentMetrics:
        metrics = self.document.move_cursor(location_to_offset(self.document.text, cursor))
        self._refresh_status()
        return metrics

    def handle_find(self, request: FindRequest, *, find_next: bool = False) -> SearchOutcome:
        outcome = self.document.find(
            request.query,
            find_next=find_next,
            case_sensitive=request.case_sensitive,
            whole_words=request.whole_words,
        )
        self._log_state("find ->", query=request.query, find_next=find_next, outcome=outcome)
        if isinstance(outcome, Found):
            self._select(outcome.start, outcome.end)
        self.hooks.show_find_result(describe_outcome(outcome))
        self._refresh_status()
        return outcome

    def handle_replace(self, request: FindRequest) -> ReplaceResult:
        result = self.document.replace(
            request.query,
            request.replacement,
            case_sensitive=request.case_sensitive,
            whole_words=request.whole_words,
        )
        self._after_replace(request, result)
        return result

    def handle_replace_all(self, request: FindRequest) -> ReplaceResult:
        result = self.document.replace_all(
            request.query,
            request.replacement,
            case_sensitive=request.case_sensitive,
            whole_words=request.whole_words,
        )
        self._after_replace(request, result)
        return result

    def handle_brace_check(self, cursor: Location) -> Optional[bool]:
        """Report whether the brace at ``cursor`` is closed.

        Returns ``None`` when the cursor is not on an opening brace.
        """

        offset = location_to_offset(self.document.text, cursor)
        try:
            balanced = self.document.brace_balanced_at(offset)
        except InvalidBraceIndexError:
            return None
        self.hooks.update_status(
            f"{self.document.status_text()}   Brace: {'ok' if balanced else 'unclosed'}"
        )
        return balanced

    def handle_go_to_line(self, line: int | str) -> Optional[Location]:
        """Jump to a 1-based line typed into the go-to box."""

        try:
            number = int(line)
            offset = self.document.go_to_line(number)
        except ValueError:
            self.hooks.show_goto_result(INVALID_LINE)
            return None
        except DocumentValidationError as exc:
            self.hooks.show_goto_result(f"{exc}.")
            return None
        location = offset_to_location(self.document.text, offset)
        self.hooks.select_range(location, location)
        self.hooks.show_goto_result(f"Moved to line {number}.")
        self._log_state("goto ->", line=number)
        self._refresh_status()
        return location

    def handle_newline(self, text: str, cursor: Location) -> IndentEdit:
        """Enter was pressed in the widget; apply the (indented) line break."""

        self._sync(text, cursor)
        return self._apply_edit(self.document.newline_edit(), "newline ->")

    def handle_closing_brace(self, text: str, cursor: Location, brace: str) -> IndentEdit:
        self._sync(text, cursor)
        return self._apply_edit(self.document.closing_brace_edit(brace), "brace ->")

    def handle_toggle_auto_indent(self, enabled: Optional[bool] = None) -> bool:
        state = self.document.toggle_auto_indent(enabled)
        self._log_state("auto_indent ->", enabled=state)
        return state

    def _apply_edit(self, edit: IndentEdit, prefix: str) -> IndentEdit:
        before = self.document.text
        start = offset_to_location(before, edit.start)
        end = offset_to_location(before, edit.end)
        self.document.apply_edit(edit)
        self.hooks.replace_range(start, end, edit.text)
        cursor = offset_to_location(self.document.text, edit.cursor)
        self.hooks.select_range(cursor, cursor)
        self._log_state(prefix, length=len(self.document.text))
        self._refresh_status()
        return edit

    def _after_replace(self, request: FindRequest, result: ReplaceResult) -> None:
        self._log_state(
            "replace ->", query=request.query, count=result.count
        )
        if result.changed:
            self.hooks.update_text(self.document.text)
        self.hooks.show_find_result(describe_replacement(result))
        self._refresh_status()

    def _select(self, start: int, end: int) -> None:
        text = self.document.text
        self.hooks.select_range(offset_to_location(text, start), offset_to_location(text, end))

    def _refresh_status(self) -> None:
        self.hooks.update_metrics(self.document.metrics)
        self.hooks.update_status(self.document.status_text())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        document = self.document
        return {
            "document": document.name,
            "version": document.version,
            "cursor": document.cursor,
            "selection": document.selection,
            "search_idle": document.search.is_idle,
            "auto_indent": document.auto_indent,
        }


__all__ = [
    "FindRequest",
    "INVALID_LINE",
    "TextualEditorAdapter",
    "TextualUIHooks",
    "describe_outcome",
    "describe_replacement",
]
