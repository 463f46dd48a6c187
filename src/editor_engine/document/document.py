"""Per-document façade tying text, cursor, metrics, braces, and search together."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Optional

from editor_engine.braces import BraceBalanceChecker
from editor_engine.metrics import DocumentMetrics, MetricsScanner
from editor_engine.runtime import telemetry
from editor_engine.search import (
    Found,
    NotFound,
    ReplaceResult,
    SearchController,
    SearchOutcome,
)

from .indent import AutoIndenter, IndentEdit
from .offsets import DocumentValidationError, Selection, ensure_offset, location_to_offset


@dataclass(slots=True)
class DocumentView:
    version: int
    text: str
    cursor: int
    selection: Optional[Selection]
    metrics: DocumentMetrics


class EditorDocument:
    """One open document as the host sees it.

    Every edit made through this class rescans metrics and invalidates the
    search position; edits made by the search controller itself keep the
    position the controller recorded.
    """

    def __init__(
        self,
        text: str = "",
        *,
        name: str = "untitled",
        scanner: Optional[MetricsScanner] = None,
        braces: Optional[BraceBalanceChecker] = None,
        search: Optional[SearchController] = None,
        indenter: Optional[AutoIndenter] = None,
        auto_indent: bool = True,
    ) -> None:
        self.name = name
        self.text = text
        self.cursor = 0
        self.selection: Optional[Selection] = None
        self.version = 0
        self.scanner = scanner or MetricsScanner()
        self.braces = braces or BraceBalanceChecker()
        self.search = search or SearchController()
        self.indenter = indenter or AutoIndenter(braces=self.braces)
        self.auto_indent = auto_indent
        self.scanner.scan(self.text, self.cursor)

    @property
    def metrics(self) -> DocumentMetrics:
        return self.scanner.last

    def snapshot(self) -> DocumentView:
        return DocumentView(
            version=self.version,
            text=self.text,
            cursor=self.cursor,
            selection=self.selection,
            metrics=self.metrics,
        )

    def status_text(self) -> str:
        metrics = self.metrics
        column = metrics.current_column or 1
        return (
            f"Words: {metrics.word_count}   Chars: {metrics.char_count}   "
            f"Lines: {metrics.line_count}   Column: {column}"
        )

    # -- editing -----------------------------------------------------------

    def set_text(self, text: str, *, cursor: Optional[int] = None) -> DocumentView:
        """Replace the whole text, e.g. after the host widget changed it."""

        with Transaction(self, "set_text"):
            target = cursor if cursor is not None else min(self.cursor, len(text))
            self._apply(text, target)
            self.search.reset()
        return self.snapshot()

    def replace_range(
        self, start: int, end: int, text: str, *, label: str = "replace_range"
    ) -> DocumentView:
        start = ensure_offset(self.text, start)
        end = ensure_offset(self.text, end)
        if start > end:
            start, end = end, start
        with Transaction(self, label):
            new_text = self.text[:start] + text + self.text[end:]
            self._apply(new_text, start + len(text))
            self.search.reset()
        return self.snapshot()

    def insert_text(self, text: str, *, at: Optional[int] = None) -> DocumentView:
        position = self.cursor if at is None else at
        return self.replace_range(position, position, text, label="insert_text")

    def delete_range(self, start: int, end: int) -> DocumentView:
        return self.replace_range(start, end, "", label="delete_range")

    def move_cursor(self, offset: int) -> DocumentMetrics:
        self.cursor = ensure_offset(self.text, offset)
        self.selection = None
        return self.scanner.update_column(self.text, self.cursor)

    @property
    def line_count(self) -> int:
        """Number of lines as the editor shows them (never less than one)."""

        return self.text.count("\n") + 1

    def go_to_line(self, line: int) -> int:
        """Move the cursor to the start of 1-based ``line`` and return the offset."""

        last = self.line_count
        if line < 1 or line > last:
            raise DocumentValidationError(
                f"Line {line} is out of range (1-{last})", offset=(line - 1, 0)
            )
        offset = location_to_offset(self.text, (line - 1, 0))
        self.move_cursor(offset)
        return offset

    # -- auto-indent -------------------------------------------------------

    def toggle_auto_indent(self, enabled: Optional[bool] = None) -> bool:
        self.auto_indent = not self.auto_indent if enabled is None else enabled
        return self.auto_indent

    def newline_edit(self) -> IndentEdit:
        """The edit a line break typed at the cursor turns into."""

        if self.auto_indent:
            return self.indenter.newline(self.text, self.cursor)
        return IndentEdit(self.cursor, self.cursor, "\n", self.cursor + 1)

    def closing_brace_edit(self, brace: str) -> IndentEdit:
        """The edit ``brace`` typed at the cursor turns into."""

        if self.auto_indent:
            return self.indenter.closing_brace(self.text, self.cursor, brace)
        return IndentEdit(self.cursor, self.cursor, brace, self.cursor + len(brace))

    def insert_newline(self) -> DocumentView:
        return self.apply_edit(self.newline_edit(), label="insert_newline")

    def insert_closing_brace(self, brace: str) -> DocumentView:
        return self.apply_edit(self.closing_brace_edit(brace), label="insert_closing_brace")

    def apply_edit(self, edit: IndentEdit, *, label: str = "apply_edit") -> DocumentView:
        start = ensure_offset(self.text, edit.start)
        end = ensure_offset(self.text, edit.end)
        with Transaction(self, label):
            new_text = self.text[:start] + edit.text + self.text[end:]
            self._apply(new_text, edit.cursor)
            self.search.reset()
        return self.snapshot()

    def _apply(self, text: str, cursor: int) -> None:
        cursor = ensure_offset(text, cursor)
        self.text = text
        self.cursor = cursor
        self.selection = None
        self.version += 1
        self.scanner.scan(self.text, self.cursor)

    # -- search ------------------------------------------------------------

    def find(
        self,
        query: str,
        *,
        find_next: bool = False,
        case_sensitive: bool = False,
        whole_words: bool = False,
    ) -> SearchOutcome:
        outcome = self.search.find(
            self.text,
            query,
            find_next=find_next,
            case_sensitive=case_sensitive,
            whole_words=whole_words,
            cursor=self.cursor,
        )
        self._reflect(outcome)
        return outcome

    def replace(
        self,
        query: str,
        replacement: str,
        *,
        case_sensitive: bool = False,
        whole_words: bool = False,
    ) -> ReplaceResult:
        result = self.search.replace(
            self.text,
            query,
            replacement,
            case_sensitive=case_sensitive,
            whole_words=whole_words,
            cursor=self.cursor,
        )
        if result.match is None:
            self._reflect(NotFound(cursor=self.cursor))
            return result
        with Transaction(self, "replace"):
            self._apply(result.text, result.match.start + len(replacement))
        return result

    def replace_all(
        self,
        query: str,
        replacement: str,
        *,
        case_sensitive: bool = False,
        whole_words: bool = False,
    ) -> ReplaceResult:
        result = self.search.replace_all(
            self.text,
            query,
            replacement,
            case_sensitive=case_sensitive,
            whole_words=whole_words,
        )
        if result.changed:
            with Transaction(self, "replace_all"):
                self._apply(result.text, min(self.cursor, len(result.text)))
        return result

    def _reflect(self, outcome: SearchOutcome) -> None:
        if isinstance(outcome, Found):
            self.selection = (outcome.start, outcome.end)
            self.cursor = outcome.end
        else:
            self.selection = None
            self.cursor = outcome.cursor
        self.scanner.update_column(self.text, self.cursor)

    # -- braces ------------------------------------------------------------

    def brace_balanced_at(self, offset: int) -> bool:
        return self.braces.is_balanced(self.text, offset)

    def matching_brace(self, offset: int) -> Optional[int]:
        return self.braces.matching_brace_index(self.text, offset)

    def first_unbalanced_closing_brace(self) -> Optional[int]:
        return self.braces.first_unbalanced_closing_brace_index(self.text)


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps one document edit in a telemetry span."""

    def __init__(self, document: EditorDocument, label: str) -> None:
        self.document = document
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None
        self._before_version = document.version

    def __enter__(self) -> "Transaction":
        self._before_version = self.document.version
        self._span_cm = telemetry.span(
            name=f"document::{self.label}",
            component=True,
            metadata={"document": self.document.name},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            telemetry.record_event(
                "document.edit",
                level="debug",
                data={
                    "document": self.document.name,
                    "label": self.label,
                    "version": self.document.version,
                    "previous_version": self._before_version,
                },
            )
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["DocumentView", "EditorDocument", "Transaction"]
