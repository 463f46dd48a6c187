"""Single-pass character classifier producing ``DocumentMetrics``."""

from __future__ import annotations

import unicodedata
from typing import Optional

from editor_engine.runtime import telemetry

from .models import DocumentMetrics

NEWLINE = "\n"
# control characters that still count as ordinary whitespace
WHITESPACE_CONTROLS = frozenset("\t\r\x0b\x0c")


def _classify(char: str) -> str:
    if char == NEWLINE:
        return "newline"
    if char.isalnum():
        return "alnum"
    if unicodedata.category(char) == "Cc" and char not in WHITESPACE_CONTROLS:
        # str.isspace also accepts the U+001C..U+001F separators and U+0085
        return "invalid"
    if char.isspace():
        return "space"
    if char.isprintable():
        return "symbol"
    return "invalid"


def _scan(text: str) -> tuple[int, int, int, Optional[int]]:
    """Return ``(chars, words, lines, stop_offset)`` for ``text``.

    ``stop_offset`` is the index of the first unsupported character, or
    ``None`` when the whole input was consumed.
    """

    chars = words = lines = 0
    in_word = False
    for index, char in enumerate(text):
        kind = _classify(char)
        if kind == "invalid":
            if in_word:
                words += 1
            return chars, words, lines, index

        if kind == "newline":
            lines += 1
        else:
            chars += 1

        if kind == "alnum":
            in_word = True
        elif kind in ("newline", "space") and in_word:
            words += 1
            in_word = False
        # symbols extend a word in progress but never start one

    if in_word:
        words += 1
    return chars, words, lines, None


def column_at(text: str, cursor: int) -> int:
    """Return the 1-based column of ``cursor`` within its line."""

    cursor = max(0, min(cursor, len(text)))
    line_start = text.rfind(NEWLINE, 0, cursor) + 1
    return cursor - line_start + 1


def scan(text: str, cursor: Optional[int] = None) -> DocumentMetrics:
    """Count characters, words and lines in ``text``.

    Newlines are counted as lines, not characters. Scanning stops quietly at
    the first control or otherwise non-printable character and returns what
    was accumulated up to that point. When ``cursor`` is given the snapshot
    also carries the cursor's column.
    """

    chars, words, lines, stop = _scan(text)
    if stop is not None:
        telemetry.record_event(
            "metrics.soft_stop",
            level="debug",
            data={"offset": stop, "codepoint": f"U+{ord(text[stop]):04X}"},
        )
    column = column_at(text, cursor) if cursor is not None else None
    return DocumentMetrics(
        char_count=chars,
        word_count=words,
        line_count=lines,
        current_column=column,
    )


class MetricsScanner:
    """Scans document text and keeps the latest snapshot for its owner."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._logger_name = logger_name
        self._last = DocumentMetrics()

    @property
    def last(self) -> DocumentMetrics:
        return self._last

    def scan(self, text: str, cursor: Optional[int] = None) -> DocumentMetrics:
        with telemetry.span(
            "metrics::scan",
            logger_name=self._logger_name,
            component="metrics",
            metadata={"length": len(text)},
        ) as handle:
            metrics = scan(text, cursor)
            handle.add_metadata("words", metrics.word_count)
        self._last = metrics
        return metrics

    def update_column(self, text: str, cursor: int) -> DocumentMetrics:
        """Refresh only the column of the cached snapshot."""

        self._last = self._last.with_column(column_at(text, cursor))
        return self._last


__all__ = ["MetricsScanner", "column_at", "scan"]
