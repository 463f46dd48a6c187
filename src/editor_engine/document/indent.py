"""Auto-indent edits for newlines and closing braces."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from editor_engine.braces import BraceBalanceChecker

from .offsets import ensure_offset

INDENT_CHARS = " \t"


@dataclass(frozen=True, slots=True)
class IndentEdit:
    """Replace ``text[start:end]`` with ``text`` and put the cursor at ``cursor``."""

    start: int
    end: int
    text: str
    cursor: int


def _line_start(text: str, offset: int) -> int:
    return text.rfind("\n", 0, offset) + 1


def line_indent(text: str, offset: int) -> str:
    """Return the leading spaces and tabs of the line containing ``offset``."""

    start = _line_start(text, offset)
    end = start
    while end < len(text) and text[end] in INDENT_CHARS:
        end += 1
    return text[start:end]


class AutoIndenter:
    """Computes indentation for typed newlines and closing braces.

    A newline keeps the indentation of the current line and adds one
    ``unit`` after an opening brace. When the brace's closer directly
    follows the cursor, the closer moves to its own line. A closing brace
    typed on a blank line is aligned with the line of its opener.
    """

    def __init__(
        self, *, braces: Optional[BraceBalanceChecker] = None, unit: str = "    "
    ) -> None:
        if not unit or unit.strip(INDENT_CHARS):
            raise ValueError("indent unit must be a non-empty run of spaces or tabs")
        self.braces = braces or BraceBalanceChecker()
        self.unit = unit

    def newline(self, text: str, cursor: int) -> IndentEdit:
        ensure_offset(text, cursor)
        start = _line_start(text, cursor)
        base = line_indent(text, cursor)[: cursor - start]
        typed = text[start:cursor].rstrip(INDENT_CHARS)
        if not typed or not self.braces.is_opening(typed[-1]):
            insert = "\n" + base
            return IndentEdit(cursor, cursor, insert, cursor + len(insert))

        opener = start + len(typed) - 1
        inner = "\n" + base + self.unit
        closer = cursor
        while closer < len(text) and text[closer] in INDENT_CHARS:
            closer += 1
        if self.braces.matching_brace_index(text, opener) == closer:
            return IndentEdit(cursor, closer, inner + "\n" + base, cursor + len(inner))
        return IndentEdit(cursor, cursor, inner, cursor + len(inner))

    def closing_brace(self, text: str, cursor: int, brace: str) -> IndentEdit:
        ensure_offset(text, cursor)
        plain = IndentEdit(cursor, cursor, brace, cursor + len(brace))
        if not self.braces.is_closing(brace):
            return plain
        start = _line_start(text, cursor)
        if text[start:cursor].strip(INDENT_CHARS):
            return plain

        candidate = text[:cursor] + brace
        if self.braces.first_unbalanced_closing_brace_index(candidate) == cursor:
            return plain
        opener = self.braces.opening_brace_index(candidate, cursor)
        if opener is None:
            return plain
        indent = line_indent(text, opener)
        return IndentEdit(start, cursor, indent + brace, start + len(indent) + 1)


__all__ = ["AutoIndenter", "IndentEdit", "line_indent"]
