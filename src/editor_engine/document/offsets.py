"""Conversions between flat offsets and (row, column) locations."""

from __future__ import annotations

from typing import Tuple

Location = Tuple[int, int]  # (row, column), both 0-based
Selection = Tuple[int, int]  # (start offset, end offset)


class DocumentValidationError(RuntimeError):
    """Raised when hosts provide out-of-bounds offsets or locations."""

    def __init__(self, message: str, *, offset: int | Location | None = None) -> None:
        super().__init__(message)
        self.offset = offset


def ensure_offset(text: str, offset: int) -> int:
    if offset < 0 or offset > len(text):
        raise DocumentValidationError(
            f"Offset {offset} is outside a document of length {len(text)}",
            offset=offset,
        )
    return offset


def offset_to_location(text: str, offset: int) -> Location:
    ensure_offset(text, offset)
    row = text.count("\n", 0, offset)
    line_start = text.rfind("\n", 0, offset) + 1
    return (row, offset - line_start)


def location_to_offset(text: str, location: Location) -> int:
    row, col = location
    lines = text.split("\n")
    if row < 0 or row >= len(lines):
        raise DocumentValidationError("Row out of range", offset=location)
    if col < 0 or col > len(lines[row]):
        raise DocumentValidationError("Column out of range", offset=location)
    offset = 0
    for i in range(row):
        offset += len(lines[i]) + 1  # newline
    return offset + col


__all__ = [
    "DocumentValidationError",
    "Location",
    "Selection",
    "ensure_offset",
    "location_to_offset",
    "offset_to_location",
]
