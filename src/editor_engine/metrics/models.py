"""Value types produced by the metrics scanner."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True, slots=True)
class DocumentMetrics:
    """Snapshot of document counts; a new instance is produced per scan."""

    char_count: int = 0
    word_count: int = 0
    line_count: int = 0
    current_column: Optional[int] = None

    def __post_init__(self) -> None:
        for name in ("char_count", "word_count", "line_count"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative")
        if self.current_column is not None and self.current_column < 1:
            raise ValueError("current_column must be positive")

    def with_column(self, column: Optional[int]) -> "DocumentMetrics":
        return replace(self, current_column=column)

    def as_dict(self) -> dict[str, int | None]:
        return {
            "char_count": self.char_count,
            "word_count": self.word_count,
            "line_count": self.line_count,
            "current_column": self.current_column,
        }


__all__ = ["DocumentMetrics"]
