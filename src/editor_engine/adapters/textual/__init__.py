"""Textual host adapter; ``app`` holds the runnable demo."""

from .controller import (
    INVALID_LINE,
    FindRequest,
    TextualEditorAdapter,
    TextualUIHooks,
    describe_outcome,
    describe_replacement,
)

__all__ = [
    "INVALID_LINE",
    "FindRequest",
    "TextualEditorAdapter",
    "TextualUIHooks",
    "describe_outcome",
    "describe_replacement",
]
