"""Host-side document façade and offset helpers."""

from .document import DocumentView, EditorDocument, Transaction
from .indent import AutoIndenter, IndentEdit, line_indent
from .offsets import (
    DocumentValidationError,
    Location,
    Selection,
    ensure_offset,
    location_to_offset,
    offset_to_location,
)

__all__ = [
    "AutoIndenter",
    "DocumentValidationError",
    "DocumentView",
    "EditorDocument",
    "IndentEdit",
    "Location",
    "Selection",
    "Transaction",
    "ensure_offset",
    "line_indent",
    "location_to_offset",
    "offset_to_location",
]
