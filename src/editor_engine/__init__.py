"""UI-agnostic document metrics, brace checking, and find/replace engine."""

__all__ = [
    "adapters",
    "braces",
    "document",
    "metrics",
    "runtime",
    "search",
]

__version__ = "0.1.0"
