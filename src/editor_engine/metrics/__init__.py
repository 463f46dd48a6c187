"""Character, word, line, and column metrics for document text."""

from .models import DocumentMetrics
from .scanner import MetricsScanner, column_at, scan

__all__ = [
    "DocumentMetrics",
    "MetricsScanner",
    "column_at",
    "scan",
]
