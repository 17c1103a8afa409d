"""Document snapshots, the host-side buffer, undo and query histories."""

from .buffer import DocumentBuffer, DocumentDelta, Transaction
from .history import QueryHistory
from .source import Position, SourceText, Span, normalize_newlines
from .state import DocumentState
from .stats import DocumentStats, compute_stats
from .sync import DocumentMirror, DocumentSync, DocumentValidationError
from .undo import UndoEntry, UndoStack
from .validation import ensure_span

__all__ = [
    "DocumentBuffer",
    "DocumentDelta",
    "DocumentMirror",
    "DocumentState",
    "DocumentStats",
    "DocumentSync",
    "DocumentValidationError",
    "Position",
    "QueryHistory",
    "SourceText",
    "Span",
    "Transaction",
    "UndoEntry",
    "UndoStack",
    "compute_stats",
    "ensure_span",
    "normalize_newlines",
]
