"""UI-agnostic Markdown rendering and find/replace engine."""

__all__ = [
    "actions",
    "adapters",
    "document",
    "render",
    "runtime",
    "search",
]

__version__ = "0.1.0"
