"""Boundary types exchanged between the document buffer and host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol

from .source import Span


@dataclass(slots=True)
class DocumentMirror:
    """Host-friendly copy of the buffer: text, selection and version."""

    text: str
    selection: Optional[Span]
    version: int
    attributes: dict[str, str] = field(default_factory=dict)


class DocumentSync(Protocol):
    """How a host editing surface trades snapshots with the buffer."""

    def pull_document(self) -> DocumentMirror:
        """Return the latest state the host should display."""
        ...

    def push_host_edit(self, mirror: DocumentMirror) -> None:
        """Submit text typed or pasted in the host widget."""
        ...


class DocumentValidationError(RuntimeError):
    """Raised when a host supplies a span outside the current snapshot."""

    def __init__(self, message: str, *, span: Span | None = None) -> None:
        super().__init__(message)
        self.span = span


__all__ = ["DocumentMirror", "DocumentSync", "DocumentValidationError"]
