"""Toolbar formatting commands expressed as pure snapshot edits."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Dict, Optional

from mdpad_engine.document.buffer import DocumentBuffer, DocumentDelta
from mdpad_engine.document.source import SourceText, Span
from mdpad_engine.runtime import telemetry

INDENT = "    "
BULLET_PREFIX = "- "
ORDERED_PREFIX = "1. "

_HEADING = re.compile(r"^(#{1,6})\s")
_BULLET_LINE = re.compile(r"^\s*[*\-+]")
_ORDERED_LINE = re.compile(r"^\s*\d+\.")
_LIST_MARKER = re.compile(r"^\s*(?:[*\-+]|\d+\.)\s+")
_LINE_START = re.compile(r"^", re.MULTILINE)
_OUTDENT = re.compile(r"^(?:    |\t)", re.MULTILINE)

# Applied in order; images go before links so "![alt](url)" keeps only "alt".
_FORMATTING_MARKERS = (
    (re.compile(r"(\*\*|__)(.*?)\1"), r"\2"),
    (re.compile(r"(\*|_)(.*?)\1"), r"\2"),
    (re.compile(r"~~(.*?)~~"), r"\1"),
    (re.compile(r"`([^`]+)`"), r"\1"),
    (re.compile(r"!\[([^\]]*)\]\([^)]+\)"), r"\1"),
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),
    (re.compile(r"^#+\s+", re.MULTILINE), ""),
    (re.compile(r"^>\s+", re.MULTILINE), ""),
)


@dataclass(frozen=True, slots=True)
class Edit:
    source: SourceText
    selection: Span

    def changed_from(self, original: SourceText) -> bool:
        return self.source.text != original.text


def _splice(source: SourceText, span: Span, text: str, *, select: bool) -> Edit:
    updated = source.replace_span(span, text)
    if select:
        selection = Span(span.start, span.start + len(text))
    else:
        selection = Span.caret(span.start + len(text))
    return Edit(updated, selection)


def wrap_selection(source: SourceText, selection: Span, *, before: str, after: str) -> Edit:
    """Surround the selection with markers, or drop the caret between them."""

    selected = source.slice(selection)
    wrapped = before + selected + after
    updated = source.replace_span(selection, wrapped)
    if selected:
        return Edit(updated, Span(selection.start, selection.start + len(wrapped)))
    return Edit(updated, Span.caret(selection.start + len(before)))


def toggle_heading(source: SourceText, selection: Span, *, level: int) -> Edit:
    """Add, change or (same level) remove the heading marker of the current line."""

    if not 1 <= level <= 6:
        raise ValueError(f"heading level must be 1-6, got {level}")
    bounds = source.line_bounds(selection)
    line = source.slice(bounds)
    match = _HEADING.match(line)
    if match is None:
        new_line = "#" * level + " " + line
    else:
        existing = len(match.group(1))
        body = line[existing + 1 :]
        new_line = body if existing == level else "#" * level + " " + body
    return _splice(source, bounds, new_line, select=False)


def toggle_list(source: SourceText, selection: Span, *, prefix: str) -> Edit:
    """Prefix every touched line with ``prefix``, or strip markers if already a list.

    Whether the block is already a list is decided by its first line.
    """

    bounds = source.line_bounds(selection)
    lines = source.slice(bounds).split("\n")
    detector = _BULLET_LINE if prefix == BULLET_PREFIX else _ORDERED_LINE
    if detector.match(lines[0]):
        lines = [_LIST_MARKER.sub("", line, count=1) for line in lines]
    else:
        lines = [prefix + line for line in lines]
    return _splice(source, bounds, "\n".join(lines), select=True)


def indent_lines(source: SourceText, selection: Span) -> Edit:
    bounds = source.line_bounds(selection)
    return _splice(source, bounds, _LINE_START.sub(INDENT, source.slice(bounds)), select=True)


def outdent_lines(source: SourceText, selection: Span) -> Edit:
    bounds = source.line_bounds(selection)
    return _splice(source, bounds, _OUTDENT.sub("", source.slice(bounds)), select=True)


def table_template(cols: int, rows: int) -> str:
    if cols < 1 or rows < 1:
        raise ValueError(f"table needs at least one column and row, got {cols}x{rows}")
    lines = [
        "|" + "".join(f" Header {col} |" for col in range(1, cols + 1)),
        "|" + " -------- |" * cols,
    ]
    for row in range(1, rows + 1):
        lines.append("|" + "".join(f" Cell {row}-{col} |" for col in range(1, cols + 1)))
    return "\n".join(lines) + "\n"


def _at_line_start(source: SourceText, offset: int) -> bool:
    return source.text.rfind("\n", 0, offset) + 1 == offset


def insert_table(source: SourceText, selection: Span, *, cols: int = 2, rows: int = 2) -> Edit:
    prefix = "" if _at_line_start(source, selection.start) else "\n\n"
    return _splice(source, selection, prefix + table_template(cols, rows), select=False)


def insert_horizontal_rule(source: SourceText, selection: Span) -> Edit:
    prefix = "" if _at_line_start(source, selection.start) else "\n"
    caret = Span.caret(selection.start)
    return _splice(source, caret, prefix + "---\n", select=False)


def insert_link(
    source: SourceText, selection: Span, *, url: str, text: Optional[str] = None
) -> Edit:
    """Replace the selection with ``[text](url)``.

    The label falls back to the selected text, then to the url. Without a url
    nothing is inserted.
    """

    if not url:
        return Edit(source, selection)
    label = text or source.slice(selection) or url
    return _splice(source, selection, f"[{label}]({url})", select=False)


def insert_image(
    source: SourceText, selection: Span, *, url: str, text: Optional[str] = None
) -> Edit:
    if not url:
        return Edit(source, selection)
    alt = text or source.slice(selection) or "Image"
    return _splice(source, selection, f"![{alt}]({url})", select=False)


def remove_formatting(source: SourceText, selection: Span) -> Edit:
    selected = source.slice(selection)
    if not selected:
        return Edit(source, selection)
    for pattern, template in _FORMATTING_MARKERS:
        selected = pattern.sub(template, selected)
    return _splice(source, selection, selected, select=True)


CommandHandler = Callable[..., Edit]


@dataclass(frozen=True, slots=True)
class CommandResult:
    status: str
    command: str
    delta: Optional[DocumentDelta] = None
    message: Optional[str] = None


def apply_command(buffer: DocumentBuffer, name: str, **args: Any) -> CommandResult:
    """Run the formatting command ``name`` against the buffer's selection."""

    handler = _COMMAND_HANDLERS.get(name)
    if handler is None:
        return _command_error(buffer, name, f"unknown command '{name}'")

    source = buffer.snapshot()
    selection = buffer.selection or Span.caret(buffer.state.caret)
    if not source.contains(selection):
        selection = Span.caret(len(source))
    try:
        edit = handler(source, selection, **args)
    except (TypeError, ValueError) as exc:
        return _command_error(buffer, name, str(exc))

    if not edit.changed_from(source):
        return CommandResult(status="command_noop", command=name)
    delta = buffer.install(edit.source, edit.selection, label=name)
    buffer.bus.emit("command.applied", name)
    return CommandResult(status="command_applied", command=name, delta=delta)


def _command_error(buffer: DocumentBuffer, name: str, message: str) -> CommandResult:
    buffer.bus.emit("command.error", name)
    telemetry.record_event(
        "command.error", level="warning", data={"command": name, "reason": message}
    )
    return CommandResult(status="command_error", command=name, message=message)


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "bold": partial(wrap_selection, before="**", after="**"),
    "italic": partial(wrap_selection, before="*", after="*"),
    "strike": partial(wrap_selection, before="~~", after="~~"),
    "code": partial(wrap_selection, before="`", after="`"),
    "wrap": wrap_selection,
    "link": insert_link,
    "image": insert_image,
    "bullet_list": partial(toggle_list, prefix=BULLET_PREFIX),
    "ordered_list": partial(toggle_list, prefix=ORDERED_PREFIX),
    "indent": indent_lines,
    "outdent": outdent_lines,
    "table": insert_table,
    "rule": insert_horizontal_rule,
    "clear_formatting": remove_formatting,
}
_COMMAND_HANDLERS.update(
    {f"h{level}": partial(toggle_heading, level=level) for level in range(1, 7)}
)

COMMAND_NAMES = tuple(sorted(_COMMAND_HANDLERS))


__all__ = [
    "COMMAND_NAMES",
    "CommandResult",
    "Edit",
    "apply_command",
    "indent_lines",
    "insert_horizontal_rule",
    "insert_image",
    "insert_link",
    "insert_table",
    "outdent_lines",
    "remove_formatting",
    "table_template",
    "toggle_heading",
    "toggle_list",
    "wrap_selection",
]
