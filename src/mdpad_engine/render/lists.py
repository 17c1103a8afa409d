"""Nested ordered/unordered lists parsed by recursive descent on indentation."""

from __future__ import annotations

import re
from itertools import groupby
from operator import attrgetter
from typing import List, Sequence, Tuple

from mdpad_engine.runtime import telemetry

from .nodes import ListBlock, ListItem, ListKind

INDENT_STEP = 4
MAX_LIST_DEPTH = 16

_MARKER = re.compile(r"^[ \t]*([*+-]|\d+\.)[ \t]+(.*)$")


def indent_width(line: str) -> int:
    """Leading whitespace width with tabs counted as ``INDENT_STEP`` columns."""

    stripped = line.lstrip(" \t")
    leading = line[: len(line) - len(stripped)]
    return len(leading.replace("\t", " " * INDENT_STEP))


def is_list_line(line: str) -> bool:
    return _MARKER.match(line) is not None


def parse_list(
    lines: Sequence[str], base_indent: int, *, depth: int = 0
) -> Tuple[ListBlock, ...]:
    """Parse marker lines into list blocks.

    Lines indented no deeper than ``base_indent`` open items at this level;
    deeper lines belong to the item above them and are parsed again at
    ``base_indent + INDENT_STEP``. Deeper lines with no item above them are
    dropped. Adjacent items of a different kind start a new block.
    """

    items: List[ListItem] = []
    for line in lines:
        if indent_width(line) <= base_indent or depth >= MAX_LIST_DEPTH:
            match = _MARKER.match(line)
            if match is None:
                continue
            marker, content = match.groups()
            kind = ListKind.ORDERED if marker[0].isdigit() else ListKind.UNORDERED
            items.append(ListItem(kind=kind, content=content.strip()))
        elif items:
            items[-1].child_lines.append(line)
        else:
            telemetry.record_event(
                "render.list_orphan_dropped",
                level="debug",
                data={"indent": indent_width(line), "base_indent": base_indent},
            )

    for item in items:
        if item.child_lines:
            item.children = parse_list(
                item.child_lines, base_indent + INDENT_STEP, depth=depth + 1
            )

    return tuple(
        ListBlock(kind=kind, items=tuple(group))
        for kind, group in groupby(items, key=attrgetter("kind"))
    )


def render_list(block: ListBlock) -> str:
    tag = block.kind.value
    parts = [f"<{tag}>"]
    for item in block.items:
        children = "".join(render_list(child) for child in item.children)
        parts.append(f"<li>{item.content}{children}</li>")
    parts.append(f"</{tag}>")
    return "".join(parts)


def apply_lists(text: str) -> str:
    lines = text.split("\n")
    result: List[str] = []
    index = 0
    while index < len(lines):
        if not is_list_line(lines[index]):
            result.append(lines[index])
            index += 1
            continue
        end = index
        while end < len(lines) and is_list_line(lines[end]):
            end += 1
        run = lines[index:end]
        blocks = parse_list(run, indent_width(run[0]))
        result.append("\n\n" + "".join(render_list(block) for block in blocks) + "\n\n")
        index = end
    return "\n".join(result)
