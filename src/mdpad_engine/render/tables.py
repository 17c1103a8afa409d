"""Pipe tables: header row, alignment separator, contiguous body rows."""

from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from .nodes import Alignment, Table

_SEPARATOR_CELL = re.compile(r"^:?-+:?$")


def is_table_row(line: str) -> bool:
    stripped = line.strip()
    return len(stripped) > 1 and stripped.startswith("|")


def split_cells(line: str) -> List[str]:
    stripped = line.strip()
    if stripped.startswith("|"):
        stripped = stripped[1:]
    if stripped.endswith("|"):
        stripped = stripped[:-1]
    return [cell.strip() for cell in stripped.split("|")]


def parse_alignment(cell: str) -> Alignment:
    if cell.startswith(":") and cell.endswith(":") and len(cell) > 1:
        return Alignment.CENTER
    if cell.endswith(":"):
        return Alignment.RIGHT
    return Alignment.LEFT


def parse_alignments(separator: str) -> Optional[Tuple[Alignment, ...]]:
    """Column alignments from a separator row, or ``None`` if it is not one."""

    if not is_table_row(separator):
        return None
    cells = [cell.replace(" ", "") for cell in split_cells(separator)]
    if not cells or not all(_SEPARATOR_CELL.match(cell) for cell in cells):
        return None
    return tuple(parse_alignment(cell) for cell in cells)


def _fit(cells: Sequence[str], width: int, filler):
    fitted = list(cells[:width])
    fitted.extend([filler] * (width - len(fitted)))
    return tuple(fitted)


def parse_table(lines: Sequence[str], start: int) -> Optional[Tuple[Table, int]]:
    """Parse a table whose header is ``lines[start]``.

    Returns the table and the index of the first line after it. Rows with the
    wrong number of cells are padded or truncated to the header's width.
    """

    if start + 1 >= len(lines) or not is_table_row(lines[start]):
        return None
    alignments = parse_alignments(lines[start + 1])
    if alignments is None:
        return None

    header = tuple(split_cells(lines[start]))
    width = len(header)
    rows = []
    end = start + 2
    while end < len(lines) and is_table_row(lines[end]):
        rows.append(_fit(split_cells(lines[end]), width, ""))
        end += 1

    table = Table(
        header=header,
        alignments=_fit(alignments, width, Alignment.LEFT),
        rows=tuple(rows),
    )
    return table, end


def render_table(table: Table) -> str:
    styles = [f' style="text-align: {align.value}"' for align in table.alignments]
    parts = ["<table><thead><tr>"]
    parts.extend(f"<th{style}>{cell}</th>" for style, cell in zip(styles, table.header))
    parts.append("</tr></thead><tbody>")
    for row in table.rows:
        parts.append("<tr>")
        parts.extend(f"<td{style}>{cell}</td>" for style, cell in zip(styles, row))
        parts.append("</tr>")
    parts.append("</tbody></table>")
    return "".join(parts)


def apply_tables(text: str) -> str:
    lines = text.split("\n")
    result: List[str] = []
    index = 0
    while index < len(lines):
        parsed = parse_table(lines, index)
        if parsed is None:
            result.append(lines[index])
            index += 1
            continue
        table, index = parsed
        result.append(f"\n\n{render_table(table)}\n\n")
    return "\n".join(result)
